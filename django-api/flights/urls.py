from django.urls import path

from flights.handlers import (
    AssignSeatView,
    BookingView,
    FlightDetailView,
    FlightListView,
    FlightStatusView,
    HolderTicketView,
    OwnTicketView,
    RegulatorView,
    SeatCountView,
    SeatDetailView,
    SeatListView,
    SeatPriceView,
)

urlpatterns = [
    path("flights", FlightListView.as_view(), name="flight-list"),
    path("flights/<str:flight_id>", FlightDetailView.as_view(), name="flight-detail"),
    path("flights/<str:flight_id>/seat-count", SeatCountView.as_view(), name="flight-seat-count"),
    path("flights/<str:flight_id>/seat-price", SeatPriceView.as_view(), name="flight-seat-price"),
    path("flights/<str:flight_id>/regulator", RegulatorView.as_view(), name="flight-regulator"),
    path("flights/<str:flight_id>/seats", SeatListView.as_view(), name="seat-list"),
    path("flights/<str:flight_id>/seats/<int:index>", SeatDetailView.as_view(), name="seat-detail"),
    path(
        "flights/<str:flight_id>/seats/<int:index>/assign",
        AssignSeatView.as_view(),
        name="seat-assign",
    ),
    path(
        "flights/<str:flight_id>/status/<str:action>",
        FlightStatusView.as_view(),
        name="flight-status",
    ),
    path("flights/<str:flight_id>/bookings", BookingView.as_view(), name="booking-list"),
    path("flights/<str:flight_id>/ticket", OwnTicketView.as_view(), name="own-ticket"),
    path(
        "flights/<str:flight_id>/tickets/<str:holder>",
        HolderTicketView.as_view(),
        name="holder-ticket",
    ),
]
