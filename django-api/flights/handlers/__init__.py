from flights.handlers.views import (
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

__all__ = [
    "AssignSeatView",
    "BookingView",
    "FlightDetailView",
    "FlightListView",
    "FlightStatusView",
    "HolderTicketView",
    "OwnTicketView",
    "RegulatorView",
    "SeatCountView",
    "SeatDetailView",
    "SeatListView",
    "SeatPriceView",
]
