from flights.domain.flight import Flight
from flights.domain.models import BookingReceipt, FlightDetails, FlightStatus, Seat, Settlement, Ticket
from flights.domain.value_objects import Address, Capacity, FlightId, Money

__all__ = [
    "Flight",
    "FlightStatus",
    "FlightDetails",
    "Seat",
    "Ticket",
    "BookingReceipt",
    "Settlement",
    "FlightId",
    "Address",
    "Money",
    "Capacity",
]
