"""Domain models representing flight ledger state.

These are immutable projections handed out by the Flight aggregate.
Django ORM models are in flights/models.py (persistence layer).
"""

from dataclasses import dataclass
from enum import IntEnum

from flights.domain.value_objects import Address, Capacity, FlightId, Money


class FlightStatus(IntEnum):
    """Lifecycle of a flight. Values only ever increase."""

    PRESALE = 0
    SALE = 1
    LANDED = 2
    CLOSED = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()


@dataclass(frozen=True)
class Seat:
    """Domain representation of a Seat."""

    index: int
    number: str
    description: str
    assigned: bool = False
    occupant: Address | None = None


@dataclass(frozen=True)
class Ticket:
    """Domain representation of a Ticket.

    Cancelled tickets stay in the ledger with ``cancelled`` set.
    """

    number: int
    holder: Address
    seat_indices: tuple[int, ...]
    amount_paid: Money
    reference: str
    cancelled: bool = False


@dataclass(frozen=True)
class BookingReceipt:
    """Proof of booking returned to the buyer."""

    reference: str
    ticket_number: int
    holder: Address
    seat_indices: tuple[int, ...]
    amount_paid: Money


@dataclass(frozen=True)
class Settlement:
    """Funds forwarded to the administrator when a flight closes."""

    payee: Address
    amount: Money


@dataclass(frozen=True)
class FlightDetails:
    """Public read model of a flight."""

    id: FlightId
    flight_number: str
    administrator: Address
    regulator: Address | None
    seat_count: Capacity
    seat_price: Money
    status: FlightStatus
    balance: Money
    loaded_seats: int
    skipped_seat_count: int
    ticket_holders: tuple[Address, ...] = ()
