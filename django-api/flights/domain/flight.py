"""Flight aggregate: status machine, seat allocation and settlement.

Every mutating method checks all of its preconditions before it writes
anything, so a raised DomainError always leaves the flight unchanged.
"""

from collections.abc import Callable, Iterable
from typing import Self

from flights.domain.access import Roles, is_regulator, require_administrator
from flights.domain.errors import (
    AlreadyAssignedError,
    DuplicateTicketError,
    IncorrectPaymentError,
    InsufficientInventoryError,
    InvalidQuantityError,
    InvalidTransitionError,
    LastSeatError,
    NoTicketError,
    SelfAssignmentError,
    UnauthorizedError,
)
from flights.domain.inventory import SeatInventory, SkippedSeatPool
from flights.domain.ledger import TicketLedger
from flights.domain.models import (
    BookingReceipt,
    FlightDetails,
    FlightStatus,
    Seat,
    Settlement,
    Ticket,
)
from flights.domain.value_objects import Address, Capacity, FlightId, Money

Payout = Callable[[Address, Money], None]

_NEXT_STATUS = {
    FlightStatus.PRESALE: FlightStatus.SALE,
    FlightStatus.SALE: FlightStatus.LANDED,
    FlightStatus.LANDED: FlightStatus.CLOSED,
}


class Flight:
    """A single flight's seat inventory, ticket ledger and held funds."""

    def __init__(self, flight_id: FlightId, administrator: Address, flight_number: str = "") -> None:
        self.id = flight_id
        self.flight_number = flight_number
        # Storage revision this instance was loaded at; 0 until first saved.
        self.version = 0
        self._roles = Roles(administrator=administrator)
        self._seat_count = Capacity(0)
        self._seat_price = Money.zero()
        self._status = FlightStatus.PRESALE
        self._balance = Money.zero()
        self._inventory = SeatInventory()
        self._skipped = SkippedSeatPool()
        self._ledger = TicketLedger()

    @classmethod
    def restore(
        cls,
        *,
        flight_id: FlightId,
        administrator: Address,
        flight_number: str,
        regulator: Address | None,
        seat_count: Capacity,
        seat_price: Money,
        status: FlightStatus,
        balance: Money,
        seats: Iterable[Seat],
        tickets: Iterable[Ticket],
        skipped: Iterable[int],
        version: int = 0,
    ) -> Self:
        """Rebuild a flight from persisted state."""
        flight = cls(flight_id, administrator, flight_number)
        flight._roles = Roles(administrator=administrator, regulator=regulator)
        flight._seat_count = seat_count
        flight._seat_price = seat_price
        flight._status = status
        flight._balance = balance
        flight._inventory = SeatInventory(seats)
        flight._ledger = TicketLedger(tickets)
        flight._skipped = SkippedSeatPool(skipped)
        flight.version = version
        return flight

    # Reads

    @property
    def administrator(self) -> Address:
        return self._roles.administrator

    @property
    def regulator(self) -> Address | None:
        return self._roles.regulator

    @property
    def seat_count(self) -> Capacity:
        return self._seat_count

    @property
    def seat_price(self) -> Money:
        return self._seat_price

    @property
    def status(self) -> FlightStatus:
        return self._status

    @property
    def balance(self) -> Money:
        return self._balance

    def is_regulator(self, identity: Address) -> bool:
        return is_regulator(identity, self._roles)

    def seat(self, index: int) -> Seat:
        return self._inventory.get(index)

    def seats(self) -> tuple[Seat, ...]:
        return self._inventory.all()

    def tickets(self) -> tuple[Ticket, ...]:
        return self._ledger.all()

    def skipped_seats(self) -> tuple[int, ...]:
        return self._skipped.all()

    def skipped_seat_count(self) -> int:
        return len(self._skipped)

    def ticket_holders(self) -> tuple[Address, ...]:
        return self._ledger.holders()

    def ticket_for(self, holder: Address) -> Ticket:
        """Return the holder's most recent ticket, cancelled or not.

        Raises:
            NoTicketError: If the identity never held a ticket.
        """
        ticket = self._ledger.latest_ticket(holder)
        if ticket is None:
            raise NoTicketError(str(holder))
        return ticket

    def details(self) -> FlightDetails:
        return FlightDetails(
            id=self.id,
            flight_number=self.flight_number,
            administrator=self.administrator,
            regulator=self.regulator,
            seat_count=self._seat_count,
            seat_price=self._seat_price,
            status=self._status,
            balance=self._balance,
            loaded_seats=len(self._inventory),
            skipped_seat_count=len(self._skipped),
            ticket_holders=self._ledger.holders(),
        )

    # Administration

    def authorize_administrator(self, caller: Address) -> None:
        """Raises:
        UnauthorizedError: If the caller is not the administrator.
        """
        require_administrator(caller, self._roles)

    def set_seat_count(self, caller: Address, seat_count: Capacity) -> None:
        require_administrator(caller, self._roles)
        self._seat_count = seat_count

    def set_seat_price(self, caller: Address, seat_price: Money) -> None:
        require_administrator(caller, self._roles)
        self._seat_price = seat_price

    def add_regulator(self, caller: Address, regulator: Address) -> None:
        require_administrator(caller, self._roles)
        self._roles = Roles(administrator=self.administrator, regulator=regulator)

    def load_seat(self, caller: Address, number: str, description: str) -> int:
        """Append a seat and return its index.

        Raises:
            UnauthorizedError: If the caller is not the administrator.
            InvalidTransitionError: If sales have already opened.
        """
        require_administrator(caller, self._roles)
        if self._status is not FlightStatus.PRESALE:
            raise InvalidTransitionError(self._status.label, "load a seat")
        return self._inventory.load(number, description)

    # Status machine

    def enable(self, caller: Address) -> None:
        """Open sales: Presale -> Sale.

        Raises:
            UnauthorizedError: If the caller is not the administrator.
            InvalidTransitionError: If not in Presale, no regulator is set,
                or the loaded seats do not match a non-zero seat count.
        """
        require_administrator(caller, self._roles)
        self._require_next(FlightStatus.SALE, "enable flight")
        if self.regulator is None:
            raise InvalidTransitionError(self._status.label, "enable flight", "no regulator configured")
        if self._seat_count.value == 0:
            raise InvalidTransitionError(self._status.label, "enable flight", "seat count is zero")
        if len(self._inventory) != self._seat_count.value:
            raise InvalidTransitionError(
                self._status.label,
                "enable flight",
                f"{len(self._inventory)} seats loaded but {self._seat_count.value} declared",
            )
        self._status = FlightStatus.SALE

    def land(self, caller: Address) -> None:
        require_administrator(caller, self._roles)
        self._require_next(FlightStatus.LANDED, "land flight")
        self._status = FlightStatus.LANDED

    def finalise(self, caller: Address, payout: Payout) -> Settlement:
        """Close the flight and forward the held balance to the administrator.

        ``payout`` runs before any state changes; if it raises, the flight
        stays Landed with its balance intact.

        Raises:
            UnauthorizedError: If the caller is not the administrator.
            InvalidTransitionError: If the flight has not landed.
            SettlementFailedError: If the payout could not be made.
        """
        require_administrator(caller, self._roles)
        self._require_next(FlightStatus.CLOSED, "finalise flight")
        settlement = Settlement(payee=self.administrator, amount=self._balance)
        payout(settlement.payee, settlement.amount)
        self._balance = Money.zero()
        self._status = FlightStatus.CLOSED
        return settlement

    def _require_next(self, target: FlightStatus, action: str) -> None:
        if _NEXT_STATUS.get(self._status) is not target:
            raise InvalidTransitionError(self._status.label, action)

    # Booking

    def book(self, caller: Address, seat_count: int, payment: Money) -> BookingReceipt:
        """Sell ``seat_count`` seats to the caller as one ticket.

        Raises, first failing check wins:
            InvalidTransitionError: If the flight is not on sale.
            InvalidQuantityError: If fewer than one seat is requested.
            DuplicateTicketError: If the caller already holds a ticket.
            IncorrectPaymentError: If payment is not exactly the price.
            InsufficientInventoryError: If not enough seats are free.
        """
        self._require_sale("book")
        if seat_count < 1:
            raise InvalidQuantityError(seat_count)
        if self._ledger.holds_ticket(caller):
            raise DuplicateTicketError(str(caller))
        required = self._seat_price.times(seat_count)
        if payment != required:
            raise IncorrectPaymentError(required=str(required), received=str(payment))
        indices = self._choose_seats(seat_count)

        for index in indices:
            self._skipped.discard(index)
            self._inventory.assign(index, caller)
        ticket = self._ledger.issue(caller, indices, payment)
        self._balance = self._balance + payment
        return BookingReceipt(
            reference=ticket.reference,
            ticket_number=ticket.number,
            holder=caller,
            seat_indices=ticket.seat_indices,
            amount_paid=payment,
        )

    def cancel_ticket(self, caller: Address) -> Ticket:
        """Free all of the caller's seats. No refund is issued.

        Raises:
            InvalidTransitionError: If the flight is not on sale.
            NoTicketError: If the caller holds no active ticket.
        """
        self._require_sale("cancel ticket")
        ticket = self._ledger.active_ticket(caller)
        if ticket is None:
            raise NoTicketError(str(caller))

        for index in ticket.seat_indices:
            self._inventory.free(index)
            self._skipped.add(index)
        return self._ledger.cancel(caller)

    def assign_seat(self, caller: Address, seat_index: int, new_occupant: Address) -> Ticket:
        """Move one of the caller's seats onto a new ticket for ``new_occupant``.

        Raises:
            InvalidTransitionError: If the flight is not on sale.
            NoTicketError: If the caller holds no active ticket.
            SeatNotFoundError: If the seat index does not exist.
            UnauthorizedError: If the seat is not on the caller's ticket.
            SelfAssignmentError: If ``new_occupant`` is the caller.
            AlreadyAssignedError: If ``new_occupant`` already holds a ticket.
            LastSeatError: If it is the caller's only seat.
        """
        self._require_sale("assign seat")
        ticket = self._ledger.active_ticket(caller)
        if ticket is None:
            raise NoTicketError(str(caller))
        seat = self._inventory.get(seat_index)
        if seat.index not in ticket.seat_indices:
            raise UnauthorizedError(caller=str(caller), role="holder of this seat")
        if new_occupant == caller:
            raise SelfAssignmentError()
        if self._ledger.holds_ticket(new_occupant):
            raise AlreadyAssignedError(str(new_occupant))
        if len(ticket.seat_indices) == 1:
            raise LastSeatError(seat_index)

        self._ledger.remove_seat(caller, seat_index)
        self._inventory.assign(seat_index, new_occupant)
        return self._ledger.issue(new_occupant, (seat_index,), Money.zero())

    def _require_sale(self, action: str) -> None:
        if self._status is not FlightStatus.SALE:
            raise InvalidTransitionError(self._status.label, action)

    def _choose_seats(self, count: int) -> list[int]:
        # Freed seats first, oldest first, then untouched seats by index.
        chosen = self._skipped.oldest(count)
        if len(chosen) < count:
            chosen += self._inventory.free_indices(count - len(chosen), exclude=chosen)
        if len(chosen) < count:
            raise InsufficientInventoryError(requested=count, available=self._inventory.free_count())
        return chosen
