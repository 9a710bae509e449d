"""Flight service - all business orchestration lives here.

Services:
- Depend only on interfaces (stores)
- Serialise every mutation of a flight behind that flight's lock
- Parse raw identifiers into domain primitives
- Return domain models or raise domain errors
"""

import logging
import threading
import weakref
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from decimal import Decimal
from typing import TypeVar

from flights.domain import (
    Address,
    BookingReceipt,
    Capacity,
    Flight,
    FlightDetails,
    FlightId,
    FlightStatus,
    Money,
    Seat,
    Settlement,
    Ticket,
)
from flights.domain.errors import DomainError, FlightNotFoundError, InvalidFlightIdError
from flights.stores.interfaces import FlightStore, PayoutGateway

logger = logging.getLogger(__name__)

T = TypeVar("T")


def parse_flight_id(flight_id: str) -> FlightId:
    """Raises:
    InvalidFlightIdError: If the flight_id is not a valid UUID.
    """
    try:
        return FlightId.from_string(flight_id)
    except (ValueError, AttributeError, TypeError) as exc:
        raise InvalidFlightIdError() from exc


class FlightService:
    """Service for flight ledger operations."""

    def __init__(self, store: FlightStore, payouts: PayoutGateway) -> None:
        self._store = store
        self._payouts = payouts
        # Entries vanish once no operation holds the flight's lock.
        self._locks: weakref.WeakValueDictionary[FlightId, threading.Lock] = weakref.WeakValueDictionary()
        self._locks_guard = threading.Lock()

    # Creation and reads

    def create_flight(self, administrator: Address, flight_number: str = "") -> FlightId:
        flight = Flight(FlightId.new(), administrator, flight_number)
        with self._store.atomic():
            self._store.save(flight)
        logger.info("Flight %s (%s) created by %s", flight.id, flight_number, administrator)
        return flight.id

    def get_flight(self, flight_id: str) -> FlightDetails:
        """Return public details of a flight.

        Raises:
            InvalidFlightIdError: If the flight_id is not a valid UUID.
            FlightNotFoundError: If the flight does not exist.
        """
        return self._load(parse_flight_id(flight_id)).details()

    def get_status(self, flight_id: str) -> FlightStatus:
        return self._load(parse_flight_id(flight_id)).status

    def is_regulator(self, flight_id: str, identity: Address) -> bool:
        return self._load(parse_flight_id(flight_id)).is_regulator(identity)

    def get_seat(self, flight_id: str, seat_index: int) -> Seat:
        return self._load(parse_flight_id(flight_id)).seat(seat_index)

    def list_seats(self, flight_id: str) -> list[Seat]:
        return list(self._load(parse_flight_id(flight_id)).seats())

    def get_ticket(self, flight_id: str, holder: Address) -> Ticket:
        """Return the holder's most recent ticket.

        Raises:
            NoTicketError: If the identity never held a ticket on this flight.
        """
        return self._load(parse_flight_id(flight_id)).ticket_for(holder)

    def skipped_seat_count(self, flight_id: str) -> int:
        return self._load(parse_flight_id(flight_id)).skipped_seat_count()

    def ticket_holders(self, flight_id: str) -> list[Address]:
        return list(self._load(parse_flight_id(flight_id)).ticket_holders())

    def balance_of(self, identity: Address) -> Money:
        return self._payouts.balance_of(identity)

    # Administration

    def set_seat_count(self, flight_id: str, caller: Address, seat_count: int) -> None:
        def apply(flight: Flight) -> None:
            flight.authorize_administrator(caller)
            flight.set_seat_count(caller, Capacity(seat_count))

        self._mutate(flight_id, caller, "set seat count", apply)

    def set_seat_price(self, flight_id: str, caller: Address, seat_price: Decimal) -> None:
        def apply(flight: Flight) -> None:
            flight.authorize_administrator(caller)
            flight.set_seat_price(caller, Money(seat_price))

        self._mutate(flight_id, caller, "set seat price", apply)

    def add_regulator(self, flight_id: str, caller: Address, regulator: Address) -> None:
        self._mutate(flight_id, caller, "add regulator", lambda f: f.add_regulator(caller, regulator))

    def load_seat(self, flight_id: str, caller: Address, number: str, description: str) -> int:
        return self._mutate(
            flight_id, caller, "load seat", lambda f: f.load_seat(caller, number, description)
        )

    def enable_flight(self, flight_id: str, caller: Address) -> None:
        self._mutate(flight_id, caller, "enable flight", lambda f: f.enable(caller))

    def land_flight(self, flight_id: str, caller: Address) -> None:
        self._mutate(flight_id, caller, "land flight", lambda f: f.land(caller))

    def finalise_flight(self, flight_id: str, caller: Address) -> Settlement:
        """Close a landed flight and pay its balance to the administrator.

        Raises:
            SettlementFailedError: If the payout gateway rejects the transfer.
        """
        return self._mutate(
            flight_id, caller, "finalise flight", lambda f: f.finalise(caller, self._payouts.transfer)
        )

    # Customers

    def book(self, flight_id: str, caller: Address, seat_count: int, payment: Decimal) -> BookingReceipt:
        return self._mutate(flight_id, caller, "book", lambda f: f.book(caller, seat_count, Money(payment)))

    def cancel_ticket(self, flight_id: str, caller: Address) -> Ticket:
        return self._mutate(flight_id, caller, "cancel ticket", lambda f: f.cancel_ticket(caller))

    def assign_seat(self, flight_id: str, caller: Address, seat_index: int, new_occupant: Address) -> Ticket:
        return self._mutate(
            flight_id, caller, "assign seat", lambda f: f.assign_seat(caller, seat_index, new_occupant)
        )

    # Internals

    def _load(self, flight_id: FlightId, for_update: bool = False) -> Flight:
        flight = self._store.get_for_update(flight_id) if for_update else self._store.get(flight_id)
        if flight is None:
            raise FlightNotFoundError(str(flight_id))
        return flight

    @contextmanager
    def _locked(self, flight_id: FlightId) -> Iterator[None]:
        with self._locks_guard:
            lock = self._locks.get(flight_id)
            if lock is None:
                lock = self._locks[flight_id] = threading.Lock()
        with lock:
            yield

    def _mutate(self, flight_id: str, caller: Address, action: str, operation: Callable[[Flight], T]) -> T:
        parsed = parse_flight_id(flight_id)
        with self._locked(parsed):
            try:
                with self._store.atomic():
                    flight = self._load(parsed, for_update=True)
                    result = operation(flight)
                    self._store.save(flight)
            except DomainError as exc:
                logger.warning("Flight %s: %s by %s rejected (%s)", parsed, action, caller, exc.code.value)
                raise
        logger.info("Flight %s: %s by %s committed", parsed, action, caller)
        return result
