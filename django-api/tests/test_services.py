"""Unit tests for FlightService.

These test orchestration, error mapping, logging and per-flight locking
against the in-memory stores.
Run with: pytest tests/test_services.py -v
"""

import gc
import logging
import threading
from decimal import Decimal

import pytest

from flights.domain import Address, FlightStatus, Money
from flights.domain.errors import (
    DuplicateTicketError,
    FlightNotFoundError,
    IncorrectPaymentError,
    InsufficientInventoryError,
    InvalidFlightIdError,
    InvalidTransitionError,
    SettlementFailedError,
    UnauthorizedError,
)
from flights.services import FlightService
from flights.stores.memory_store import InMemoryFlightStore, InMemoryPayoutGateway


class FailingPayoutGateway(InMemoryPayoutGateway):
    def transfer(self, payee: Address, amount: Money) -> None:
        raise SettlementFailedError(str(payee), str(amount))


def open_flight(service: FlightService, administrator: Address, regulator: Address, seats: int = 2) -> str:
    flight_id = str(service.create_flight(administrator, "JQ570"))
    service.set_seat_count(flight_id, administrator, seats)
    for row in range(1, seats + 1):
        service.load_seat(flight_id, administrator, f"{row}A", "Window Seat")
    service.set_seat_price(flight_id, administrator, Decimal("5"))
    service.add_regulator(flight_id, administrator, regulator)
    service.enable_flight(flight_id, administrator)
    return flight_id


class TestFlightLookup:
    """Tests for flight id parsing and lookup."""

    def test_get_flight_invalid_id_raises_error(self, service: FlightService):
        """get_flight raises InvalidFlightIdError for malformed UUID."""
        with pytest.raises(InvalidFlightIdError):
            service.get_flight("not-a-uuid")

    def test_get_flight_not_found_raises_error(self, service: FlightService):
        """get_flight raises FlightNotFoundError when store returns None."""
        with pytest.raises(FlightNotFoundError):
            service.get_flight("8c1f3f0e-7f7a-4d62-9b8e-1d1a2f3b4c5d")

    def test_mutation_on_unknown_flight(self, service: FlightService, administrator: Address):
        with pytest.raises(FlightNotFoundError):
            service.set_seat_count("8c1f3f0e-7f7a-4d62-9b8e-1d1a2f3b4c5d", administrator, 2)

    def test_created_flight_is_readable(self, service: FlightService, administrator: Address):
        flight_id = str(service.create_flight(administrator, "JQ570"))
        details = service.get_flight(flight_id)
        assert details.administrator == administrator
        assert details.flight_number == "JQ570"
        assert service.get_status(flight_id) is FlightStatus.PRESALE


class TestAdministration:
    """Role checks run before argument validation."""

    def test_non_admin_negative_seat_count_is_unauthorized(
        self, service: FlightService, administrator: Address, customer: Address
    ):
        flight_id = str(service.create_flight(administrator))
        with pytest.raises(UnauthorizedError):
            service.set_seat_count(flight_id, customer, -1)

    def test_non_admin_negative_seat_price_is_unauthorized(
        self, service: FlightService, administrator: Address, customer: Address
    ):
        flight_id = str(service.create_flight(administrator))
        with pytest.raises(UnauthorizedError):
            service.set_seat_price(flight_id, customer, Decimal("-1"))

    def test_admin_negative_seat_count_is_rejected(self, service: FlightService, administrator: Address):
        flight_id = str(service.create_flight(administrator))
        with pytest.raises(ValueError):
            service.set_seat_count(flight_id, administrator, -1)
        assert service.get_flight(flight_id).seat_count.value == 0


class TestBookingScenarios:
    """End-to-end scenarios through the service."""

    def test_book_then_duplicate(self, service: FlightService, administrator, regulator, customer):
        flight_id = open_flight(service, administrator, regulator)
        receipt = service.book(flight_id, customer, 2, Decimal("10"))
        assert receipt.reference
        with pytest.raises(DuplicateTicketError):
            service.book(flight_id, customer, 2, Decimal("10"))

    def test_wrong_payment_leaves_no_seats(self, service: FlightService, administrator, regulator, other_customer):
        flight_id = open_flight(service, administrator, regulator)
        with pytest.raises(IncorrectPaymentError):
            service.book(flight_id, other_customer, 2, Decimal("5"))
        assert not any(seat.occupant == other_customer for seat in service.list_seats(flight_id))

    def test_declared_count_mismatch_blocks_enable(self, service: FlightService, administrator, regulator):
        flight_id = str(service.create_flight(administrator))
        service.set_seat_count(flight_id, administrator, 5)
        service.load_seat(flight_id, administrator, "1A", "Window")
        service.load_seat(flight_id, administrator, "1B", "Aisle")
        service.add_regulator(flight_id, administrator, regulator)
        with pytest.raises(InvalidTransitionError):
            service.enable_flight(flight_id, administrator)

    def test_cancel_and_reuse(self, service: FlightService, administrator, regulator, customer, other_customer):
        flight_id = open_flight(service, administrator, regulator)
        service.book(flight_id, customer, 1, Decimal("5"))
        service.cancel_ticket(flight_id, customer)
        assert service.skipped_seat_count(flight_id) == 1

        receipt = service.book(flight_id, other_customer, 1, Decimal("5"))
        assert receipt.seat_indices == (0,)
        assert service.get_ticket(flight_id, customer).cancelled
        assert service.ticket_holders(flight_id) == [other_customer]

    def test_assign_seat(self, service: FlightService, administrator, regulator, customer, other_customer):
        flight_id = open_flight(service, administrator, regulator)
        service.book(flight_id, customer, 2, Decimal("10"))
        ticket = service.assign_seat(flight_id, customer, 1, other_customer)
        assert ticket.holder == other_customer
        assert service.get_seat(flight_id, 1).occupant == other_customer


class TestSettlement:
    """Tests for finalise_flight()."""

    def test_finalise_while_on_sale_fails(self, service: FlightService, administrator, regulator):
        flight_id = open_flight(service, administrator, regulator)
        with pytest.raises(InvalidTransitionError):
            service.finalise_flight(flight_id, administrator)
        assert service.get_status(flight_id) is FlightStatus.SALE

    def test_finalise_pays_administrator(self, service: FlightService, administrator, regulator, customer):
        flight_id = open_flight(service, administrator, regulator)
        service.book(flight_id, customer, 2, Decimal("10"))
        before = service.balance_of(administrator)
        held = service.get_flight(flight_id).balance
        service.land_flight(flight_id, administrator)

        settlement = service.finalise_flight(flight_id, administrator)

        assert settlement.amount == held
        assert service.balance_of(administrator) == before + held
        assert service.get_flight(flight_id).balance == Money.zero()
        assert service.get_status(flight_id) is FlightStatus.CLOSED

    def test_failed_payout_keeps_flight_landed(self, administrator, regulator, customer):
        service = FlightService(store=InMemoryFlightStore(), payouts=FailingPayoutGateway())
        flight_id = open_flight(service, administrator, regulator)
        service.book(flight_id, customer, 1, Decimal("5"))
        service.land_flight(flight_id, administrator)

        with pytest.raises(SettlementFailedError):
            service.finalise_flight(flight_id, administrator)
        details = service.get_flight(flight_id)
        assert details.status is FlightStatus.LANDED
        assert details.balance == Money(Decimal("5"))


class TestLogging:
    """Committed and rejected mutations are logged."""

    def test_rejection_logged_with_code(self, service: FlightService, administrator, customer, caplog):
        flight_id = str(service.create_flight(administrator))
        with caplog.at_level(logging.WARNING, logger="flights"):
            with pytest.raises(InvalidTransitionError):
                service.book(flight_id, customer, 1, Decimal("0"))
        assert "INVALID_TRANSITION" in caplog.text

    def test_commit_logged(self, service: FlightService, administrator, caplog):
        flight_id = str(service.create_flight(administrator))
        with caplog.at_level(logging.INFO, logger="flights"):
            service.set_seat_count(flight_id, administrator, 3)
        assert "set seat count" in caplog.text


class TestConcurrency:
    """Per-flight lock keeps check-then-commit indivisible."""

    def test_parallel_bookings_never_oversell(self, service: FlightService, administrator, regulator):
        flight_id = open_flight(service, administrator, regulator, seats=10)
        outcomes: list[str] = []
        outcomes_lock = threading.Lock()

        def buy(number: int) -> None:
            try:
                service.book(flight_id, Address(f"0xbuyer{number}"), 3, Decimal("15"))
                outcome = "ok"
            except InsufficientInventoryError:
                outcome = "sold out"
            with outcomes_lock:
                outcomes.append(outcome)

        threads = [threading.Thread(target=buy, args=(number,)) for number in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert outcomes.count("ok") == 3
        assert outcomes.count("sold out") == 5
        occupied = [seat for seat in service.list_seats(flight_id) if seat.assigned]
        assert len(occupied) == 9
        assert len(set(seat.occupant for seat in occupied)) == 3

    def test_flight_lock_released_after_use(self, service: FlightService, administrator: Address):
        """Per-flight locks do not outlive the operations holding them."""
        flight_id = str(service.create_flight(administrator))
        service.set_seat_count(flight_id, administrator, 3)
        gc.collect()
        assert len(service._locks) == 0
