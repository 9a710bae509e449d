"""Pytest configuration and shared fixtures."""

from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from flights.domain import Address, Capacity, Flight, FlightId, Money
from flights.services import FlightService, get_flight_service
from flights.stores.memory_store import InMemoryFlightStore, InMemoryPayoutGateway

SEAT_PRICE = Money(Decimal("5"))
NUMBER_OF_SEATS = 2


@pytest.fixture
def administrator() -> Address:
    return Address("0xadmin")


@pytest.fixture
def regulator() -> Address:
    return Address("0xregulator")


@pytest.fixture
def customer() -> Address:
    return Address("0xcustomer")


@pytest.fixture
def other_customer() -> Address:
    return Address("0xother")


@pytest.fixture
def flight(administrator: Address) -> Flight:
    return Flight(FlightId.new(), administrator, "JQ570")


def full_setup(flight: Flight, administrator: Address, regulator: Address, seats: int = NUMBER_OF_SEATS) -> None:
    """Configure a presale flight so it is ready to be enabled."""
    flight.set_seat_count(administrator, Capacity(seats))
    for row in range(1, seats + 1):
        flight.load_seat(administrator, f"{row}A", "Window Seat")
    flight.set_seat_price(administrator, SEAT_PRICE)
    flight.add_regulator(administrator, regulator)


@pytest.fixture
def ready_flight(flight: Flight, administrator: Address, regulator: Address) -> Flight:
    full_setup(flight, administrator, regulator)
    return flight


@pytest.fixture
def on_sale_flight(ready_flight: Flight, administrator: Address) -> Flight:
    ready_flight.enable(administrator)
    return ready_flight


@pytest.fixture
def payouts() -> InMemoryPayoutGateway:
    return InMemoryPayoutGateway()


@pytest.fixture
def service(payouts: InMemoryPayoutGateway) -> FlightService:
    return FlightService(store=InMemoryFlightStore(), payouts=payouts)


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_service_cache():
    get_flight_service.cache_clear()
    yield
    get_flight_service.cache_clear()
