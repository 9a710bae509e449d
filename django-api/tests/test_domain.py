"""Unit tests for domain primitives.

These test invariants that must hold at construction time.
Run with: pytest tests/test_domain.py -v
"""

from decimal import Decimal

import pytest

from flights.domain import Address, Capacity, FlightId, FlightStatus, Money
from flights.domain.errors import ErrorCode, IncorrectPaymentError, InvalidTransitionError


class TestMoney:
    """Tests for Money value object."""

    def test_money_accepts_positive_amount(self):
        """Money can be created with positive amount."""
        assert Money(Decimal("12.50")).amount == Decimal("12.50")

    def test_money_accepts_zero(self):
        """Money can be created with zero."""
        assert Money.zero().amount == 0

    def test_money_rejects_negative_amount(self):
        """Money raises ValueError for negative amount."""
        with pytest.raises(ValueError):
            Money(Decimal("-0.01"))

    def test_money_str_format(self):
        """Money string representation is formatted to 2 decimal places."""
        assert str(Money(Decimal("5"))) == "5.00"

    def test_times_and_add(self):
        """Money multiplies by a quantity and adds exactly."""
        price = Money(Decimal("5"))
        assert price.times(2) == Money(Decimal("10"))
        assert price + price == Money(Decimal("10.00"))


class TestCapacity:
    """Tests for Capacity value object."""

    def test_capacity_accepts_zero(self):
        """Capacity can be created with zero."""
        assert Capacity(0).value == 0

    def test_capacity_rejects_negative_value(self):
        """Capacity raises ValueError for negative value."""
        with pytest.raises(ValueError):
            Capacity(-1)


class TestAddress:
    """Tests for Address value object."""

    def test_equal_values_are_the_same_identity(self):
        assert Address("0xabc") == Address("0xabc")

    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_address_rejected(self, value):
        """Address raises ValueError for a blank identity."""
        with pytest.raises(ValueError):
            Address(value)


class TestFlightId:
    """Tests for FlightId value object."""

    def test_from_string_valid_uuid(self):
        """FlightId.from_string parses valid UUID."""
        flight_id = FlightId.new()
        assert FlightId.from_string(str(flight_id)) == flight_id

    def test_from_string_invalid_uuid(self):
        """FlightId.from_string raises ValueError for invalid UUID."""
        with pytest.raises(ValueError):
            FlightId.from_string("not-a-uuid")


class TestFlightStatus:
    def test_status_values_follow_lifecycle_order(self):
        assert [status.value for status in FlightStatus] == [0, 1, 2, 3]
        assert FlightStatus.SALE.label == "Sale"


class TestDomainError:
    """Tests for domain error rendering."""

    def test_str_includes_code(self):
        error = InvalidTransitionError("Sale", "finalise flight")
        assert str(error) == "INVALID_TRANSITION: Cannot finalise flight while flight is Sale"

    def test_error_keeps_context(self):
        error = IncorrectPaymentError(required="10.00", received="5.00")
        assert error.code is ErrorCode.INCORRECT_PAYMENT
        assert error.required == "10.00"
        assert error.received == "5.00"
