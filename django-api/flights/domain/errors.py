"""Domain error codes for the flights module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    INVALID_QUANTITY = "INVALID_QUANTITY"
    INCORRECT_PAYMENT = "INCORRECT_PAYMENT"
    DUPLICATE_TICKET = "DUPLICATE_TICKET"
    INSUFFICIENT_INVENTORY = "INSUFFICIENT_INVENTORY"
    NO_TICKET = "NO_TICKET"
    SELF_ASSIGNMENT = "SELF_ASSIGNMENT"
    ALREADY_ASSIGNED = "ALREADY_ASSIGNED"
    LAST_SEAT = "LAST_SEAT"
    SEAT_NOT_FOUND = "SEAT_NOT_FOUND"
    FLIGHT_NOT_FOUND = "FLIGHT_NOT_FOUND"
    INVALID_FLIGHT_ID = "INVALID_FLIGHT_ID"
    SETTLEMENT_FAILED = "SETTLEMENT_FAILED"
    CONCURRENT_UPDATE = "CONCURRENT_UPDATE"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class UnauthorizedError(DomainError):
    """Raised when the caller lacks the role an operation requires."""

    def __init__(self, caller: str, role: str) -> None:
        super().__init__(
            code=ErrorCode.UNAUTHORIZED,
            message=f"Caller is not the {role}",
        )
        self.caller = caller
        self.role = role


class InvalidTransitionError(DomainError):
    """Raised when the flight status does not permit an operation."""

    def __init__(self, status: str, action: str, reason: str | None = None) -> None:
        detail = f"Cannot {action} while flight is {status}"
        if reason:
            detail = f"Cannot {action}: {reason}"
        super().__init__(code=ErrorCode.INVALID_TRANSITION, message=detail)
        self.status = status
        self.action = action


class InvalidQuantityError(DomainError):
    """Raised when a booking asks for fewer than one seat."""

    def __init__(self, quantity: int) -> None:
        super().__init__(
            code=ErrorCode.INVALID_QUANTITY,
            message="At least one seat must be booked",
        )
        self.quantity = quantity


class IncorrectPaymentError(DomainError):
    """Raised when payment differs from the exact price of the seats."""

    def __init__(self, required: str, received: str) -> None:
        super().__init__(
            code=ErrorCode.INCORRECT_PAYMENT,
            message=f"Payment of {received} does not match required {required}",
        )
        self.required = required
        self.received = received


class DuplicateTicketError(DomainError):
    """Raised when the caller already holds an active ticket."""

    def __init__(self, holder: str) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_TICKET,
            message="Caller already holds a ticket for this flight",
        )
        self.holder = holder


class InsufficientInventoryError(DomainError):
    """Raised when fewer seats are free than were requested."""

    def __init__(self, requested: int, available: int) -> None:
        super().__init__(
            code=ErrorCode.INSUFFICIENT_INVENTORY,
            message=f"Requested {requested} seats but only {available} are free",
        )
        self.requested = requested
        self.available = available


class NoTicketError(DomainError):
    """Raised when an identity holds no ticket for the operation."""

    def __init__(self, holder: str) -> None:
        super().__init__(
            code=ErrorCode.NO_TICKET,
            message="No ticket found for this identity",
        )
        self.holder = holder


class SelfAssignmentError(DomainError):
    """Raised when a holder tries to assign a seat to themselves."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.SELF_ASSIGNMENT,
            message="A seat cannot be assigned to its current holder",
        )


class AlreadyAssignedError(DomainError):
    """Raised when the transfer target already holds an active ticket."""

    def __init__(self, occupant: str) -> None:
        super().__init__(
            code=ErrorCode.ALREADY_ASSIGNED,
            message="Target identity already holds a ticket for this flight",
        )
        self.occupant = occupant


class LastSeatError(DomainError):
    """Raised when a transfer would leave a ticket without seats."""

    def __init__(self, seat_index: int) -> None:
        super().__init__(
            code=ErrorCode.LAST_SEAT,
            message="The last seat on a ticket cannot be assigned away",
        )
        self.seat_index = seat_index


class SeatNotFoundError(DomainError):
    """Raised when a seat index is outside the loaded inventory."""

    def __init__(self, seat_index: int) -> None:
        super().__init__(
            code=ErrorCode.SEAT_NOT_FOUND,
            message=f"Seat {seat_index} not found",
        )
        self.seat_index = seat_index


class FlightNotFoundError(DomainError):
    """Raised when a flight is not found."""

    def __init__(self, flight_id: str) -> None:
        super().__init__(
            code=ErrorCode.FLIGHT_NOT_FOUND,
            message="Flight not found",
        )
        self.flight_id = flight_id


class InvalidFlightIdError(DomainError):
    """Raised when a flight ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_FLIGHT_ID,
            message="Invalid flight ID format",
        )


class SettlementFailedError(DomainError):
    """Raised by payout gateways when funds could not be transferred."""

    def __init__(self, payee: str, amount: str) -> None:
        super().__init__(
            code=ErrorCode.SETTLEMENT_FAILED,
            message="Settlement could not be completed",
        )
        self.payee = payee
        self.amount = amount


class ConcurrentUpdateError(DomainError):
    """Raised when a flight changed in storage after it was loaded."""

    def __init__(self, flight_id: str) -> None:
        super().__init__(
            code=ErrorCode.CONCURRENT_UPDATE,
            message="Flight was modified concurrently, retry the operation",
        )
        self.flight_id = flight_id
