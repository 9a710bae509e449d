"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager, nullcontext

from flights.domain import Address, Flight, FlightId, Money


class FlightStore(ABC):
    """Interface for flight persistence operations."""

    @abstractmethod
    def get(self, flight_id: FlightId) -> Flight | None:
        """Return a flight by ID, or None if not found."""
        ...

    def get_for_update(self, flight_id: FlightId) -> Flight | None:
        """Return a flight to be mutated and saved within the current atomic() scope."""
        return self.get(flight_id)

    @abstractmethod
    def save(self, flight: Flight) -> None:
        """Persist the full state of a flight, creating it if new.

        Raises:
            ConcurrentUpdateError: If the flight was saved by someone else
                since it was loaded.
        """
        ...

    @abstractmethod
    def exists(self, flight_id: FlightId) -> bool:
        """Check if a flight exists."""
        ...

    def atomic(self) -> AbstractContextManager:
        """Scope in which a mutation and its save commit together."""
        return nullcontext()


class PayoutGateway(ABC):
    """Interface for moving settled funds to an identity."""

    @abstractmethod
    def transfer(self, payee: Address, amount: Money) -> None:
        """Credit ``amount`` to ``payee``.

        Raises:
            SettlementFailedError: If the funds could not be moved.
        """
        ...

    @abstractmethod
    def balance_of(self, identity: Address) -> Money:
        """Return the total credited to an identity."""
        ...
