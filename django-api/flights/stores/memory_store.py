"""In-memory implementations of the store interfaces."""

from flights.domain import Address, Flight, FlightId, Money
from flights.stores.interfaces import FlightStore, PayoutGateway


class InMemoryFlightStore(FlightStore):
    """Process-local flight store. Holds live aggregates, no copies."""

    def __init__(self) -> None:
        self._flights: dict[FlightId, Flight] = {}

    def get(self, flight_id: FlightId) -> Flight | None:
        return self._flights.get(flight_id)

    def save(self, flight: Flight) -> None:
        self._flights[flight.id] = flight

    def exists(self, flight_id: FlightId) -> bool:
        return flight_id in self._flights


class InMemoryPayoutGateway(PayoutGateway):
    """Records credited balances per identity."""

    def __init__(self) -> None:
        self._balances: dict[Address, Money] = {}

    def transfer(self, payee: Address, amount: Money) -> None:
        self._balances[payee] = self.balance_of(payee) + amount

    def balance_of(self, identity: Address) -> Money:
        return self._balances.get(identity, Money.zero())
