from flights.stores.interfaces import FlightStore, PayoutGateway

__all__ = ["FlightStore", "PayoutGateway"]
