from functools import lru_cache

from django.conf import settings
from django.utils.module_loading import import_string

from flights.services.flight_service import FlightService


@lru_cache(maxsize=1)
def get_flight_service() -> FlightService:
    """Build the FlightService wired to the stores named in settings."""
    config = settings.FLIGHT_LEDGER
    store = import_string(config["STORE"])()
    payouts = import_string(config["PAYOUTS"])()
    return FlightService(store=store, payouts=payouts)


__all__ = ["FlightService", "get_flight_service"]
