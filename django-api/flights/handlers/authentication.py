"""Caller identity for HTTP requests.

Identity is established upstream; the gateway forwards it in a header.
"""

from dataclasses import dataclass

from django.conf import settings
from rest_framework.authentication import BaseAuthentication
from rest_framework.request import Request

from flights.domain import Address


@dataclass(frozen=True)
class Caller:
    """Authenticated principal wrapping a ledger Address."""

    address: Address
    is_authenticated: bool = True

    def __str__(self) -> str:
        return str(self.address)


def _header_name() -> str:
    return settings.FLIGHT_LEDGER["IDENTITY_HEADER"]


class IdentityHeaderAuthentication(BaseAuthentication):
    """Trusts the identity header set by the upstream gateway."""

    def authenticate(self, request: Request) -> tuple[Caller, None] | None:
        value = request.headers.get(_header_name(), "").strip()
        if not value:
            return None
        return Caller(address=Address(value)), None

    def authenticate_header(self, request: Request) -> str:
        return _header_name()
