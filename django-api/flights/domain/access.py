"""Role checks for privileged flight operations.

Predicates are pure functions over the caller and the flight's roles.
"""

from dataclasses import dataclass

from flights.domain.errors import UnauthorizedError
from flights.domain.value_objects import Address


@dataclass(frozen=True)
class Roles:
    """The two privileged identities of a flight."""

    administrator: Address
    regulator: Address | None = None


def is_administrator(caller: Address, roles: Roles) -> bool:
    return caller == roles.administrator


def is_regulator(caller: Address, roles: Roles) -> bool:
    # No regulator configured means nobody is one.
    return roles.regulator is not None and caller == roles.regulator


def require_administrator(caller: Address, roles: Roles) -> None:
    """Raises:
    UnauthorizedError: If the caller is not the administrator.
    """
    if not is_administrator(caller, roles):
        raise UnauthorizedError(caller=str(caller), role="administrator")
