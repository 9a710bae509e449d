"""Seat inventory and the pool of seats freed by cancellation."""

from collections.abc import Iterable
from dataclasses import replace

from flights.domain.errors import SeatNotFoundError
from flights.domain.models import Seat
from flights.domain.value_objects import Address


class SeatInventory:
    """Ordered seats of a flight. Seats are appended, never removed."""

    def __init__(self, seats: Iterable[Seat] = ()) -> None:
        self._seats: list[Seat] = list(seats)

    def __len__(self) -> int:
        return len(self._seats)

    def load(self, number: str, description: str) -> int:
        index = len(self._seats)
        self._seats.append(Seat(index=index, number=number, description=description))
        return index

    def get(self, index: int) -> Seat:
        """Raises:
        SeatNotFoundError: If no seat was loaded at ``index``.
        """
        if index < 0 or index >= len(self._seats):
            raise SeatNotFoundError(index)
        return self._seats[index]

    def all(self) -> tuple[Seat, ...]:
        return tuple(self._seats)

    def free_count(self) -> int:
        return sum(1 for seat in self._seats if not seat.assigned)

    def free_indices(self, limit: int, exclude: Iterable[int] = ()) -> list[int]:
        """Return up to ``limit`` unassigned indices in ascending order."""
        skip = set(exclude)
        found: list[int] = []
        for seat in self._seats:
            if len(found) == limit:
                break
            if not seat.assigned and seat.index not in skip:
                found.append(seat.index)
        return found

    def assign(self, index: int, occupant: Address) -> None:
        self._seats[index] = replace(self.get(index), assigned=True, occupant=occupant)

    def free(self, index: int) -> None:
        self._seats[index] = replace(self.get(index), assigned=False, occupant=None)


class SkippedSeatPool:
    """Freed seat indices, reused oldest-first before untouched seats."""

    def __init__(self, indices: Iterable[int] = ()) -> None:
        # dict keeps insertion order and rejects duplicates
        self._indices: dict[int, None] = dict.fromkeys(indices)

    def __len__(self) -> int:
        return len(self._indices)

    def __contains__(self, index: object) -> bool:
        return index in self._indices

    def add(self, index: int) -> None:
        self._indices[index] = None

    def discard(self, index: int) -> None:
        self._indices.pop(index, None)

    def oldest(self, limit: int) -> list[int]:
        return list(self._indices)[:limit]

    def all(self) -> tuple[int, ...]:
        return tuple(self._indices)
