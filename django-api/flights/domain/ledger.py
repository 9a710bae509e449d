"""Ticket ledger: which identity holds which seats."""

from collections.abc import Iterable
from dataclasses import replace
from uuid import uuid4

from flights.domain.models import Ticket
from flights.domain.value_objects import Address, Money


class TicketLedger:
    """All tickets ever issued for a flight, in issue order.

    At most one non-cancelled ticket exists per holder.
    """

    def __init__(self, tickets: Iterable[Ticket] = ()) -> None:
        self._tickets: list[Ticket] = list(tickets)
        self._active: dict[Address, int] = {
            ticket.holder: position
            for position, ticket in enumerate(self._tickets)
            if not ticket.cancelled
        }

    def __len__(self) -> int:
        return len(self._tickets)

    def holds_ticket(self, holder: Address) -> bool:
        return holder in self._active

    def active_ticket(self, holder: Address) -> Ticket | None:
        position = self._active.get(holder)
        return None if position is None else self._tickets[position]

    def latest_ticket(self, holder: Address) -> Ticket | None:
        for ticket in reversed(self._tickets):
            if ticket.holder == holder:
                return ticket
        return None

    def holders(self) -> tuple[Address, ...]:
        return tuple(self._tickets[position].holder for position in sorted(self._active.values()))

    def all(self) -> tuple[Ticket, ...]:
        return tuple(self._tickets)

    def issue(self, holder: Address, seat_indices: Iterable[int], amount_paid: Money) -> Ticket:
        ticket = Ticket(
            number=len(self._tickets) + 1,
            holder=holder,
            seat_indices=tuple(seat_indices),
            amount_paid=amount_paid,
            reference=uuid4().hex,
        )
        self._active[holder] = len(self._tickets)
        self._tickets.append(ticket)
        return ticket

    def cancel(self, holder: Address) -> Ticket:
        position = self._active.pop(holder)
        cancelled = replace(self._tickets[position], cancelled=True)
        self._tickets[position] = cancelled
        return cancelled

    def remove_seat(self, holder: Address, seat_index: int) -> Ticket:
        position = self._active[holder]
        ticket = self._tickets[position]
        updated = replace(
            ticket,
            seat_indices=tuple(index for index in ticket.seat_indices if index != seat_index),
        )
        self._tickets[position] = updated
        return updated
