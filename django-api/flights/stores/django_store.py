"""Django ORM implementation of the store interfaces."""

from contextlib import AbstractContextManager
from decimal import Decimal

from django.db import transaction
from django.db.models import Sum
from django.utils import timezone

from flights import models
from flights.domain import (
    Address,
    Capacity,
    Flight,
    FlightId,
    FlightStatus,
    Money,
    Seat,
    Ticket,
)
from flights.domain.errors import ConcurrentUpdateError
from flights.stores.interfaces import FlightStore, PayoutGateway


def _address(value: str | None) -> Address | None:
    return Address(value) if value else None


def _to_seat(record: models.Seat) -> Seat:
    return Seat(
        index=record.index,
        number=record.number,
        description=record.description,
        assigned=record.assigned,
        occupant=_address(record.occupant),
    )


def _to_ticket(record: models.Ticket) -> Ticket:
    return Ticket(
        number=record.number,
        holder=Address(record.holder),
        seat_indices=tuple(record.seat_indices),
        amount_paid=Money(record.amount_paid),
        reference=record.reference,
        cancelled=record.cancelled,
    )


class DjangoFlightStore(FlightStore):
    """Database-backed flight store using Django ORM.

    Each save replaces the flight's seats and tickets in one transaction.
    Saves are conditional on the version the flight was loaded at, so a
    write based on a stale snapshot fails instead of overwriting.
    """

    def get(self, flight_id: FlightId) -> Flight | None:
        return self._restore(models.Flight.objects.filter(id=flight_id.value).first())

    def get_for_update(self, flight_id: FlightId) -> Flight | None:
        # Row lock held until the enclosing atomic() block ends.
        return self._restore(models.Flight.objects.select_for_update().filter(id=flight_id.value).first())

    def _restore(self, record: models.Flight | None) -> Flight | None:
        if record is None:
            return None
        return Flight.restore(
            flight_id=FlightId(record.id),
            administrator=Address(record.administrator),
            flight_number=record.flight_number,
            regulator=_address(record.regulator),
            seat_count=Capacity(record.seat_count),
            seat_price=Money(record.seat_price),
            status=FlightStatus(record.status),
            balance=Money(record.balance),
            seats=[_to_seat(seat) for seat in record.seats.order_by("index")],
            tickets=[_to_ticket(ticket) for ticket in record.tickets.order_by("number")],
            skipped=record.skipped_seats,
            version=record.version,
        )

    def save(self, flight: Flight) -> None:
        """Raises:
        ConcurrentUpdateError: If the stored flight moved past ``flight.version``.
        """
        fields = {
            "flight_number": flight.flight_number,
            "administrator": str(flight.administrator),
            "regulator": str(flight.regulator) if flight.regulator else None,
            "seat_count": flight.seat_count.value,
            "seat_price": flight.seat_price.amount,
            "status": flight.status.value,
            "balance": flight.balance.amount,
            "skipped_seats": list(flight.skipped_seats()),
        }
        with transaction.atomic():
            if flight.version == 0:
                models.Flight.objects.create(id=flight.id.value, version=1, **fields)
            else:
                updated = models.Flight.objects.filter(id=flight.id.value, version=flight.version).update(
                    version=flight.version + 1, updated_at=timezone.now(), **fields
                )
                if not updated:
                    raise ConcurrentUpdateError(str(flight.id))
            models.Seat.objects.filter(flight_id=flight.id.value).delete()
            models.Seat.objects.bulk_create(
                models.Seat(
                    flight_id=flight.id.value,
                    index=seat.index,
                    number=seat.number,
                    description=seat.description,
                    assigned=seat.assigned,
                    occupant=str(seat.occupant) if seat.occupant else None,
                )
                for seat in flight.seats()
            )
            models.Ticket.objects.filter(flight_id=flight.id.value).delete()
            models.Ticket.objects.bulk_create(
                models.Ticket(
                    flight_id=flight.id.value,
                    number=ticket.number,
                    holder=str(ticket.holder),
                    seat_indices=list(ticket.seat_indices),
                    amount_paid=ticket.amount_paid.amount,
                    reference=ticket.reference,
                    cancelled=ticket.cancelled,
                )
                for ticket in flight.tickets()
            )
        flight.version += 1

    def exists(self, flight_id: FlightId) -> bool:
        return models.Flight.objects.filter(id=flight_id.value).exists()

    def atomic(self) -> AbstractContextManager:
        return transaction.atomic()


class DjangoPayoutGateway(PayoutGateway):
    """Records payouts as rows; a balance is the sum of its payouts."""

    def transfer(self, payee: Address, amount: Money) -> None:
        models.Payout.objects.create(payee=str(payee), amount=amount.amount)

    def balance_of(self, identity: Address) -> Money:
        total = models.Payout.objects.filter(payee=str(identity)).aggregate(total=Sum("amount"))["total"]
        return Money(total if total is not None else Decimal("0"))
