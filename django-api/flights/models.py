"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/.
"""

import uuid

from django.db import models

from flights.domain import FlightStatus


class Flight(models.Model):
    """Persistence model for flights."""

    STATUS_CHOICES = [(status.value, status.label) for status in FlightStatus]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    flight_number = models.CharField(max_length=32, blank=True)
    administrator = models.CharField(max_length=255)
    regulator = models.CharField(max_length=255, blank=True, null=True)
    seat_count = models.PositiveIntegerField(default=0)
    seat_price = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    status = models.PositiveSmallIntegerField(choices=STATUS_CHOICES, default=FlightStatus.PRESALE.value)
    balance = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    skipped_seats = models.JSONField(default=list, blank=True)
    version = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.flight_number or str(self.id)


class Seat(models.Model):
    """Persistence model for a flight's seats."""

    flight = models.ForeignKey(Flight, on_delete=models.CASCADE, related_name="seats")
    index = models.PositiveIntegerField()
    number = models.CharField(max_length=16)
    description = models.CharField(max_length=255, blank=True)
    assigned = models.BooleanField(default=False)
    occupant = models.CharField(max_length=255, blank=True, null=True)

    class Meta:
        ordering = ["flight", "index"]
        constraints = [
            models.UniqueConstraint(fields=["flight", "index"], name="uniq_seat_index_per_flight"),
        ]

    def __str__(self) -> str:
        return f"{self.flight} - {self.number}"


class Ticket(models.Model):
    """Persistence model for issued tickets, including cancelled ones."""

    flight = models.ForeignKey(Flight, on_delete=models.CASCADE, related_name="tickets")
    number = models.PositiveIntegerField()
    holder = models.CharField(max_length=255)
    seat_indices = models.JSONField(default=list)
    amount_paid = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    reference = models.CharField(max_length=32)
    cancelled = models.BooleanField(default=False)

    class Meta:
        ordering = ["flight", "number"]
        constraints = [
            models.UniqueConstraint(fields=["flight", "number"], name="uniq_ticket_number_per_flight"),
        ]
        indexes = [
            models.Index(fields=["flight", "holder"], name="ticket_flight_holder_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.holder} - #{self.number}"


class Payout(models.Model):
    """Funds credited to an identity at settlement."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    payee = models.CharField(max_length=255)
    amount = models.DecimalField(max_digits=14, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["payee"], name="payout_payee_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.payee} - {self.amount}"
