import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Flight",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("flight_number", models.CharField(blank=True, max_length=32)),
                ("administrator", models.CharField(max_length=255)),
                ("regulator", models.CharField(blank=True, max_length=255, null=True)),
                ("seat_count", models.PositiveIntegerField(default=0)),
                ("seat_price", models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                (
                    "status",
                    models.PositiveSmallIntegerField(
                        choices=[(0, "Presale"), (1, "Sale"), (2, "Landed"), (3, "Closed")], default=0
                    ),
                ),
                ("balance", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("skipped_seats", models.JSONField(blank=True, default=list)),
                ("version", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Payout",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("payee", models.CharField(max_length=255)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=14)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["payee"], name="payout_payee_idx")],
            },
        ),
        migrations.CreateModel(
            name="Seat",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("index", models.PositiveIntegerField()),
                ("number", models.CharField(max_length=16)),
                ("description", models.CharField(blank=True, max_length=255)),
                ("assigned", models.BooleanField(default=False)),
                ("occupant", models.CharField(blank=True, max_length=255, null=True)),
                (
                    "flight",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="seats",
                        to="flights.flight",
                    ),
                ),
            ],
            options={
                "ordering": ["flight", "index"],
                "constraints": [
                    models.UniqueConstraint(fields=("flight", "index"), name="uniq_seat_index_per_flight"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Ticket",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("number", models.PositiveIntegerField()),
                ("holder", models.CharField(max_length=255)),
                ("seat_indices", models.JSONField(default=list)),
                ("amount_paid", models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ("reference", models.CharField(max_length=32)),
                ("cancelled", models.BooleanField(default=False)),
                (
                    "flight",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="tickets",
                        to="flights.flight",
                    ),
                ),
            ],
            options={
                "ordering": ["flight", "number"],
                "indexes": [models.Index(fields=["flight", "holder"], name="ticket_flight_holder_idx")],
                "constraints": [
                    models.UniqueConstraint(fields=("flight", "number"), name="uniq_ticket_number_per_flight"),
                ],
            },
        ),
    ]
