"""Serializers for transforming domain models to API responses."""

from rest_framework import serializers


class AddressField(serializers.Field):
    """Renders an Address (or None) as its string value."""

    def to_representation(self, value):
        return str(value) if value is not None else None


class MoneyField(serializers.Field):
    def to_representation(self, value):
        return str(value)


class SeatSerializer(serializers.Serializer):
    """Serializer for Seat domain model."""

    index = serializers.IntegerField()
    number = serializers.CharField()
    description = serializers.CharField()
    assigned = serializers.BooleanField()
    occupant = AddressField()


class TicketSerializer(serializers.Serializer):
    """Serializer for Ticket domain model."""

    number = serializers.IntegerField()
    holder = AddressField()
    seat_indices = serializers.ListField(child=serializers.IntegerField())
    amount_paid = MoneyField()
    reference = serializers.CharField()
    cancelled = serializers.BooleanField()


class BookingReceiptSerializer(serializers.Serializer):
    """Serializer for BookingReceipt domain model."""

    reference = serializers.CharField()
    ticket_number = serializers.IntegerField()
    holder = AddressField()
    seat_indices = serializers.ListField(child=serializers.IntegerField())
    amount_paid = MoneyField()


class SettlementSerializer(serializers.Serializer):
    payee = AddressField()
    amount = MoneyField()


class FlightSerializer(serializers.Serializer):
    """Serializer for FlightDetails domain model."""

    id = serializers.CharField()
    flight_number = serializers.CharField()
    owner = AddressField(source="administrator")
    regulator = AddressField()
    seat_count = serializers.IntegerField(source="seat_count.value")
    seat_price = MoneyField()
    status = serializers.IntegerField()
    status_label = serializers.CharField(source="status.label")
    balance = MoneyField()
    loaded_seats = serializers.IntegerField()
    skipped_seat_count = serializers.IntegerField()
    ticket_holders = serializers.ListField(child=AddressField())


# Request bodies


class CreateFlightSerializer(serializers.Serializer):
    flight_number = serializers.CharField(max_length=32, required=False, default="")


class SeatCountSerializer(serializers.Serializer):
    seat_count = serializers.IntegerField(min_value=0)


class SeatPriceSerializer(serializers.Serializer):
    seat_price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)


class RegulatorSerializer(serializers.Serializer):
    regulator = serializers.CharField(max_length=255)


class LoadSeatSerializer(serializers.Serializer):
    number = serializers.CharField(max_length=16)
    description = serializers.CharField(max_length=255, allow_blank=True, default="")


class BookingSerializer(serializers.Serializer):
    seat_count = serializers.IntegerField()
    payment = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=0)


class AssignSeatSerializer(serializers.Serializer):
    new_occupant = serializers.CharField(max_length=255)
