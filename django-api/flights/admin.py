from django.contrib import admin

from flights.models import Flight, Payout, Seat, Ticket


class SeatInline(admin.TabularInline):
    model = Seat
    extra = 0


class TicketInline(admin.TabularInline):
    model = Ticket
    extra = 0


@admin.register(Flight)
class FlightAdmin(admin.ModelAdmin):
    list_display = ["flight_number", "status", "seat_count", "seat_price", "balance", "created_at"]
    list_filter = ["status"]
    search_fields = ["flight_number", "administrator"]
    inlines = [SeatInline, TicketInline]


@admin.register(Ticket)
class TicketAdmin(admin.ModelAdmin):
    list_display = ["holder", "flight", "number", "amount_paid", "cancelled"]
    list_filter = ["cancelled", "flight"]


@admin.register(Payout)
class PayoutAdmin(admin.ModelAdmin):
    list_display = ["payee", "amount", "created_at"]
