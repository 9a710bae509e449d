"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from flights.domain import Address
from flights.domain.errors import DomainError, ErrorCode
from flights.handlers.serializers import (
    AssignSeatSerializer,
    BookingReceiptSerializer,
    BookingSerializer,
    CreateFlightSerializer,
    FlightSerializer,
    LoadSeatSerializer,
    RegulatorSerializer,
    SeatCountSerializer,
    SeatPriceSerializer,
    SeatSerializer,
    SettlementSerializer,
    TicketSerializer,
)
from flights.services import get_flight_service

ERROR_STATUS = {
    ErrorCode.UNAUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorCode.INVALID_TRANSITION: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_QUANTITY: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INCORRECT_PAYMENT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.DUPLICATE_TICKET: status.HTTP_409_CONFLICT,
    ErrorCode.INSUFFICIENT_INVENTORY: status.HTTP_409_CONFLICT,
    ErrorCode.NO_TICKET: status.HTTP_404_NOT_FOUND,
    ErrorCode.SELF_ASSIGNMENT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.ALREADY_ASSIGNED: status.HTTP_409_CONFLICT,
    ErrorCode.LAST_SEAT: status.HTTP_409_CONFLICT,
    ErrorCode.SEAT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.FLIGHT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_FLIGHT_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.SETTLEMENT_FAILED: status.HTTP_502_BAD_GATEWAY,
    ErrorCode.CONCURRENT_UPDATE: status.HTTP_409_CONFLICT,
}


def error_response(error: DomainError) -> Response:
    return Response(
        {"error": {"code": error.code.value, "message": error.message}},
        status=ERROR_STATUS.get(error.code, status.HTTP_400_BAD_REQUEST),
    )


def caller_of(request: Request) -> Address:
    return request.user.address


class FlightAPIView(APIView):
    """Base view translating domain errors into error responses."""

    def handle_exception(self, exc):
        if isinstance(exc, DomainError):
            return error_response(exc)
        return super().handle_exception(exc)


class FlightListView(FlightAPIView):
    """Handler for POST /api/flights"""

    def post(self, request: Request) -> Response:
        body = CreateFlightSerializer(data=request.data)
        body.is_valid(raise_exception=True)
        service = get_flight_service()
        flight_id = service.create_flight(caller_of(request), body.validated_data["flight_number"])
        details = service.get_flight(str(flight_id))
        return Response(FlightSerializer(details).data, status=status.HTTP_201_CREATED)


class FlightDetailView(FlightAPIView):
    """Handler for GET /api/flights/{flight_id}"""

    def get(self, request: Request, flight_id: str) -> Response:
        details = get_flight_service().get_flight(flight_id)
        return Response(FlightSerializer(details).data)


class SeatCountView(FlightAPIView):
    """Handler for POST /api/flights/{flight_id}/seat-count"""

    def post(self, request: Request, flight_id: str) -> Response:
        body = SeatCountSerializer(data=request.data)
        body.is_valid(raise_exception=True)
        get_flight_service().set_seat_count(flight_id, caller_of(request), body.validated_data["seat_count"])
        return Response(status=status.HTTP_204_NO_CONTENT)


class SeatPriceView(FlightAPIView):
    """Handler for POST /api/flights/{flight_id}/seat-price"""

    def post(self, request: Request, flight_id: str) -> Response:
        body = SeatPriceSerializer(data=request.data)
        body.is_valid(raise_exception=True)
        get_flight_service().set_seat_price(flight_id, caller_of(request), body.validated_data["seat_price"])
        return Response(status=status.HTTP_204_NO_CONTENT)


class RegulatorView(FlightAPIView):
    """Handler for POST /api/flights/{flight_id}/regulator"""

    def post(self, request: Request, flight_id: str) -> Response:
        body = RegulatorSerializer(data=request.data)
        body.is_valid(raise_exception=True)
        regulator = Address(body.validated_data["regulator"])
        get_flight_service().add_regulator(flight_id, caller_of(request), regulator)
        return Response(status=status.HTTP_204_NO_CONTENT)


class SeatListView(FlightAPIView):
    """Handler for GET/POST /api/flights/{flight_id}/seats"""

    def get(self, request: Request, flight_id: str) -> Response:
        seats = get_flight_service().list_seats(flight_id)
        return Response(SeatSerializer(seats, many=True).data)

    def post(self, request: Request, flight_id: str) -> Response:
        body = LoadSeatSerializer(data=request.data)
        body.is_valid(raise_exception=True)
        service = get_flight_service()
        index = service.load_seat(
            flight_id,
            caller_of(request),
            body.validated_data["number"],
            body.validated_data["description"],
        )
        seat = service.get_seat(flight_id, index)
        return Response(SeatSerializer(seat).data, status=status.HTTP_201_CREATED)


class SeatDetailView(FlightAPIView):
    """Handler for GET /api/flights/{flight_id}/seats/{index}"""

    def get(self, request: Request, flight_id: str, index: int) -> Response:
        seat = get_flight_service().get_seat(flight_id, index)
        return Response(SeatSerializer(seat).data)


class AssignSeatView(FlightAPIView):
    """Handler for POST /api/flights/{flight_id}/seats/{index}/assign"""

    def post(self, request: Request, flight_id: str, index: int) -> Response:
        body = AssignSeatSerializer(data=request.data)
        body.is_valid(raise_exception=True)
        ticket = get_flight_service().assign_seat(
            flight_id, caller_of(request), index, Address(body.validated_data["new_occupant"])
        )
        return Response(TicketSerializer(ticket).data, status=status.HTTP_201_CREATED)


class FlightStatusView(FlightAPIView):
    """Handler for POST /api/flights/{flight_id}/status/{action}"""

    def post(self, request: Request, flight_id: str, action: str) -> Response:
        service = get_flight_service()
        caller = caller_of(request)
        if action == "enable":
            service.enable_flight(flight_id, caller)
        elif action == "land":
            service.land_flight(flight_id, caller)
        elif action == "finalise":
            settlement = service.finalise_flight(flight_id, caller)
            return Response(SettlementSerializer(settlement).data)
        else:
            return Response(status=status.HTTP_404_NOT_FOUND)
        return Response(FlightSerializer(service.get_flight(flight_id)).data)


class BookingView(FlightAPIView):
    """Handler for POST /api/flights/{flight_id}/bookings"""

    def post(self, request: Request, flight_id: str) -> Response:
        body = BookingSerializer(data=request.data)
        body.is_valid(raise_exception=True)
        receipt = get_flight_service().book(
            flight_id,
            caller_of(request),
            body.validated_data["seat_count"],
            body.validated_data["payment"],
        )
        return Response(BookingReceiptSerializer(receipt).data, status=status.HTTP_201_CREATED)


class OwnTicketView(FlightAPIView):
    """Handler for GET/DELETE /api/flights/{flight_id}/ticket"""

    def get(self, request: Request, flight_id: str) -> Response:
        ticket = get_flight_service().get_ticket(flight_id, caller_of(request))
        return Response(TicketSerializer(ticket).data)

    def delete(self, request: Request, flight_id: str) -> Response:
        ticket = get_flight_service().cancel_ticket(flight_id, caller_of(request))
        return Response(TicketSerializer(ticket).data)


class HolderTicketView(FlightAPIView):
    """Handler for GET /api/flights/{flight_id}/tickets/{holder}"""

    def get(self, request: Request, flight_id: str, holder: str) -> Response:
        try:
            address = Address(holder)
        except ValueError as exc:
            raise ValidationError({"holder": [str(exc)]}) from exc
        ticket = get_flight_service().get_ticket(flight_id, address)
        return Response(TicketSerializer(ticket).data)
