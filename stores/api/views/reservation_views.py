import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from accounts.domain.principal import Principal
from infrastructure.container import container
from stores.api.serializers import (
    ArrivalQuerySerializer,
    ArrivalResponseSerializer,
    ErrorResponseSerializer,
    ReservationSerializer,
    ScheduleQuerySerializer,
    SlotRequestSerializer,
)
from stores.domain.services import ReservationLedger
from stores.permissions import IsCustomerRole, IsStoreOwnerRole
from utils.api_errors import error_response, validation_response
from utils.logging_utils import sanitize_payload

logger = logging.getLogger(__name__)


class ReservationViewSet(viewsets.ViewSet):
    """
    Booking, owner schedule and refusal, kiosk arrival check.
    Delegates logic to ReservationLedger and ArrivalGate.
    """

    permission_classes = [IsAuthenticated]

    def get_service(self) -> ReservationLedger:
        return container.reservation_ledger()

    def get_permissions(self):
        if self.action == "arrival":
            return [AllowAny()]
        if self.action == "create":
            return [IsAuthenticated(), IsCustomerRole()]
        if self.action in ["schedule", "refuse"]:
            return [IsAuthenticated(), IsStoreOwnerRole()]
        return super().get_permissions()

    @extend_schema(
        operation_id="reservations_book",
        summary="Book a slot",
        description="The reservation is held under the caller's registered phone number.",
        request=SlotRequestSerializer,
        responses={
            201: ReservationSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Store not found"),
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Slot already reserved"),
        },
        tags=["Reservations"],
    )
    def create(self, request):
        serializer = SlotRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_response(serializer.errors)

        data = serializer.validated_data
        principal = Principal.from_user(request.user)
        logger.debug("Booking request: %s", sanitize_payload(request.data, ["storeName", "date", "time"]))

        result = self.get_service().book_by_store_name(data["store_name"], data["date"], data["time"], principal.contact)
        if not result.ok:
            return error_response(result)

        return Response(ReservationSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="reservations_schedule",
        summary="Owner's reservations for one day",
        parameters=[ScheduleQuerySerializer],
        responses={200: ReservationSerializer(many=True)},
        tags=["Reservations"],
    )
    def schedule(self, request):
        query = ScheduleQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return validation_response(query.errors)

        lookup = container.store_service().get_owned_store(
            Principal.from_user(request.user), query.validated_data["store_name"]
        )
        if not lookup.ok:
            return error_response(lookup)

        result = self.get_service().list_for_date(lookup.value.id, query.validated_data["date"])
        if not result.ok:
            return error_response(result)

        return Response(ReservationSerializer(result.value, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="reservations_refuse",
        summary="Refuse a reservation",
        request=SlotRequestSerializer,
        responses={
            200: ReservationSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="No reservation in that slot"),
            422: OpenApiResponse(response=ErrorResponseSerializer, description="Already refused"),
        },
        tags=["Reservations"],
    )
    def refuse(self, request):
        serializer = SlotRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_response(serializer.errors)

        data = serializer.validated_data
        lookup = container.store_service().get_owned_store(Principal.from_user(request.user), data["store_name"])
        if not lookup.ok:
            return error_response(lookup)

        result = self.get_service().refuse(lookup.value.id, data["date"], data["time"])
        if not result.ok:
            return error_response(result)

        return Response(ReservationSerializer(result.value).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="reservations_arrival",
        summary="Confirm arrival at the store kiosk",
        parameters=[ArrivalQuerySerializer],
        responses={
            200: ArrivalResponseSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="No matching reservation"),
            422: OpenApiResponse(response=ErrorResponseSerializer, description="Outside the arrival window"),
        },
        tags=["Reservations"],
    )
    def arrival(self, request):
        query = ArrivalQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return validation_response(query.errors)

        data = query.validated_data
        result = container.arrival_gate().confirm_arrival(
            data["store_name"], data["date"], data["time"], data["phone_number"]
        )
        if not result.ok:
            return error_response(result)

        return Response(result.value, status=status.HTTP_200_OK)
