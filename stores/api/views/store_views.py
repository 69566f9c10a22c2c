from django.conf import settings
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from accounts.domain.principal import Principal
from infrastructure.container import container
from stores.api.serializers import (
    ErrorResponseSerializer,
    RankingQuerySerializer,
    RankingResponseSerializer,
    StoreSerializer,
    StoreWriteSerializer,
)
from stores.domain.services import StoreRanker, StoreService
from stores.permissions import IsStoreOwnerRole
from utils.api_errors import error_response, validation_response


class StoreViewSet(viewsets.ViewSet):
    """
    Store enrollment, lookup, edit and deletion.
    Delegates logic to StoreService.
    """

    permission_classes = [IsAuthenticated]

    def get_service(self) -> StoreService:
        return container.store_service()

    def get_permissions(self):
        if self.action == "retrieve":
            return [AllowAny()]
        if self.action == "create":
            return [IsAuthenticated(), IsStoreOwnerRole()]
        return super().get_permissions()

    @extend_schema(
        operation_id="stores_enroll",
        summary="Enroll a store",
        request=StoreWriteSerializer,
        responses={
            201: StoreSerializer,
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Caller is not an owner"),
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Store name already taken"),
        },
        tags=["Stores"],
    )
    def create(self, request):
        serializer = StoreWriteSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_response(serializer.errors)

        result = self.get_service().enroll_store(Principal.from_user(request.user), serializer.validated_data)
        if not result.ok:
            return error_response(result)

        return Response(StoreSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(operation_id="stores_retrieve", summary="Get a store by name", responses={200: StoreSerializer}, tags=["Stores"])
    def retrieve(self, request, name=None):
        result = self.get_service().get_store(name)
        if not result.ok:
            return error_response(result)

        return Response(StoreSerializer(result.value).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="stores_edit",
        summary="Edit a store (partial)",
        request=StoreWriteSerializer,
        responses={200: StoreSerializer},
        tags=["Stores"],
    )
    def update(self, request, name=None):
        serializer = StoreWriteSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_response(serializer.errors)

        result = self.get_service().edit_store(Principal.from_user(request.user), name, serializer.validated_data)
        if not result.ok:
            return error_response(result)

        return Response(StoreSerializer(result.value).data, status=status.HTTP_200_OK)

    @extend_schema(operation_id="stores_delete", summary="Delete a store", tags=["Stores"])
    def destroy(self, request, name=None):
        result = self.get_service().delete_store(Principal.from_user(request.user), name)
        if not result.ok:
            return error_response(result)

        return Response(status=status.HTTP_204_NO_CONTENT)


class StoreRankingViewSet(viewsets.ViewSet):
    """
    Paginated store listing by name, rating or distance.
    Delegates logic to StoreRanker.
    """

    permission_classes = [AllowAny]

    def get_service(self) -> StoreRanker:
        return container.store_ranker()

    @extend_schema(
        operation_id="stores_ranking",
        summary="Rank stores",
        description="Zero-based pages. `distance` requires lat, lng and radius (km).",
        parameters=[
            OpenApiParameter(name="page", type=int, description="Zero-based page index"),
            OpenApiParameter(name="size", type=int, description="Page size"),
            OpenApiParameter(name="lat", type=float, description="Latitude (distance only)"),
            OpenApiParameter(name="lng", type=float, description="Longitude (distance only)"),
            OpenApiParameter(name="radius", type=float, description="Radius in km (distance only)"),
        ],
        responses={
            200: RankingResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid page or size"),
            422: OpenApiResponse(response=ErrorResponseSerializer, description="Unknown criterion or missing parameter"),
        },
        tags=["Stores"],
    )
    def ranking(self, request, criterion=None):
        query = RankingQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return validation_response(query.errors)

        params = query.validated_data
        size = params.get("size") or settings.RESERVATIONS["DEFAULT_PAGE_SIZE"]

        result = self.get_service().rank(
            criterion,
            params["page"],
            size,
            lat=params.get("lat"),
            lng=params.get("lng"),
            radius_km=params.get("radius"),
        )
        if not result.ok:
            return error_response(result)

        response_data = result.value
        response_data["results"] = StoreSerializer(response_data["results"], many=True).data
        return Response(response_data, status=status.HTTP_200_OK)
