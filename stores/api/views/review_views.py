from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from accounts.domain.principal import Principal
from infrastructure.container import container
from stores.api.serializers import (
    ErrorResponseSerializer,
    ModerationRequestSerializer,
    PageResponseSerializer,
    RatingResponseSerializer,
    ReviewListQuerySerializer,
    ReviewRequestSerializer,
    ReviewSerializer,
)
from stores.domain.services import ReviewService
from stores.permissions import IsCustomerRole, IsStoreOwnerRole
from utils.api_errors import error_response, validation_response


class ReviewViewSet(viewsets.ViewSet):
    """
    Review create/update/delete by the reviewer, moderation by the store owner.
    Delegates logic to ReviewService.
    """

    permission_classes = [IsAuthenticated]

    def get_service(self) -> ReviewService:
        return container.review_service()

    def get_permissions(self):
        if self.action == "list":
            return [AllowAny()]
        if self.action == "create":
            return [IsAuthenticated(), IsCustomerRole()]
        if self.action == "moderate":
            return [IsAuthenticated(), IsStoreOwnerRole()]
        return super().get_permissions()

    @extend_schema(
        operation_id="reviews_list",
        summary="Reviews of a store, newest first",
        parameters=[ReviewListQuerySerializer],
        responses={200: PageResponseSerializer},
        tags=["Reviews"],
    )
    def list(self, request):
        query = ReviewListQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return validation_response(query.errors)

        params = query.validated_data
        result = self.get_service().list_reviews(params["store_name"], params["page"], params["size"])
        if not result.ok:
            return error_response(result)

        response_data = result.value
        response_data["results"] = ReviewSerializer(response_data["results"], many=True).data
        return Response(response_data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="reviews_create",
        summary="Review a visit",
        request=ReviewRequestSerializer,
        responses={
            201: ReviewSerializer,
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not the reservation holder"),
            409: OpenApiResponse(response=ErrorResponseSerializer, description="Visit already reviewed"),
        },
        tags=["Reviews"],
    )
    def create(self, request):
        serializer = ReviewRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_response(serializer.errors)

        result = self.get_service().create_review(Principal.from_user(request.user), serializer.validated_data)
        if not result.ok:
            return error_response(result)

        return Response(ReviewSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="reviews_update",
        summary="Update rate and/or comment",
        request=ReviewRequestSerializer,
        responses={200: ReviewSerializer},
        tags=["Reviews"],
    )
    def modify(self, request):
        serializer = ReviewRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_response(serializer.errors)

        result = self.get_service().update_review(Principal.from_user(request.user), serializer.validated_data)
        if not result.ok:
            return error_response(result)

        return Response(ReviewSerializer(result.value).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="reviews_delete",
        summary="Delete your review",
        request=ReviewRequestSerializer,
        responses={200: RatingResponseSerializer},
        tags=["Reviews"],
    )
    def remove(self, request):
        serializer = ReviewRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_response(serializer.errors)

        result = self.get_service().delete_review(Principal.from_user(request.user), serializer.validated_data)
        if not result.ok:
            return error_response(result)

        return Response({"store_rating": result.value}, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="reviews_moderate",
        summary="Remove a review of your store",
        request=ModerationRequestSerializer,
        responses={200: RatingResponseSerializer},
        tags=["Reviews"],
    )
    def moderate(self, request):
        serializer = ModerationRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_response(serializer.errors)

        data = serializer.validated_data
        result = self.get_service().delete_review_as_owner(
            Principal.from_user(request.user),
            data["store_name"],
            data["reviewer_id"],
            data["visited_date"],
            data["visited_time"],
        )
        if not result.ok:
            return error_response(result)

        return Response({"store_rating": result.value}, status=status.HTTP_200_OK)
