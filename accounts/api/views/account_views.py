from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenObtainPairView

from accounts.api.serializers import (
    AccountUpdateSerializer,
    CustomTokenObtainPairSerializer,
    UserRegistrationSerializer,
    UserSerializer,
)
from accounts.domain.services import AccountService
from infrastructure.container import container
from utils.api_errors import error_response, validation_response


def get_account_service() -> AccountService:
    return container.account_service()


class SignUpAPIView(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(
        operation_id="accounts_signup",
        summary="Register an owner or customer account",
        request=UserRegistrationSerializer,
        responses={
            201: UserSerializer,
            400: OpenApiResponse(description="Invalid payload"),
            409: OpenApiResponse(description="User id already taken"),
        },
        tags=["Accounts"],
    )
    def post(self, request):
        serializer = UserRegistrationSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_response(serializer.errors)

        result = get_account_service().register(serializer.validated_data)
        if not result.ok:
            return error_response(result)

        return Response(UserSerializer(result.value).data, status=status.HTTP_201_CREATED)


class SignInAPIView(TokenObtainPairView):
    """Username/password sign-in returning an access/refresh pair with role claims."""

    serializer_class = CustomTokenObtainPairSerializer


class AccountAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(operation_id="accounts_me", summary="Current account", responses={200: UserSerializer}, tags=["Accounts"])
    def get(self, request):
        return Response(UserSerializer(request.user).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="accounts_edit",
        summary="Edit the current account",
        request=AccountUpdateSerializer,
        responses={200: UserSerializer},
        tags=["Accounts"],
    )
    def put(self, request):
        serializer = AccountUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_response(serializer.errors)

        result = get_account_service().edit_account(request.user, serializer.validated_data)
        if not result.ok:
            return error_response(result)

        return Response(UserSerializer(result.value).data, status=status.HTTP_200_OK)

    @extend_schema(operation_id="accounts_delete", summary="Delete the current account", tags=["Accounts"])
    def delete(self, request):
        result = get_account_service().delete_account(request.user)
        if not result.ok:
            return error_response(result)

        return Response(status=status.HTTP_204_NO_CONTENT)
