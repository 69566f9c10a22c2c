from .account_serializers import AccountUpdateSerializer, UserRegistrationSerializer, UserSerializer
from .jwt_serializers import CustomTokenObtainPairSerializer

__all__ = [
    "AccountUpdateSerializer",
    "CustomTokenObtainPairSerializer",
    "UserRegistrationSerializer",
    "UserSerializer",
]
