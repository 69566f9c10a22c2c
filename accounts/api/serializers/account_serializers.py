from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from accounts.domain.models import CustomUser
from utils.rbac import ROLES


class UserSerializer(serializers.ModelSerializer):
    user_id = serializers.CharField(source="username", read_only=True)

    class Meta:
        model = CustomUser
        fields = ("user_id", "name", "phone_number", "role", "date_joined")
        read_only_fields = fields


class UserRegistrationSerializer(serializers.Serializer):
    user_id = serializers.CharField(max_length=150)
    password = serializers.CharField(write_only=True, validators=[validate_password])
    password_confirm = serializers.CharField(write_only=True)
    name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    phone_number = serializers.CharField(max_length=20)
    role = serializers.ChoiceField(choices=ROLES)

    def validate(self, attrs):
        if attrs["password"] != attrs["password_confirm"]:
            raise serializers.ValidationError("Password fields didn't match.")
        attrs.pop("password_confirm")
        return attrs


class AccountUpdateSerializer(serializers.Serializer):
    """All fields optional; absent fields are left unchanged."""

    name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    phone_number = serializers.CharField(max_length=20, required=False)
    password = serializers.CharField(write_only=True, required=False, validators=[validate_password])
