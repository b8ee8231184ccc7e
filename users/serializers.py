# users/serializers.py
from rest_framework import serializers
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
import logging

logger = logging.getLogger(__name__)
CustomUser = get_user_model()


class CustomUserSerializer(serializers.ModelSerializer):
    class Meta:
        model = CustomUser
        fields = [
            "id",
            "username",
            "email",
            "first_name",
            "last_name",
            "role",
            "is_active",
            "wallet_balance",
            "pending_earnings",
            "date_joined",
        ]
        read_only_fields = [
            "role",
            "is_active",
            "wallet_balance",
            "pending_earnings",
            "date_joined",
        ]


class UserSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = CustomUser
        fields = ["id", "username", "email"]


class RegisterSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, validators=[validate_password])

    class Meta:
        model = CustomUser
        fields = ["id", "username", "email", "password", "first_name", "last_name"]

    def create(self, validated_data):
        password = validated_data.pop("password")
        user = CustomUser(**validated_data)
        user.set_password(password)
        user.save()
        logger.info("Registered user %s", user.id)
        return user


class UserAdminUpdateSerializer(serializers.ModelSerializer):
    """Fields an admin may change on another account."""

    class Meta:
        model = CustomUser
        fields = ["role", "is_active"]
