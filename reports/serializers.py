# reports/serializers.py
from django.contrib.auth import get_user_model
from rest_framework import serializers

from users.serializers import UserSummarySerializer
from .models import Report

CustomUser = get_user_model()


class ReportSerializer(serializers.ModelSerializer):
    reporter = UserSummarySerializer(read_only=True)
    reported_user = serializers.PrimaryKeyRelatedField(
        queryset=CustomUser.objects.all()
    )

    class Meta:
        model = Report
        fields = [
            "id",
            "reporter",
            "reported_user",
            "reason",
            "description",
            "status",
            "priority",
            "admin_notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "reporter", "status", "admin_notes", "created_at", "updated_at"]

    def validate_reported_user(self, value):
        request = self.context.get("request")
        if request is not None and value.pk == request.user.pk:
            raise serializers.ValidationError("You cannot report yourself.")
        return value


class ReportStatusSerializer(serializers.ModelSerializer):
    """Fields an admin may change while handling a report."""

    class Meta:
        model = Report
        fields = ["status", "priority", "admin_notes"]
