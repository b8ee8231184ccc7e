# notifications/serializers.py
from rest_framework import serializers
from .models import UserNotificationView, VersionNotification


class ReleaseItemSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    icon = serializers.CharField(required=False, allow_blank=True, max_length=50)


class VersionNotificationSerializer(serializers.ModelSerializer):
    features = ReleaseItemSerializer(many=True, required=False)
    bug_fixes = ReleaseItemSerializer(many=True, required=False)
    improvements = ReleaseItemSerializer(many=True, required=False)
    target_users = serializers.ListField(
        child=serializers.ChoiceField(choices=VersionNotification.TARGET_CHOICES),
        required=False,
    )

    class Meta:
        model = VersionNotification
        fields = [
            "id",
            "version",
            "title",
            "description",
            "content",
            "type",
            "priority",
            "features",
            "bug_fixes",
            "improvements",
            "release_date",
            "is_active",
            "target_users",
            "expires_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_target_users(self, value):
        return value or [VersionNotification.TARGET_ALL]


class MarkViewedSerializer(serializers.Serializer):
    action = serializers.ChoiceField(
        choices=UserNotificationView.ACTION_CHOICES,
        default=UserNotificationView.ACTION_VIEWED,
    )
