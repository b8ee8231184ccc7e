# notifications/views.py
from rest_framework import permissions, status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import OpenApiParameter, extend_schema

from users.permissions import IsAdminRole
from .filters import VersionNotificationFilter
from .models import VersionNotification
from .serializers import MarkViewedSerializer, VersionNotificationSerializer
from .services import VersionNotificationService, notify_admins
import logging

logger = logging.getLogger(__name__)


class UnviewedNotificationsView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        summary="Unviewed release notifications",
        description="Active, unexpired notifications for the user's role that the user has not acknowledged.",
        responses={200: VersionNotificationSerializer(many=True)},
        tags=["Notifications"],
    )
    def get(self, request):
        notifications = VersionNotificationService.list_unviewed(request.user)
        return Response(
            {
                "success": True,
                "data": {
                    "notifications": VersionNotificationSerializer(
                        notifications, many=True
                    ).data,
                    "count": len(notifications),
                },
            }
        )


class VersionNotificationListView(APIView):
    permission_classes = [permissions.IsAuthenticated, IsAdminRole]

    @extend_schema(
        summary="Create release notification (admin)",
        request=VersionNotificationSerializer,
        responses={201: VersionNotificationSerializer},
        tags=["Notifications"],
    )
    def post(self, request):
        serializer = VersionNotificationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        notification = VersionNotificationService.create_notification(
            serializer.validated_data, actor=request.user
        )
        notify_admins("notify_new_version_notification", notification)
        return Response(
            {
                "success": True,
                "message": "Version notification created successfully",
                "data": VersionNotificationSerializer(notification).data,
            },
            status=status.HTTP_201_CREATED,
        )


class AdminVersionNotificationListView(APIView):
    permission_classes = [permissions.IsAuthenticated, IsAdminRole]

    @extend_schema(
        summary="All release notifications (admin)",
        parameters=[
            OpenApiParameter("page", int, required=False),
            OpenApiParameter("limit", int, required=False),
        ],
        tags=["Notifications"],
    )
    def get(self, request):
        try:
            page = int(request.query_params.get("page", 1))
            limit = int(request.query_params.get("limit", 20))
        except ValueError:
            page, limit = 1, 20

        filterset = VersionNotificationFilter(
            request.query_params, queryset=VersionNotification.objects.all()
        )
        if not filterset.is_valid():
            raise ValidationError(filterset.errors)

        result = VersionNotificationService.list_all(
            page=page, limit=limit, queryset=filterset.qs
        )
        return Response(
            {
                "success": True,
                "data": {
                    "notifications": VersionNotificationSerializer(
                        result["notifications"], many=True
                    ).data,
                    "pagination": result["pagination"],
                },
            }
        )


class VersionNotificationDetailView(APIView):
    def get_permissions(self):
        if self.request.method in ("PUT", "PATCH", "DELETE"):
            return [permissions.IsAuthenticated(), IsAdminRole()]
        return [permissions.IsAuthenticated()]

    @extend_schema(
        summary="Release notification detail",
        responses={200: VersionNotificationSerializer},
        tags=["Notifications"],
    )
    def get(self, request, pk):
        notification = VersionNotificationService.get_notification(pk)
        return Response(
            {"success": True, "data": VersionNotificationSerializer(notification).data}
        )

    @extend_schema(
        summary="Update release notification (admin)",
        request=VersionNotificationSerializer,
        responses={200: VersionNotificationSerializer},
        tags=["Notifications"],
    )
    def put(self, request, pk):
        notification = VersionNotificationService.get_notification(pk)
        serializer = VersionNotificationSerializer(
            notification, data=request.data, partial=True
        )
        serializer.is_valid(raise_exception=True)
        notification = VersionNotificationService.update_notification(
            pk, serializer.validated_data
        )
        notify_admins("notify_version_notification_update", notification)
        return Response(
            {
                "success": True,
                "message": "Notification updated successfully",
                "data": VersionNotificationSerializer(notification).data,
            }
        )

    @extend_schema(
        summary="Delete release notification and its view records (admin)",
        responses={200: None},
        tags=["Notifications"],
    )
    def delete(self, request, pk):
        notification_id, version = VersionNotificationService.delete_notification(pk)
        notify_admins("notify_version_notification_deleted", notification_id, version)
        return Response(
            {"success": True, "message": "Notification deleted successfully"}
        )


class MarkNotificationViewedView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        summary="Acknowledge a release notification",
        request=MarkViewedSerializer,
        tags=["Notifications"],
    )
    def post(self, request, pk):
        serializer = MarkViewedSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        action = serializer.validated_data["action"]
        view = VersionNotificationService.mark_viewed(request.user, pk, action)
        return Response(
            {
                "success": True,
                "message": f"Notification marked as {action}",
                "data": {"notification_id": view.notification_id, "action": action},
            }
        )
