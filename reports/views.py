# reports/views.py
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import filters, viewsets
from rest_framework.permissions import IsAuthenticated

from notifications.services import notify_admins
from users.permissions import IsAdminRole, IsOwnerOrAdmin
from .models import Report
from .serializers import ReportSerializer, ReportStatusSerializer
import logging

logger = logging.getLogger(__name__)


@extend_schema_view(
    list=extend_schema(summary="Reports I filed, or all reports for admins", tags=["Reports"]),
    retrieve=extend_schema(summary="Report detail", tags=["Reports"]),
    create=extend_schema(summary="Report a user", tags=["Reports"]),
    partial_update=extend_schema(
        summary="Update report status (admin)",
        request=ReportStatusSerializer,
        tags=["Reports"],
    ),
)
class ReportViewSet(viewsets.ModelViewSet):
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_fields = ["status", "priority", "reason"]
    ordering_fields = ["created_at", "priority"]
    ordering = ["-created_at"]
    http_method_names = ["get", "post", "patch", "head", "options"]
    owner_field = "reporter"

    def get_queryset(self):
        queryset = Report.objects.select_related("reporter", "reported_user")
        if self.request.user.is_admin:
            return queryset
        return queryset.filter(reporter=self.request.user)

    def get_permissions(self):
        if self.action == "partial_update":
            return [IsAuthenticated(), IsAdminRole()]
        if self.action == "retrieve":
            return [IsAuthenticated(), IsOwnerOrAdmin()]
        return [IsAuthenticated()]

    def get_serializer_class(self):
        if self.action == "partial_update":
            return ReportStatusSerializer
        return ReportSerializer

    def perform_create(self, serializer):
        report = serializer.save(reporter=self.request.user)
        logger.info(
            "User %s reported user %s (%s)",
            self.request.user.id,
            report.reported_user_id,
            report.reason,
        )
        notify_admins("notify_new_report", report)

    def perform_update(self, serializer):
        report = serializer.save()
        logger.info(
            "Admin %s set report %s to %s", self.request.user.id, report.id, report.status
        )
        notify_admins("notify_report_update", report)
