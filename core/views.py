# core/views.py
from drf_spectacular.utils import extend_schema
from rest_framework import serializers
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from users.permissions import IsAdminRole
from .cache import clear_all_cache, clear_cache
import logging

logger = logging.getLogger(__name__)


class CacheClearSerializer(serializers.Serializer):
    pattern = serializers.CharField(required=False, allow_blank=True)


class CacheClearView(APIView):
    permission_classes = [IsAuthenticated, IsAdminRole]

    @extend_schema(
        summary="Clear cached responses (admin)",
        description="Removes entries whose path contains `pattern`, or every entry when it is omitted.",
        request=CacheClearSerializer,
        tags=["Admin"],
    )
    def post(self, request):
        serializer = CacheClearSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        pattern = serializer.validated_data.get("pattern")

        cleared = clear_cache(pattern) if pattern else clear_all_cache()
        logger.info(
            "Admin %s cleared %d cached responses (pattern: %s)",
            request.user.id,
            len(cleared),
            pattern or "*",
        )
        return Response(
            {"success": True, "data": {"cleared": cleared, "count": len(cleared)}}
        )
