# users/views.py
from rest_framework import generics, viewsets
from rest_framework.permissions import AllowAny, IsAuthenticated
from django.contrib.auth import get_user_model
from drf_spectacular.utils import extend_schema, extend_schema_view

from .permissions import IsAdminRole
from .serializers import (
    CustomUserSerializer,
    RegisterSerializer,
    UserAdminUpdateSerializer,
)
import logging

logger = logging.getLogger(__name__)

CustomUser = get_user_model()


@extend_schema(tags=["Users"], summary="Register a new account")
class RegisterView(generics.CreateAPIView):
    serializer_class = RegisterSerializer
    permission_classes = [AllowAny]
    authentication_classes = []


@extend_schema(tags=["Users"], summary="Current user profile")
class CurrentUserView(generics.RetrieveUpdateAPIView):
    serializer_class = CustomUserSerializer
    permission_classes = [IsAuthenticated]
    http_method_names = ["get", "patch", "head", "options"]

    def get_object(self):
        return self.request.user


@extend_schema_view(
    list=extend_schema(summary="List users (admin)", tags=["Users"]),
    partial_update=extend_schema(
        summary="Change a user's role or active flag (admin)",
        tags=["Users"],
        request=UserAdminUpdateSerializer,
    ),
)
class AdminUserViewSet(viewsets.ModelViewSet):
    queryset = CustomUser.objects.all().order_by("-date_joined")
    permission_classes = [IsAuthenticated, IsAdminRole]
    http_method_names = ["get", "patch", "head", "options"]

    def get_serializer_class(self):
        if self.action == "partial_update":
            return UserAdminUpdateSerializer
        return CustomUserSerializer

    def perform_update(self, serializer):
        user = serializer.save()
        logger.info("Admin %s updated user %s", self.request.user.id, user.id)
