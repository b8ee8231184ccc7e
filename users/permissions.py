# users/permissions.py
from rest_framework import permissions
import logging

from core.exceptions import AdminRequired

logger = logging.getLogger(__name__)


class IsAdminRole(permissions.BasePermission):
    """
    Allow access to users with the admin or superadmin role.

    Anonymous requests fall through to DRF's 401 handling; authenticated
    non-admins get ``AdminRequired``.
    """

    def has_permission(self, request, view):
        user = request.user
        if not (user and user.is_authenticated):
            return False
        if not user.is_admin:
            logger.debug("Admin permission denied for user %s", user.id)
            raise AdminRequired()
        return True


class IsOwnerOrAdmin(permissions.BasePermission):
    """
    Allow object access to its owner or to admins.
    """

    owner_field = "owner"

    def has_object_permission(self, request, view, obj):
        if request.user.is_admin:
            return True
        field = getattr(view, "owner_field", self.owner_field)
        return getattr(obj, field, None) == request.user
