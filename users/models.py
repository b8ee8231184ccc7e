# users/models.py
from decimal import Decimal

from django.db import models
from django.contrib.auth.models import AbstractUser
from django.utils import timezone
import logging
from model_utils import FieldTracker

logger = logging.getLogger(__name__)


class CustomUser(AbstractUser):
    ROLE_USER = "user"
    ROLE_ADMIN = "admin"
    ROLE_SUPERADMIN = "superadmin"
    ROLE_CHOICES = [
        (ROLE_USER, "User"),
        (ROLE_ADMIN, "Admin"),
        (ROLE_SUPERADMIN, "Super Admin"),
    ]
    ADMIN_ROLES = (ROLE_ADMIN, ROLE_SUPERADMIN)

    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_USER)
    email = models.EmailField(unique=True)
    phone_number = models.CharField(max_length=15, blank=True, null=True)
    wallet_balance = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    pending_earnings = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    tracker = FieldTracker(["role", "is_active"])

    REQUIRED_FIELDS = ["email"]

    class Meta:
        db_table = "users_user"
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["-date_joined"]

    def __str__(self):
        return self.username

    @property
    def is_admin(self):
        return self.is_superuser or self.role in self.ADMIN_ROLES

    def save(self, *args, **kwargs):
        is_new = self._state.adding
        changed = [] if is_new else [
            field for field in ("role", "is_active") if self.tracker.has_changed(field)
        ]
        previous_role = self.tracker.previous("role")
        # Read by the post_save handler in users.signals
        self._admin_fields_changed = changed
        super().save(*args, **kwargs)

        if "role" in changed:
            logger.info(
                "User %s role changed from %s to %s",
                self.pk,
                previous_role,
                self.role,
            )
