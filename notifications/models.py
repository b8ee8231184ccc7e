# notifications/models.py
from django.db import models
from django.utils import timezone
from django.conf import settings


class VersionNotification(models.Model):
    """Release announcement shown to users until they acknowledge it"""

    TYPE_CHOICES = [
        ("major", "Major"),
        ("minor", "Minor"),
        ("patch", "Patch"),
        ("hotfix", "Hotfix"),
    ]
    PRIORITY_CHOICES = [
        ("low", "Low"),
        ("medium", "Medium"),
        ("high", "High"),
        ("critical", "Critical"),
    ]
    TARGET_ALL = "all"
    TARGET_CHOICES = ["all", "admin", "user", "lender", "borrower"]

    version = models.CharField(max_length=50, unique=True)
    title = models.CharField(max_length=255)
    description = models.TextField()
    content = models.TextField()
    type = models.CharField(max_length=10, choices=TYPE_CHOICES, default="minor")
    priority = models.CharField(
        max_length=10, choices=PRIORITY_CHOICES, default="medium"
    )
    features = models.JSONField(default=list, blank=True)
    bug_fixes = models.JSONField(default=list, blank=True)
    improvements = models.JSONField(default=list, blank=True)
    release_date = models.DateTimeField(default=timezone.now)
    is_active = models.BooleanField(default=True)
    target_users = models.JSONField(default=list, blank=True)
    expires_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-release_date"]
        indexes = [
            models.Index(fields=["release_date"], name="version_notif_release_idx"),
            models.Index(fields=["is_active"], name="version_notif_active_idx"),
        ]

    def __str__(self):
        return f"{self.version}: {self.title}"

    def save(self, *args, **kwargs):
        if not self.target_users:
            self.target_users = [self.TARGET_ALL]
        super().save(*args, **kwargs)

    def is_expired(self, now=None):
        return self.expires_at is not None and self.expires_at <= (now or timezone.now())

    def targets_role(self, role):
        targets = self.target_users or [self.TARGET_ALL]
        if self.TARGET_ALL in targets or role in targets:
            return True
        # Super admins see everything addressed to admins
        return role == "superadmin" and "admin" in targets


class UserNotificationView(models.Model):
    """One acknowledgement record per user per version notification"""

    ACTION_VIEWED = "viewed"
    ACTION_DISMISSED = "dismissed"
    ACTION_CLOSED = "closed"
    ACTION_CHOICES = [
        (ACTION_VIEWED, "Viewed"),
        (ACTION_DISMISSED, "Dismissed"),
        (ACTION_CLOSED, "Closed"),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notification_views",
    )
    notification = models.ForeignKey(
        VersionNotification, on_delete=models.CASCADE, related_name="views"
    )
    viewed_at = models.DateTimeField(default=timezone.now)
    action = models.CharField(
        max_length=10, choices=ACTION_CHOICES, default=ACTION_VIEWED
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["user", "notification"], name="unique_user_notification_view"
            )
        ]

    def __str__(self):
        return f"{self.user_id} {self.action} {self.notification_id}"
