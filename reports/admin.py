from django.contrib import admin
from .models import Report


@admin.register(Report)
class ReportAdmin(admin.ModelAdmin):
    list_display = ("id", "reporter", "reported_user", "reason", "status", "priority", "created_at")
    list_filter = ("status", "priority", "reason")
    search_fields = ("reporter__username", "reported_user__username", "description")
    readonly_fields = ("created_at", "updated_at")
