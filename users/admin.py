from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .models import CustomUser


@admin.register(CustomUser)
class CustomUserAdmin(UserAdmin):
    list_display = ["username", "email", "role", "is_active", "date_joined"]
    list_filter = ["role", "is_active", "date_joined"]
    search_fields = ["username", "email"]
    fieldsets = UserAdmin.fieldsets + (
        ("BookHive", {"fields": ("role", "phone_number", "wallet_balance", "pending_earnings")}),
    )
