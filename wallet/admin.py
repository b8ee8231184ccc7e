from django.contrib import admin
from .models import WalletTransaction


@admin.register(WalletTransaction)
class WalletTransactionAdmin(admin.ModelAdmin):
    list_display = ("user", "type", "source", "amount", "balance_after", "created_at")
    list_filter = ("type", "source")
    search_fields = ("user__username", "description")
    readonly_fields = ("created_at",)
