from django.contrib import admin
from .models import Book, BorrowRequest, Review


@admin.register(Book)
class BookAdmin(admin.ModelAdmin):
    list_display = ("title", "author", "owner", "is_available", "for_borrowing", "for_selling")
    list_filter = ("is_available", "for_borrowing", "for_selling", "condition")
    search_fields = ("title", "author", "isbn", "owner__username")
    readonly_fields = ("created_at", "updated_at")


@admin.register(BorrowRequest)
class BorrowRequestAdmin(admin.ModelAdmin):
    list_display = ("book", "borrower", "owner", "status", "request_date", "due_date")
    list_filter = ("status",)
    search_fields = ("book__title", "borrower__username", "owner__username")


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("book", "user", "rating", "created_at")
    list_filter = ("rating",)
    search_fields = ("book__title", "user__username")
