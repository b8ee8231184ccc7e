# books/serializers.py
from rest_framework import serializers

from users.serializers import UserSummarySerializer
from .models import Book, BorrowRequest, Review


class BookSerializer(serializers.ModelSerializer):
    owner = UserSummarySerializer(read_only=True)
    average_rating = serializers.SerializerMethodField()

    class Meta:
        model = Book
        fields = [
            "id",
            "title",
            "author",
            "category",
            "description",
            "isbn",
            "condition",
            "owner",
            "is_available",
            "for_borrowing",
            "lending_duration",
            "security_deposit",
            "lending_fee",
            "for_selling",
            "selling_price",
            "average_rating",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "owner", "created_at", "updated_at"]

    def get_average_rating(self, obj):
        ratings = [review.rating for review in obj.reviews.all()]
        if not ratings:
            return None
        return round(sum(ratings) / len(ratings), 2)

    def validate(self, attrs):
        for_selling = attrs.get(
            "for_selling", getattr(self.instance, "for_selling", False)
        )
        selling_price = attrs.get(
            "selling_price", getattr(self.instance, "selling_price", None)
        )
        if for_selling and selling_price is None:
            raise serializers.ValidationError(
                {"selling_price": "A selling price is required for books on sale."}
            )
        return attrs


class BorrowRequestSerializer(serializers.ModelSerializer):
    book_id = serializers.PrimaryKeyRelatedField(
        source="book", queryset=Book.objects.all(), write_only=True
    )
    book = BookSerializer(read_only=True)
    borrower = UserSummarySerializer(read_only=True)
    owner = UserSummarySerializer(read_only=True)

    class Meta:
        model = BorrowRequest
        fields = [
            "id",
            "book",
            "book_id",
            "borrower",
            "owner",
            "status",
            "message",
            "request_date",
            "due_date",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "status",
            "request_date",
            "due_date",
            "created_at",
            "updated_at",
        ]

    def validate_book_id(self, book):
        user = self.context["request"].user
        if book.owner_id == user.id:
            raise serializers.ValidationError("You cannot borrow your own book.")
        if not book.for_borrowing:
            raise serializers.ValidationError("This book is not offered for borrowing.")
        if not book.is_available:
            raise serializers.ValidationError("This book is currently unavailable.")
        return book


class BorrowStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=BorrowRequest.STATUS_CHOICES)


class ReviewSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)

    class Meta:
        model = Review
        fields = ["id", "book", "user", "rating", "comment", "created_at", "updated_at"]
        read_only_fields = ["id", "user", "created_at", "updated_at"]

    def validate(self, attrs):
        request = self.context.get("request")
        if self.instance is None and request is not None:
            if Review.objects.filter(book=attrs["book"], user=request.user).exists():
                raise serializers.ValidationError(
                    {"book": "You have already reviewed this book."}
                )
        return attrs
