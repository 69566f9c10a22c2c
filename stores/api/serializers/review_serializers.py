from rest_framework import serializers

from stores.domain.models import Review


class ReviewSerializer(serializers.ModelSerializer):
    store_name = serializers.CharField(source="store.name", read_only=True)
    store_rating = serializers.FloatField(source="store.rating", read_only=True)

    class Meta:
        model = Review
        fields = (
            "id",
            "reviewer_id",
            "store_name",
            "visited_date",
            "visited_time",
            "rate",
            "comment",
            "store_rating",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class ReviewRequestSerializer(serializers.Serializer):
    """
    Review create/update/delete payload.

    Fields are parsed here; which ones are required depends on the operation
    and is enforced by ReviewService.
    """

    reviewerId = serializers.CharField(source="reviewer_id", required=False)
    storeName = serializers.CharField(source="store_name", required=False)
    visitedDate = serializers.DateField(source="visited_date", required=False)
    visitedTime = serializers.TimeField(source="visited_time", required=False)
    rate = serializers.FloatField(required=False)
    comment = serializers.CharField(required=False, allow_blank=True)


class ModerationRequestSerializer(serializers.Serializer):
    reviewerId = serializers.CharField(source="reviewer_id")
    storeName = serializers.CharField(source="store_name")
    visitedDate = serializers.DateField(source="visited_date")
    visitedTime = serializers.TimeField(source="visited_time")


class ReviewListQuerySerializer(serializers.Serializer):
    storeName = serializers.CharField(source="store_name")
    page = serializers.IntegerField(required=False, default=0)
    size = serializers.IntegerField(required=False, default=10)
