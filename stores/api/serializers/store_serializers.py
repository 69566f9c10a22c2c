from rest_framework import serializers

from stores.domain.models import Store


class StoreSerializer(serializers.ModelSerializer):
    owner_id = serializers.CharField(source="owner.username", read_only=True)
    distance_km = serializers.SerializerMethodField()

    class Meta:
        model = Store
        fields = ("id", "name", "location", "latitude", "longitude", "description", "rating", "owner_id", "distance_km")
        read_only_fields = fields

    def get_distance_km(self, obj):
        # Only set by distance ranking
        return getattr(obj, "distance_km", None)


class StoreWriteSerializer(serializers.Serializer):
    """
    Store payload for enroll (all but description required, checked by the
    service) and for partial edit.
    """

    name = serializers.CharField(max_length=100, required=False)
    location = serializers.CharField(max_length=255, required=False)
    latitude = serializers.FloatField(min_value=-90, max_value=90, required=False)
    longitude = serializers.FloatField(min_value=-180, max_value=180, required=False)
    description = serializers.CharField(required=False, allow_blank=True)


class RankingQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(required=False, default=0)
    size = serializers.IntegerField(required=False)
    lat = serializers.FloatField(required=False)
    lng = serializers.FloatField(required=False)
    radius = serializers.FloatField(required=False)
