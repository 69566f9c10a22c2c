from rest_framework import serializers

from stores.domain.models import Reservation


class ReservationSerializer(serializers.ModelSerializer):
    store_name = serializers.CharField(source="store.name", read_only=True)
    date = serializers.DateField(source="reservation_date", read_only=True)
    time = serializers.TimeField(source="reservation_time", read_only=True)

    class Meta:
        model = Reservation
        fields = ("id", "store_name", "date", "time", "holder_contact", "status", "created_at")
        read_only_fields = fields


class SlotRequestSerializer(serializers.Serializer):
    """A (store, date, time) slot; used for booking and refusal."""

    storeName = serializers.CharField(source="store_name", max_length=100)
    date = serializers.DateField()
    time = serializers.TimeField()


class ScheduleQuerySerializer(serializers.Serializer):
    storeName = serializers.CharField(source="store_name", max_length=100)
    date = serializers.DateField()


class ArrivalQuerySerializer(serializers.Serializer):
    storeName = serializers.CharField(source="store_name", max_length=100)
    date = serializers.DateField()
    time = serializers.TimeField()
    phoneNumber = serializers.CharField(source="phone_number", max_length=20)


class ArrivalResponseSerializer(serializers.Serializer):
    status = serializers.CharField()
    store_name = serializers.CharField()
    date = serializers.DateField()
    time = serializers.TimeField()
