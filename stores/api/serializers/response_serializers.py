"""
Response serializers for OpenAPI schema generation only.
"""

from rest_framework import serializers


class ErrorResponseSerializer(serializers.Serializer):
    """Standard error response"""

    detail = serializers.CharField(help_text="Human-readable error message")
    code = serializers.CharField(help_text="Error code identifier, e.g. slot_conflict")
    kind = serializers.CharField(help_text="Error kind, e.g. conflict")


class PageResponseSerializer(serializers.Serializer):
    """Zero-based page of results"""

    count = serializers.IntegerField(help_text="Total number of matching items")
    page = serializers.IntegerField(help_text="Zero-based page index")
    size = serializers.IntegerField(help_text="Items per page")
    num_pages = serializers.IntegerField(help_text="Total number of pages")
    has_next = serializers.BooleanField()
    has_previous = serializers.BooleanField()
    results = serializers.ListField(child=serializers.DictField())


class RankingResponseSerializer(PageResponseSerializer):
    criterion = serializers.CharField(help_text="name, rating or distance")


class RatingResponseSerializer(serializers.Serializer):
    store_rating = serializers.FloatField(help_text="Store rating after the change")
