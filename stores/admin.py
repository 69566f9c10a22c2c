from django.contrib import admin

from stores.models import Reservation, Review, Store


@admin.register(Store)
class StoreAdmin(admin.ModelAdmin):
    list_display = ("name", "location", "rating", "owner")
    search_fields = ("name", "location")
    readonly_fields = ("rating",)


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    list_display = ("store", "reservation_date", "reservation_time", "status")
    list_filter = ("status", "reservation_date")
    # Refusal goes through ReservationLedger.refuse and is never undone here
    readonly_fields = ("status",)


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    """Read-only: every review write must pass through the RatingAggregator."""

    list_display = ("store", "reviewer_id", "rate", "visited_date")
    readonly_fields = ("reviewer_id", "store", "visited_date", "visited_time", "rate")

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
