from django.urls import path

from .api.views import ReservationViewSet, ReviewViewSet, StoreRankingViewSet, StoreViewSet

app_name = "stores"

urlpatterns = [
    # Stores
    path("stores/", StoreViewSet.as_view({"post": "create"}), name="store-list"),
    path(
        "stores/ranking/<str:criterion>/",
        StoreRankingViewSet.as_view({"get": "ranking"}),
        name="store-ranking",
    ),
    path(
        "stores/<str:name>/",
        StoreViewSet.as_view({"get": "retrieve", "put": "update", "delete": "destroy"}),
        name="store-detail",
    ),
    # Reservations
    path("reservations/", ReservationViewSet.as_view({"post": "create"}), name="reservation-book"),
    path("reservations/schedule/", ReservationViewSet.as_view({"get": "schedule"}), name="reservation-schedule"),
    path("reservations/refuse/", ReservationViewSet.as_view({"post": "refuse"}), name="reservation-refuse"),
    path("reservations/arrival/", ReservationViewSet.as_view({"get": "arrival"}), name="reservation-arrival"),
    # Reviews
    path(
        "reviews/",
        ReviewViewSet.as_view({"get": "list", "post": "create", "put": "modify", "delete": "remove"}),
        name="review-list",
    ),
    path("reviews/moderate/", ReviewViewSet.as_view({"delete": "moderate"}), name="review-moderate"),
]
