from .reservation_views import ReservationViewSet
from .review_views import ReviewViewSet
from .store_views import StoreRankingViewSet, StoreViewSet

__all__ = ["ReservationViewSet", "ReviewViewSet", "StoreRankingViewSet", "StoreViewSet"]
