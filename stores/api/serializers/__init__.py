from .reservation_serializers import (
    ArrivalQuerySerializer,
    ArrivalResponseSerializer,
    ReservationSerializer,
    ScheduleQuerySerializer,
    SlotRequestSerializer,
)
from .response_serializers import (
    ErrorResponseSerializer,
    PageResponseSerializer,
    RankingResponseSerializer,
    RatingResponseSerializer,
)
from .review_serializers import (
    ModerationRequestSerializer,
    ReviewListQuerySerializer,
    ReviewRequestSerializer,
    ReviewSerializer,
)
from .store_serializers import RankingQuerySerializer, StoreSerializer, StoreWriteSerializer

__all__ = [
    "ArrivalQuerySerializer",
    "ArrivalResponseSerializer",
    "ErrorResponseSerializer",
    "ModerationRequestSerializer",
    "PageResponseSerializer",
    "RankingQuerySerializer",
    "RankingResponseSerializer",
    "RatingResponseSerializer",
    "ReservationSerializer",
    "ReviewListQuerySerializer",
    "ReviewRequestSerializer",
    "ReviewSerializer",
    "ScheduleQuerySerializer",
    "SlotRequestSerializer",
    "StoreSerializer",
    "StoreWriteSerializer",
]
