"""
Business logic services for stores, reservations and reviews.
"""

from .arrival_gate import ArrivalGate
from .geo import haversine_km
from .rating_aggregator import RatingAggregator
from .reservation_ledger import ReservationLedger
from .review_service import ReviewService
from .store_ranker import StoreRanker
from .store_service import StoreService

__all__ = [
    "ArrivalGate",
    "RatingAggregator",
    "ReservationLedger",
    "ReviewService",
    "StoreRanker",
    "StoreService",
    "haversine_km",
]
