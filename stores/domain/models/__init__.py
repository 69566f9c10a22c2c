from .reservation import Reservation
from .review import MAX_RATE, MIN_RATE, Review
from .store import Store

__all__ = ["MAX_RATE", "MIN_RATE", "Reservation", "Review", "Store"]
