from prometheus_client import Counter, Histogram


# Reservation Metrics
bookings_total = Counter("stores_bookings_total", "Booking attempts", ["outcome"])
refusals_total = Counter("stores_reservation_refusals_total", "Reservations refused by owners", ["outcome"])
arrival_confirmations_total = Counter(
    "stores_arrival_confirmations_total", "Arrival confirmation attempts", ["outcome"]
)

# Rating Metrics
rating_recomputations_total = Counter(
    "stores_rating_recomputations_total", "Store rating recomputations", ["operation", "outcome"]
)
rating_lock_wait = Histogram("stores_rating_lock_seconds", "Time spent holding the store rating lock")

# Performance Metrics
ranking_duration = Histogram("stores_ranking_seconds", "Store ranking time", ["criterion"])
