"""
Dependency Injection Container
================================

Simple service locator for the domain services used by the view layer.

Usage:
    from infrastructure.container import container

    ledger = container.reservation_ledger()
    ranker = container.store_ranker()
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Service container for domain services.

    Implements lazy initialization and caching of service instances.
    Singleton pattern.
    """

    _instance: Optional["ServiceContainer"] = None
    _initialized: bool = False

    def __new__(cls):
        """Ensure only one instance exists (singleton pattern)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize container (only once)."""
        if not self._initialized:
            self._account_service = None
            self._store_service = None
            self._store_ranker = None
            self._reservation_ledger = None
            self._arrival_gate = None
            self._rating_aggregator = None
            self._review_service = None

            self._initialized = True
            logger.info("Service container initialized")

    def account_service(self):
        """Get AccountService instance."""
        if self._account_service is None:
            from accounts.domain.services import AccountService

            self._account_service = AccountService()
            logger.debug("Created AccountService")
        return self._account_service

    def store_service(self):
        """Get StoreService instance."""
        if self._store_service is None:
            from stores.domain.services import StoreService

            self._store_service = StoreService()
            logger.debug("Created StoreService")
        return self._store_service

    def store_ranker(self):
        """Get StoreRanker instance."""
        if self._store_ranker is None:
            from stores.domain.services import StoreRanker

            self._store_ranker = StoreRanker()
            logger.debug("Created StoreRanker")
        return self._store_ranker

    def reservation_ledger(self):
        """Get ReservationLedger instance."""
        if self._reservation_ledger is None:
            from stores.domain.services import ReservationLedger

            self._reservation_ledger = ReservationLedger()
            logger.debug("Created ReservationLedger")
        return self._reservation_ledger

    def arrival_gate(self):
        """Get ArrivalGate instance."""
        if self._arrival_gate is None:
            from stores.domain.services import ArrivalGate

            self._arrival_gate = ArrivalGate()
            logger.debug("Created ArrivalGate")
        return self._arrival_gate

    def rating_aggregator(self):
        """Get RatingAggregator instance."""
        if self._rating_aggregator is None:
            from stores.domain.services import RatingAggregator

            self._rating_aggregator = RatingAggregator()
            logger.debug("Created RatingAggregator")
        return self._rating_aggregator

    def review_service(self):
        """Get ReviewService instance (shares the container's RatingAggregator)."""
        if self._review_service is None:
            from stores.domain.services import ReviewService

            self._review_service = ReviewService(rating_aggregator=self.rating_aggregator())
            logger.debug("Created ReviewService")
        return self._review_service

    def reset(self):
        """Drop cached instances (used by tests that patch settings)."""
        self._initialized = False
        self.__init__()
        logger.debug("Service container reset")


# Global container instance
container = ServiceContainer()
