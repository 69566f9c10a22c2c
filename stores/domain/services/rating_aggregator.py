"""
RatingAggregator - Store Rating Maintenance

Keeps ``Store.rating`` equal to the mean rate of the store's reviews (0 when
there are none) as reviews are created, edited and removed.

Every operation locks the store row with SELECT ... FOR UPDATE inside a
transaction, so concurrent review writes for one store are applied one at a
time and no update is lost. Lock conflicts are retried with backoff.
"""

import logging
from typing import Callable, Optional

from django.conf import settings
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Avg

from stores.domain.models import Review, Store
from stores.infra.observability.metrics import rating_lock_wait, rating_recomputations_total
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from utils.transaction_utils import TransactionError, retry_on_deadlock

logger = logging.getLogger(__name__)

OPERATION_CREATE = "create"
OPERATION_UPDATE = "update"
OPERATION_DELETE = "delete"


class RatingAggregator(BaseService):
    """
    Serialized per-store rating recomputation.

    Each public method returns the store's new rating.
    """

    def __init__(self, max_retries: Optional[int] = None):
        super().__init__()
        if max_retries is None:
            max_retries = getattr(settings, "RESERVATIONS", {}).get("RATING_LOCK_RETRIES", 3)
        self.max_retries = max_retries

    @BaseService.log_performance
    def on_create(self, review: Review) -> ServiceResult[float]:
        """
        Persist a new review and fold its rate into the store mean.

        The mean is computed from the reviews present before the insert:
        (sum(existing) + new) / (count(existing) + 1).
        """

        def apply(store: Store) -> float:
            existing = list(Review.objects.filter(store=store).values_list("rate", flat=True))
            rating = (sum(existing) + review.rate) / (len(existing) + 1)

            review.store = store
            review.save()
            self._save_rating(store, rating)
            return rating

        try:
            return self._run(OPERATION_CREATE, review.store_id, apply)
        except IntegrityError:
            rating_recomputations_total.labels(operation=OPERATION_CREATE, outcome="duplicate").inc()
            return service_err(ErrorCodes.DUPLICATE_REVIEW, "A review for this visit already exists")

    @BaseService.log_performance
    def on_update(self, review: Review, new_rate: float, comment: Optional[str] = None) -> ServiceResult[float]:
        """
        Store the new rate, then recompute the mean over all current reviews.

        The review row is re-read under the store lock; a review deleted in
        the meantime yields review_not_found instead of being written back.
        """

        def apply(store: Store) -> float:
            current = Review.objects.select_for_update().get(pk=review.pk, store=store)
            current.rate = new_rate
            fields = ["rate", "updated_at"]
            if comment is not None:
                current.comment = comment
                fields.append("comment")
            current.save(update_fields=fields)

            rating = self._mean(Review.objects.filter(store=store))
            self._save_rating(store, rating)

            review.rate = current.rate
            review.comment = current.comment
            review.updated_at = current.updated_at
            review.store = store
            return rating

        return self._run(OPERATION_UPDATE, review.store_id, apply)

    @BaseService.log_performance
    def on_delete(self, review: Review) -> ServiceResult[float]:
        """Recompute the mean without the review, persist it, then delete the review."""

        def apply(store: Store) -> float:
            rating = self._mean(Review.objects.filter(store=store).exclude(pk=review.pk))
            self._save_rating(store, rating)
            review.delete()
            return rating

        return self._run(OPERATION_DELETE, review.store_id, apply)

    def _run(self, operation: str, store_id: int, apply: Callable[[Store], float]) -> ServiceResult[float]:
        """
        Run ``apply`` against the locked store row, retrying on lock conflicts.

        IntegrityError is re-raised for the caller to translate.
        """

        @retry_on_deadlock(max_retries=self.max_retries)
        def attempt() -> float:
            with transaction.atomic(), rating_lock_wait.time():
                store = Store.objects.select_for_update().get(pk=store_id)
                return apply(store)

        try:
            rating = attempt()
            rating_recomputations_total.labels(operation=operation, outcome="ok").inc()
            self.logger.info(f"Store {store_id} rating after {operation}: {rating:.3f}")
            return service_ok(rating)

        except Store.DoesNotExist:
            rating_recomputations_total.labels(operation=operation, outcome="not_found").inc()
            return service_err(ErrorCodes.STORE_NOT_FOUND, f"Store {store_id} not found")
        except Review.DoesNotExist:
            rating_recomputations_total.labels(operation=operation, outcome="not_found").inc()
            return service_err(ErrorCodes.REVIEW_NOT_FOUND, "Review not found")
        except IntegrityError:
            raise
        except (TransactionError, DatabaseError) as e:
            rating_recomputations_total.labels(operation=operation, outcome="error").inc()
            self.logger.error(f"Rating {operation} for store {store_id} failed: {e}", exc_info=True)
            return service_err(ErrorCodes.DATABASE_ERROR, "Could not update the store rating")
        except Exception as e:
            rating_recomputations_total.labels(operation=operation, outcome="error").inc()
            self.logger.error(f"Error during rating {operation} for store {store_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @staticmethod
    def _mean(reviews) -> float:
        average = reviews.aggregate(average=Avg("rate"))["average"]
        return float(average) if average is not None else 0.0

    @staticmethod
    def _save_rating(store: Store, rating: float):
        store.rating = rating
        store.save(update_fields=["rating"])
