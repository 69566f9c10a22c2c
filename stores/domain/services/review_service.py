"""
ReviewService - Store Review Management

Validates review requests, ties each review to a reservation the reviewer
actually held, and routes every rate change through the RatingAggregator so
the store rating stays equal to the mean of its reviews.
"""

import logging
from typing import Any, Dict, Optional

from django.contrib.auth import get_user_model
from django.db import DatabaseError

from accounts.domain.principal import Principal
from stores.domain.models import MAX_RATE, MIN_RATE, Reservation, Review, Store
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

from .pagination import paginate
from .rating_aggregator import RatingAggregator

User = get_user_model()
logger = logging.getLogger(__name__)

LOOKUP_FIELDS = ("reviewer_id", "store_name", "visited_date", "visited_time")
CREATE_FIELDS = LOOKUP_FIELDS + ("rate", "comment")


class ReviewService(BaseService):
    """
    Service for managing store reviews.

    Responsibilities:
    - Create review (reviewer must have held the reservation for that visit)
    - Update / delete review (reviewer only)
    - Delete review as the store owner (moderation)
    - List a store's reviews

    Dependencies:
    - RatingAggregator: applies every rate change to the store rating
    """

    def __init__(self, rating_aggregator: RatingAggregator = None):
        super().__init__()
        self.rating_aggregator = rating_aggregator or RatingAggregator()

    @BaseService.log_performance
    def create_review(self, principal: Principal, request: Dict[str, Any]) -> ServiceResult[Review]:
        """
        Create a review for a past reservation.

        Args:
            principal: authenticated caller, must be the reviewer
            request: reviewer_id, store_name, visited_date, visited_time, rate, comment

        Returns:
            ServiceResult with the saved Review (its store carries the new rating)
        """
        missing = self._missing(request, CREATE_FIELDS)
        if missing:
            return service_err(ErrorCodes.VALIDATION_ERROR, f"Missing required fields: {', '.join(missing)}")

        rate = request["rate"]
        if not self._valid_rate(rate):
            return service_err(ErrorCodes.INVALID_INPUT, f"Rate must be between {MIN_RATE:g} and {MAX_RATE:g}")

        if principal.user_id != request["reviewer_id"]:
            return service_err(ErrorCodes.PERMISSION_DENIED, "You can only write reviews as yourself")

        try:
            reviewer = User.objects.filter(username=request["reviewer_id"]).first()
            if reviewer is None:
                return service_err(ErrorCodes.USER_NOT_FOUND, f"User '{request['reviewer_id']}' not found")

            store = Store.objects.filter(name=request["store_name"]).first()
            if store is None:
                return service_err(ErrorCodes.STORE_NOT_FOUND, f"Store '{request['store_name']}' not found")

            reservation = Reservation.objects.filter(
                store=store,
                reservation_date=request["visited_date"],
                reservation_time=request["visited_time"],
            ).first()
            if reservation is None:
                return service_err(ErrorCodes.RESERVATION_NOT_FOUND, "No reservation matches this visit")

            if reviewer.phone_number != reservation.holder_contact:
                return service_err(ErrorCodes.PERMISSION_DENIED, "Only the reservation holder can review this visit")

            if Review.objects.filter(
                reviewer_id=reviewer.username,
                store=store,
                visited_date=reservation.reservation_date,
                visited_time=reservation.reservation_time,
            ).exists():
                return service_err(ErrorCodes.DUPLICATE_REVIEW, "You have already reviewed this visit")

            review = Review(
                reviewer_id=reviewer.username,
                store=store,
                visited_date=reservation.reservation_date,
                visited_time=reservation.reservation_time,
                rate=float(rate),
                comment=request["comment"],
            )

            result = self.rating_aggregator.on_create(review)
            if not result.ok:
                return result

            self.logger.info(f"Created review {review.id} for store '{store.name}' by {reviewer.username}")
            return service_ok(review)

        except DatabaseError as e:
            self.logger.error(f"Database error creating review: {e}", exc_info=True)
            return service_err(ErrorCodes.DATABASE_ERROR, "Review storage is unavailable")
        except Exception as e:
            self.logger.error(f"Error creating review: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def update_review(self, principal: Principal, request: Dict[str, Any]) -> ServiceResult[Review]:
        """
        Update rate and/or comment of an existing review.

        Only keys present (and not None) in ``request`` are changed.
        """
        missing = self._missing(request, LOOKUP_FIELDS)
        if missing:
            return service_err(ErrorCodes.VALIDATION_ERROR, f"Missing required fields: {', '.join(missing)}")

        rate = request.get("rate")
        if rate is not None and not self._valid_rate(rate):
            return service_err(ErrorCodes.INVALID_INPUT, f"Rate must be between {MIN_RATE:g} and {MAX_RATE:g}")

        try:
            lookup = self._find_review(request)
            if not lookup.ok:
                return lookup
            review = lookup.value

            if principal.user_id != review.reviewer_id:
                return service_err(ErrorCodes.PERMISSION_DENIED, "You can only update your own reviews")

            comment = request.get("comment")
            if rate is not None:
                result = self.rating_aggregator.on_update(review, float(rate), comment=comment)
                if not result.ok:
                    return result
            elif comment is not None:
                review.comment = comment
                review.save(update_fields=["comment", "updated_at"])

            self.logger.info(f"Updated review {review.id}")
            return service_ok(review)

        except DatabaseError as e:
            self.logger.error(f"Database error updating review: {e}", exc_info=True)
            return service_err(ErrorCodes.DATABASE_ERROR, "Review storage is unavailable")
        except Exception as e:
            self.logger.error(f"Error updating review: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def delete_review(self, principal: Principal, request: Dict[str, Any]) -> ServiceResult[float]:
        """Delete the caller's own review; returns the store's new rating."""
        missing = self._missing(request, LOOKUP_FIELDS)
        if missing:
            return service_err(ErrorCodes.VALIDATION_ERROR, f"Missing required fields: {', '.join(missing)}")

        try:
            lookup = self._find_review(request)
            if not lookup.ok:
                return lookup
            review = lookup.value

            if principal.user_id != review.reviewer_id:
                return service_err(ErrorCodes.PERMISSION_DENIED, "You can only delete your own reviews")

            return self.rating_aggregator.on_delete(review)

        except DatabaseError as e:
            self.logger.error(f"Database error deleting review: {e}", exc_info=True)
            return service_err(ErrorCodes.DATABASE_ERROR, "Review storage is unavailable")
        except Exception as e:
            self.logger.error(f"Error deleting review: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def delete_review_as_owner(
        self, principal: Principal, store_name: str, reviewer_id: str, visited_date, visited_time
    ) -> ServiceResult[float]:
        """Moderation delete by the owner of the reviewed store."""
        try:
            store = Store.objects.select_related("owner").filter(name=store_name).first()
            if store is None:
                return service_err(ErrorCodes.STORE_NOT_FOUND, f"Store '{store_name}' not found")

            if not store.is_owned_by(principal.user_id):
                return service_err(ErrorCodes.PERMISSION_DENIED, "Only the store owner can remove reviews")

            review = Review.objects.filter(
                reviewer_id=reviewer_id, store=store, visited_date=visited_date, visited_time=visited_time
            ).first()
            if review is None:
                return service_err(ErrorCodes.REVIEW_NOT_FOUND, "Review not found")

            self.logger.info(f"Owner {principal.user_id} removing review {review.id} from '{store_name}'")
            return self.rating_aggregator.on_delete(review)

        except DatabaseError as e:
            self.logger.error(f"Database error moderating review: {e}", exc_info=True)
            return service_err(ErrorCodes.DATABASE_ERROR, "Review storage is unavailable")
        except Exception as e:
            self.logger.error(f"Error moderating review: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def list_reviews(self, store_name: str, page: int = 0, size: int = 10) -> ServiceResult[Dict[str, Any]]:
        """A store's reviews, newest first, one zero-based page at a time."""
        if page < 0 or size <= 0:
            return service_err(ErrorCodes.INVALID_INPUT, "page must be >= 0 and size > 0")

        try:
            store = Store.objects.filter(name=store_name).first()
            if store is None:
                return service_err(ErrorCodes.STORE_NOT_FOUND, f"Store '{store_name}' not found")

            reviews = Review.objects.filter(store=store).order_by("-created_at", "-id")
            result = paginate(reviews, page, size)
            result["store_name"] = store.name
            result["rating"] = store.rating
            return service_ok(result)

        except Exception as e:
            self.logger.error(f"Error listing reviews for '{store_name}': {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    def _find_review(self, request: Dict[str, Any]) -> ServiceResult[Review]:
        review = (
            Review.objects.select_related("store")
            .filter(
                reviewer_id=request["reviewer_id"],
                store__name=request["store_name"],
                visited_date=request["visited_date"],
                visited_time=request["visited_time"],
            )
            .first()
        )
        if review is None:
            return service_err(ErrorCodes.REVIEW_NOT_FOUND, "Review not found")
        return service_ok(review)

    @staticmethod
    def _missing(request: Dict[str, Any], fields) -> list:
        return [name for name in fields if request.get(name) in (None, "")]

    @staticmethod
    def _valid_rate(rate: Optional[float]) -> bool:
        try:
            return MIN_RATE <= float(rate) <= MAX_RATE
        except (TypeError, ValueError):
            return False
