import datetime
from unittest.mock import MagicMock

import pytest

from accounts.domain.principal import Principal
from stores.domain.models import Review
from stores.domain.services.rating_aggregator import RatingAggregator
from stores.domain.services.review_service import ReviewService
from stores.tests.factories import CustomerFactory, OwnerFactory, ReservationFactory, ReviewFactory, StoreFactory
from utils.service_base import ErrorCodes, service_ok

VISIT_DATE = datetime.date(2030, 5, 1)
VISIT_TIME = datetime.time(12, 0)


@pytest.mark.unit
@pytest.mark.django_db
class TestReviewService:
    def setup_method(self):
        self.service = ReviewService(rating_aggregator=RatingAggregator())
        self.owner = OwnerFactory(username="owner_kim")
        self.customer = CustomerFactory(username="lee", phone_number="010-2222-3333")
        self.store = StoreFactory(name="Dumpling House", owner=self.owner)
        self.reservation = ReservationFactory(
            store=self.store,
            reservation_date=VISIT_DATE,
            reservation_time=VISIT_TIME,
            holder_contact="010-2222-3333",
        )
        self.principal = Principal.from_user(self.customer)

    def _request(self, **overrides):
        request = {
            "reviewer_id": "lee",
            "store_name": "Dumpling House",
            "visited_date": VISIT_DATE,
            "visited_time": VISIT_TIME,
            "rate": 4.5,
            "comment": "Juicy dumplings",
        }
        request.update(overrides)
        return request

    def test_create_review_updates_store_rating(self):
        result = self.service.create_review(self.principal, self._request())

        assert result.ok
        assert result.value.visited_date == VISIT_DATE
        self.store.refresh_from_db()
        assert self.store.rating == pytest.approx(4.5)

    def test_create_requires_all_fields(self):
        result = self.service.create_review(self.principal, self._request(comment=None, rate=None))

        assert result.error == ErrorCodes.VALIDATION_ERROR
        assert "rate" in result.error_detail
        assert "comment" in result.error_detail

    @pytest.mark.parametrize("rate", [-0.5, 5.5])
    def test_create_rejects_out_of_range_rate(self, rate):
        result = self.service.create_review(self.principal, self._request(rate=rate))

        assert result.error == ErrorCodes.INVALID_INPUT

    @pytest.mark.parametrize("rate", [0, 5])
    def test_rate_bounds_are_inclusive(self, rate):
        result = self.service.create_review(self.principal, self._request(rate=rate))

        assert result.ok

    def test_create_as_someone_else_is_denied(self):
        other = Principal(user_id="park", role="customer", contact="010-9999-9999")

        result = self.service.create_review(other, self._request())

        assert result.error == ErrorCodes.PERMISSION_DENIED

    def test_create_for_unknown_store(self):
        result = self.service.create_review(self.principal, self._request(store_name="Ghost Kitchen"))

        assert result.error == ErrorCodes.STORE_NOT_FOUND

    def test_create_without_reservation(self):
        result = self.service.create_review(self.principal, self._request(visited_time=datetime.time(13, 0)))

        assert result.error == ErrorCodes.RESERVATION_NOT_FOUND

    def test_create_by_non_holder_is_denied(self):
        CustomerFactory(username="park", phone_number="010-7777-8888")
        park = Principal(user_id="park", role="customer", contact="010-7777-8888")

        result = self.service.create_review(park, self._request(reviewer_id="park"))

        assert result.error == ErrorCodes.PERMISSION_DENIED
        assert not Review.objects.exists()

    def test_create_twice_is_duplicate(self):
        self.service.create_review(self.principal, self._request())

        result = self.service.create_review(self.principal, self._request(rate=1.0))

        assert result.error == ErrorCodes.DUPLICATE_REVIEW
        self.store.refresh_from_db()
        assert self.store.rating == pytest.approx(4.5)

    def test_create_delegates_to_aggregator(self):
        aggregator = MagicMock(spec=RatingAggregator)
        aggregator.on_create.return_value = service_ok(4.5)
        service = ReviewService(rating_aggregator=aggregator)

        result = service.create_review(self.principal, self._request())

        assert result.ok
        aggregator.on_create.assert_called_once()
        review = aggregator.on_create.call_args[0][0]
        assert review.reviewer_id == "lee"
        assert review.rate == 4.5

    def test_update_rate_and_comment(self):
        self.service.create_review(self.principal, self._request())

        result = self.service.update_review(self.principal, self._request(rate=2.0, comment="Cold this time"))

        assert result.ok
        assert result.value.comment == "Cold this time"
        self.store.refresh_from_db()
        assert self.store.rating == pytest.approx(2.0)

    def test_update_comment_only_keeps_rating(self):
        self.service.create_review(self.principal, self._request())

        result = self.service.update_review(self.principal, self._request(rate=None, comment="Still good"))

        assert result.ok
        self.store.refresh_from_db()
        assert self.store.rating == pytest.approx(4.5)
        assert Review.objects.get().comment == "Still good"

    def test_update_missing_review(self):
        result = self.service.update_review(self.principal, self._request())

        assert result.error == ErrorCodes.REVIEW_NOT_FOUND

    def test_update_other_reviewers_review_is_denied(self):
        ReviewFactory(reviewer_id="park", store=self.store, visited_date=VISIT_DATE, visited_time=VISIT_TIME)

        result = self.service.update_review(self.principal, self._request(reviewer_id="park"))

        assert result.error == ErrorCodes.PERMISSION_DENIED

    def test_delete_own_review(self):
        self.service.create_review(self.principal, self._request())

        result = self.service.delete_review(self.principal, self._request())

        assert result.ok
        assert result.value == 0.0
        assert not Review.objects.exists()

    def test_owner_can_moderate_review(self):
        self.service.create_review(self.principal, self._request())
        owner = Principal.from_user(self.owner)

        result = self.service.delete_review_as_owner(owner, "Dumpling House", "lee", VISIT_DATE, VISIT_TIME)

        assert result.ok
        assert not Review.objects.exists()

    def test_other_owner_cannot_moderate(self):
        self.service.create_review(self.principal, self._request())
        rival = Principal.from_user(OwnerFactory(username="owner_choi"))

        result = self.service.delete_review_as_owner(rival, "Dumpling House", "lee", VISIT_DATE, VISIT_TIME)

        assert result.error == ErrorCodes.PERMISSION_DENIED
        assert Review.objects.count() == 1

    def test_list_reviews_newest_first(self):
        first = ReviewFactory(store=self.store, reviewer_id="a")
        second = ReviewFactory(store=self.store, reviewer_id="b")

        result = self.service.list_reviews("Dumpling House", 0, 10)

        assert result.ok
        assert [r.pk for r in result.value["results"]] == [second.pk, first.pk]
        assert result.value["count"] == 2
