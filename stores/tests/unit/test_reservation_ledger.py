import datetime
from unittest.mock import MagicMock, patch

import pytest

from stores.domain.models import Reservation
from stores.domain.services.reservation_ledger import ReservationLedger
from stores.tests.factories import ReservationFactory, StoreFactory
from utils.service_base import ErrorCodes

SLOT_DATE = datetime.date(2030, 5, 1)
SLOT_TIME = datetime.time(18, 0)


@pytest.mark.unit
@pytest.mark.django_db
class TestReservationLedgerBooking:
    def setup_method(self):
        self.ledger = ReservationLedger()

    def test_book_free_slot(self):
        store = StoreFactory()

        result = self.ledger.book(store.id, SLOT_DATE, SLOT_TIME, "010-1111-2222")

        assert result.ok
        assert result.value.status is True
        assert Reservation.objects.filter(store=store).count() == 1

    def test_book_taken_slot_conflicts(self):
        store = StoreFactory()
        ReservationFactory(store=store, reservation_date=SLOT_DATE, reservation_time=SLOT_TIME)

        result = self.ledger.book(store.id, SLOT_DATE, SLOT_TIME, "010-3333-4444")

        assert not result.ok
        assert result.error == ErrorCodes.SLOT_CONFLICT
        assert result.kind == "conflict"
        assert Reservation.objects.filter(store=store).count() == 1

    def test_refused_reservation_still_blocks_the_slot(self):
        store = StoreFactory()
        ReservationFactory(store=store, reservation_date=SLOT_DATE, reservation_time=SLOT_TIME, status=False)

        result = self.ledger.book(store.id, SLOT_DATE, SLOT_TIME, "010-3333-4444")

        assert result.error == ErrorCodes.SLOT_CONFLICT

    def test_other_time_same_day_is_free(self):
        store = StoreFactory()
        ReservationFactory(store=store, reservation_date=SLOT_DATE, reservation_time=SLOT_TIME)

        result = self.ledger.book(store.id, SLOT_DATE, datetime.time(19, 0), "010-3333-4444")

        assert result.ok

    def test_book_unknown_store(self):
        result = self.ledger.book(999999, SLOT_DATE, SLOT_TIME, "010-1111-2222")

        assert result.error == ErrorCodes.STORE_NOT_FOUND

    def test_book_by_store_name(self):
        store = StoreFactory(name="Noodle Bar")

        result = self.ledger.book_by_store_name("Noodle Bar", SLOT_DATE, SLOT_TIME, "010-1111-2222")

        assert result.ok
        assert result.value.store_id == store.id

    def test_book_by_unknown_store_name(self):
        result = self.ledger.book_by_store_name("Nowhere", SLOT_DATE, SLOT_TIME, "010-1111-2222")

        assert result.error == ErrorCodes.STORE_NOT_FOUND

    def test_lost_race_maps_to_slot_conflict(self):
        """A booking that passes the pre-check but loses at insert is still a conflict."""
        store = StoreFactory()
        ReservationFactory(store=store, reservation_date=SLOT_DATE, reservation_time=SLOT_TIME)

        # Simulate the competing booking committing between the check and the insert
        with patch.object(ReservationLedger, "_slot_taken", return_value=False):
            result = self.ledger.book(store.id, SLOT_DATE, SLOT_TIME, "010-5555-6666")

        assert not result.ok
        assert result.error == ErrorCodes.SLOT_CONFLICT
        assert Reservation.objects.filter(store=store).count() == 1


@pytest.mark.unit
@pytest.mark.django_db
class TestReservationLedgerRefusal:
    def setup_method(self):
        self.ledger = ReservationLedger()

    def test_refuse_active_reservation(self):
        reservation = ReservationFactory(reservation_date=SLOT_DATE, reservation_time=SLOT_TIME)

        result = self.ledger.refuse(reservation.store_id, SLOT_DATE, SLOT_TIME)

        assert result.ok
        reservation.refresh_from_db()
        assert reservation.status is False

    def test_refuse_twice_is_invalid_state(self):
        reservation = ReservationFactory(reservation_date=SLOT_DATE, reservation_time=SLOT_TIME, status=False)

        result = self.ledger.refuse(reservation.store_id, SLOT_DATE, SLOT_TIME)

        assert not result.ok
        assert result.error == ErrorCodes.RESERVATION_ALREADY_REFUSED
        assert result.kind == "invalid_state"

    def test_refuse_missing_reservation(self):
        store = StoreFactory()

        result = self.ledger.refuse(store.id, SLOT_DATE, SLOT_TIME)

        assert result.error == ErrorCodes.RESERVATION_NOT_FOUND

    @patch("stores.domain.models.Reservation.objects.select_for_update")
    def test_refuse_locks_the_row(self, mock_select_for_update):
        mock_reservation = MagicMock(spec=Reservation)
        mock_reservation.status = True
        mock_reservation.id = 7

        mock_queryset = MagicMock()
        mock_queryset.get.return_value = mock_reservation
        mock_select_for_update.return_value = mock_queryset

        result = self.ledger.refuse(1, SLOT_DATE, SLOT_TIME)

        assert result.ok
        mock_select_for_update.assert_called_once()
        mock_reservation.save.assert_called_once_with(update_fields=["status"])
        assert mock_reservation.status is False


@pytest.mark.unit
@pytest.mark.django_db
class TestReservationLedgerSchedule:
    def test_list_for_date_sorted_by_time(self):
        store = StoreFactory()
        for hour in (15, 9, 12):
            ReservationFactory(store=store, reservation_date=SLOT_DATE, reservation_time=datetime.time(hour, 0))
        ReservationFactory(store=store, reservation_date=SLOT_DATE + datetime.timedelta(days=1))

        result = ReservationLedger().list_for_date(store.id, SLOT_DATE)

        assert result.ok
        assert [r.reservation_time.hour for r in result.value] == [9, 12, 15]
