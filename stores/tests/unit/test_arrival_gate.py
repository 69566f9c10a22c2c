import datetime

import pytest
from django.utils import timezone

from stores.domain.services.arrival_gate import ArrivalGate
from stores.tests.factories import ReservationFactory, StoreFactory
from utils.service_base import ErrorCodes

TODAY = datetime.date(2030, 5, 1)
SLOT = datetime.time(18, 0)
PHONE = "010-1234-5678"


def fixed_clock(hour, minute, day=TODAY):
    return lambda: datetime.datetime.combine(day, datetime.time(hour, minute))


@pytest.mark.unit
@pytest.mark.django_db
class TestArrivalGate:
    def setup_method(self):
        self.store = StoreFactory(name="Kiosk Cafe")

    def _reserve(self, **kwargs):
        defaults = {
            "store": self.store,
            "reservation_date": TODAY,
            "reservation_time": SLOT,
            "holder_contact": PHONE,
        }
        defaults.update(kwargs)
        return ReservationFactory(**defaults)

    def _confirm(self, clock, lead_minutes=10):
        gate = ArrivalGate(clock=clock, lead_minutes=lead_minutes)
        return gate.confirm_arrival("Kiosk Cafe", TODAY, SLOT, PHONE)

    def test_confirm_well_before_slot(self):
        self._reserve()

        result = self._confirm(fixed_clock(17, 30))

        assert result.ok
        assert result.value == {
            "status": "confirmed",
            "store_name": "Kiosk Cafe",
            "date": "2030-05-01",
            "time": "18:00:00",
        }

    def test_confirm_exactly_at_lead_boundary(self):
        self._reserve()

        result = self._confirm(fixed_clock(17, 50))

        assert result.ok

    def test_inside_lead_window_is_rejected(self):
        self._reserve()

        result = self._confirm(fixed_clock(17, 55))

        assert not result.ok
        assert result.error == ErrorCodes.INVALID_CONFIRMATION
        assert result.kind == "invalid_state"
        assert "minutes early" in result.error_detail

    @pytest.mark.parametrize(
        "hour,minute,accepted",
        [
            (17, 49, True),
            (17, 50, True),
            (17, 51, False),
            (18, 1, False),
        ],
    )
    def test_arrival_window_boundaries(self, hour, minute, accepted):
        self._reserve()

        result = self._confirm(fixed_clock(hour, minute))

        assert result.ok is accepted
        if not accepted:
            assert result.error == ErrorCodes.INVALID_CONFIRMATION

    def test_after_slot_is_rejected(self):
        self._reserve()

        result = self._confirm(fixed_clock(18, 5))

        assert result.error == ErrorCodes.INVALID_CONFIRMATION
        assert "time has passed" in result.error_detail

    def test_other_day_is_rejected(self):
        self._reserve()

        result = self._confirm(fixed_clock(9, 0, day=TODAY - datetime.timedelta(days=1)))

        assert result.error == ErrorCodes.INVALID_CONFIRMATION
        assert "not for today" in result.error_detail

    def test_refused_reservation_is_rejected(self):
        self._reserve(status=False)

        result = self._confirm(fixed_clock(12, 0))

        assert result.error == ErrorCodes.INVALID_CONFIRMATION
        assert "refused" in result.error_detail

    def test_all_failed_checks_are_reported(self):
        self._reserve(status=False)

        result = self._confirm(fixed_clock(18, 30))

        assert "time has passed" in result.error_detail
        assert "minutes early" in result.error_detail
        assert "refused" in result.error_detail

    def test_wrong_phone_number_is_not_found(self):
        self._reserve()

        gate = ArrivalGate(clock=fixed_clock(12, 0))
        result = gate.confirm_arrival("Kiosk Cafe", TODAY, SLOT, "010-0000-0000")

        assert result.error == ErrorCodes.RESERVATION_NOT_FOUND
        assert result.kind == "not_found"

    def test_lead_minutes_is_configurable(self):
        self._reserve()

        assert not self._confirm(fixed_clock(17, 45), lead_minutes=30).ok
        assert self._confirm(fixed_clock(17, 45), lead_minutes=5).ok

    def test_aware_clock_is_read_as_local_wall_time(self):
        self._reserve()
        local_naive = datetime.datetime.combine(TODAY, datetime.time(17, 0))
        aware = timezone.make_aware(local_naive)

        result = self._confirm(lambda: aware)

        assert result.ok

    def test_confirmation_persists_nothing(self):
        reservation = self._reserve()

        self._confirm(fixed_clock(17, 0))

        reservation.refresh_from_db()
        assert reservation.status is True
