"""
ArrivalGate - Kiosk Arrival Confirmation

Validates that a customer standing at the store is confirming an active
reservation for today, at least ARRIVAL_LEAD_MINUTES before the slot.
Nothing is persisted; the gate only answers yes or no.
"""

import datetime
import logging
from typing import Callable, Dict, List, Optional

from django.conf import settings
from django.db import DatabaseError
from django.utils import timezone

from stores.domain.models import Reservation
from stores.infra.observability.metrics import arrival_confirmations_total
from utils.logging_utils import mask_value
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

logger = logging.getLogger(__name__)

DEFAULT_LEAD_MINUTES = 10


def local_now() -> datetime.datetime:
    """Current wall-clock time in the configured TIME_ZONE, without tzinfo."""
    return timezone.localtime().replace(tzinfo=None)


class ArrivalGate(BaseService):
    """
    Arrival confirmation against the reservation ledger.

    ``clock`` returns the current local wall-clock time; tests inject a fixed one.
    """

    def __init__(self, clock: Optional[Callable[[], datetime.datetime]] = None, lead_minutes: Optional[int] = None):
        super().__init__()
        self.clock = clock or local_now
        if lead_minutes is None:
            lead_minutes = getattr(settings, "RESERVATIONS", {}).get("ARRIVAL_LEAD_MINUTES", DEFAULT_LEAD_MINUTES)
        self.lead = datetime.timedelta(minutes=lead_minutes)

    @BaseService.log_performance
    def confirm_arrival(
        self, store_name: str, date: datetime.date, time: datetime.time, holder_contact: str
    ) -> ServiceResult[Dict[str, str]]:
        """
        Confirm arrival for the reservation identified by
        (store_name, date, time, holder_contact).

        Returns:
            ServiceResult with {"status": "confirmed", "store_name", "date", "time"},
            or reservation_not_found / invalid_confirmation (failed checks in the detail)
        """
        try:
            reservation = Reservation.objects.select_related("store").get(
                store__name=store_name,
                reservation_date=date,
                reservation_time=time,
                holder_contact=holder_contact,
            )
        except Reservation.DoesNotExist:
            arrival_confirmations_total.labels(outcome="not_found").inc()
            self.logger.info(
                f"No reservation at '{store_name}' for {date} {time} held by {mask_value(holder_contact)}"
            )
            return service_err(ErrorCodes.RESERVATION_NOT_FOUND, "No matching reservation")
        except DatabaseError as e:
            self.logger.error(f"Database error confirming arrival at '{store_name}': {e}", exc_info=True)
            return service_err(ErrorCodes.DATABASE_ERROR, "Reservation storage is unavailable")

        failures = self._failed_checks(reservation, self._as_naive(self.clock()))
        if failures:
            arrival_confirmations_total.labels(outcome="rejected").inc()
            return service_err(ErrorCodes.INVALID_CONFIRMATION, "Invalid confirmation: " + "; ".join(failures))

        arrival_confirmations_total.labels(outcome="confirmed").inc()
        return service_ok(
            {
                "status": "confirmed",
                "store_name": store_name,
                "date": reservation.reservation_date.isoformat(),
                "time": reservation.reservation_time.isoformat(),
            }
        )

    def _failed_checks(self, reservation: Reservation, now: datetime.datetime) -> List[str]:
        """All checks run; every violated one is reported."""
        slot = datetime.datetime.combine(reservation.reservation_date, reservation.reservation_time)
        failures = []

        if now.date() != reservation.reservation_date:
            failures.append("reservation is not for today")
        if now > slot:
            failures.append("reservation time has passed")
        if now + self.lead > slot:
            failures.append(f"arrival must be confirmed at least {int(self.lead.total_seconds() // 60)} minutes early")
        if not reservation.status:
            failures.append("reservation was refused")

        return failures

    @staticmethod
    def _as_naive(now: datetime.datetime) -> datetime.datetime:
        if timezone.is_aware(now):
            return timezone.localtime(now).replace(tzinfo=None)
        return now
