"""
ReservationLedger - Slot Booking

Owns the reservations of every store: one reservation per
(store, date, time) slot, created active and optionally refused by the owner.

The database unique constraint ``unique_store_slot`` is what guarantees slot
uniqueness under concurrent bookings; the existence check before the insert
only gives a friendlier error in the common case.
"""

import datetime
import logging
from typing import List

from django.db import DatabaseError, IntegrityError, transaction

from stores.domain.models import Reservation, Store
from stores.infra.observability.metrics import bookings_total, refusals_total
from utils.logging_utils import mask_value
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

logger = logging.getLogger(__name__)


class ReservationLedger(BaseService):
    """
    Service for booking and refusing store slots.

    Responsibilities:
    - Book a free slot (conflicts on any existing reservation, active or refused)
    - Refuse a reservation (terminal, owner only; checked by the caller)
    - List one store's reservations for a day
    """

    @BaseService.log_performance
    def book(
        self, store_id: int, date: datetime.date, time: datetime.time, holder_contact: str
    ) -> ServiceResult[Reservation]:
        """
        Reserve (store_id, date, time) for holder_contact.

        Returns:
            ServiceResult with the new active Reservation, or
            store_not_found / slot_conflict
        """
        if not holder_contact:
            return service_err(ErrorCodes.VALIDATION_ERROR, "A holder contact is required to book")

        try:
            if not Store.objects.filter(pk=store_id).exists():
                bookings_total.labels(outcome="store_not_found").inc()
                return service_err(ErrorCodes.STORE_NOT_FOUND, f"Store {store_id} not found")

            if self._slot_taken(store_id, date, time):
                bookings_total.labels(outcome="conflict").inc()
                return service_err(ErrorCodes.SLOT_CONFLICT, f"Slot {date} {time} is already reserved")

            try:
                with transaction.atomic():
                    reservation = Reservation.objects.create(
                        store_id=store_id,
                        reservation_date=date,
                        reservation_time=time,
                        holder_contact=holder_contact,
                        status=True,
                    )
            except IntegrityError:
                # Lost the race to a concurrent booking of the same slot
                bookings_total.labels(outcome="conflict").inc()
                self.logger.info(f"Concurrent booking won slot {date} {time} at store {store_id}")
                return service_err(ErrorCodes.SLOT_CONFLICT, f"Slot {date} {time} is already reserved")

            bookings_total.labels(outcome="booked").inc()
            self.logger.info(
                f"Reservation {reservation.id} booked: store={store_id}, slot={date} {time}, "
                f"holder={mask_value(holder_contact)}"
            )
            return service_ok(reservation)

        except DatabaseError as e:
            bookings_total.labels(outcome="error").inc()
            self.logger.error(f"Database error booking store {store_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.DATABASE_ERROR, "Reservation storage is unavailable")
        except Exception as e:
            bookings_total.labels(outcome="error").inc()
            self.logger.error(f"Error booking store {store_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def book_by_store_name(
        self, store_name: str, date: datetime.date, time: datetime.time, holder_contact: str
    ) -> ServiceResult[Reservation]:
        """Resolve the store by its unique name, then book."""
        store_id = Store.objects.filter(name=store_name).values_list("id", flat=True).first()
        if store_id is None:
            bookings_total.labels(outcome="store_not_found").inc()
            return service_err(ErrorCodes.STORE_NOT_FOUND, f"Store '{store_name}' not found")
        return self.book(store_id, date, time, holder_contact)

    @BaseService.log_performance
    @transaction.atomic
    def refuse(self, store_id: int, date: datetime.date, time: datetime.time) -> ServiceResult[Reservation]:
        """
        Mark the reservation in (store_id, date, time) as refused.

        Refusal is terminal: refusing twice fails with
        reservation_already_refused and writes nothing.
        """
        try:
            # Lock the reservation row so concurrent refusals serialize
            reservation = Reservation.objects.select_for_update().get(
                store_id=store_id, reservation_date=date, reservation_time=time
            )

            if not reservation.status:
                refusals_total.labels(outcome="already_refused").inc()
                return service_err(
                    ErrorCodes.RESERVATION_ALREADY_REFUSED, f"Reservation for {date} {time} is already refused"
                )

            reservation.status = False
            reservation.save(update_fields=["status"])

            refusals_total.labels(outcome="refused").inc()
            self.logger.info(f"Reservation {reservation.id} refused: store={store_id}, slot={date} {time}")
            return service_ok(reservation)

        except Reservation.DoesNotExist:
            refusals_total.labels(outcome="not_found").inc()
            return service_err(ErrorCodes.RESERVATION_NOT_FOUND, f"No reservation for {date} {time}")
        except DatabaseError as e:
            self.logger.error(f"Database error refusing reservation at store {store_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.DATABASE_ERROR, "Reservation storage is unavailable")
        except Exception as e:
            self.logger.error(f"Error refusing reservation at store {store_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def list_for_date(self, store_id: int, date: datetime.date) -> ServiceResult[List[Reservation]]:
        """The store's reservations for one day, earliest slot first."""
        try:
            reservations = list(
                Reservation.objects.filter(store_id=store_id, reservation_date=date).order_by("reservation_time")
            )
            return service_ok(reservations)

        except DatabaseError as e:
            self.logger.error(f"Database error listing reservations for store {store_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.DATABASE_ERROR, "Reservation storage is unavailable")
        except Exception as e:
            self.logger.error(f"Error listing reservations for store {store_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @staticmethod
    def _slot_taken(store_id: int, date: datetime.date, time: datetime.time) -> bool:
        return Reservation.objects.filter(
            store_id=store_id, reservation_date=date, reservation_time=time
        ).exists()
