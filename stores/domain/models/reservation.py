from django.db import models

from .store import Store


class Reservation(models.Model):
    """
    One booked slot at a store.

    ``status`` is True while the reservation stands and False once the owner
    refused it. Refusal is terminal.
    """

    store = models.ForeignKey(Store, on_delete=models.CASCADE, related_name="reservations")
    reservation_date = models.DateField()
    reservation_time = models.TimeField()
    holder_contact = models.CharField(max_length=20)
    status = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        app_label = "stores"
        ordering = ["reservation_date", "reservation_time"]
        constraints = [
            models.UniqueConstraint(
                fields=["store", "reservation_date", "reservation_time"],
                name="unique_store_slot",
            ),
        ]
        indexes = [
            models.Index(fields=["store", "reservation_date"], name="reservation_store_date_idx"),
        ]

    @property
    def is_active(self) -> bool:
        return self.status

    def __str__(self):
        return f"{self.store.name} @ {self.reservation_date} {self.reservation_time}"
