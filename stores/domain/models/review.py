from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from .store import Store

MIN_RATE = 0.0
MAX_RATE = 5.0


class Review(models.Model):
    reviewer_id = models.CharField(max_length=150, db_index=True)
    store = models.ForeignKey(Store, on_delete=models.CASCADE, related_name="reviews")
    visited_date = models.DateField()
    visited_time = models.TimeField()
    rate = models.FloatField(validators=[MinValueValidator(MIN_RATE), MaxValueValidator(MAX_RATE)])
    comment = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "stores"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["reviewer_id", "store", "visited_date", "visited_time"],
                name="unique_review_per_visit",
            ),
        ]

    def __str__(self):
        return f"{self.reviewer_id} on {self.store.name}: {self.rate}"
