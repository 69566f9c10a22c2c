from django.conf import settings
from django.db import models


class Store(models.Model):
    """A store published by an owner. ``name`` is the human key used by every request."""

    name = models.CharField(max_length=100, unique=True)
    location = models.CharField(max_length=255)
    latitude = models.FloatField()
    longitude = models.FloatField()
    description = models.TextField(blank=True, default="")
    # Running mean of review rates; 0 while the store has no reviews.
    rating = models.FloatField(default=0.0)
    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="stores")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        app_label = "stores"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["-rating", "name"], name="store_rating_name_idx"),
        ]

    def is_owned_by(self, user_id: str) -> bool:
        return self.owner.username == user_id

    def __str__(self):
        return self.name
