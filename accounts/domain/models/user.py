import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models


class CustomUser(AbstractUser):
    """
    Account for both store owners and customers.

    ``username`` is the public user id (reviewerId in review requests);
    ``phone_number`` is the contact matched against reservation holders.
    """

    ROLE_OWNER = "owner"
    ROLE_CUSTOMER = "customer"

    ROLE_CHOICES = [
        (ROLE_OWNER, "Store owner"),
        (ROLE_CUSTOMER, "Customer"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, blank=True)
    phone_number = models.CharField(max_length=20, db_index=True)

    # Role system - simple field
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_CUSTOMER)

    REQUIRED_FIELDS = ["phone_number"]

    class Meta:
        app_label = "accounts"

    def is_owner(self):
        return self.role == self.ROLE_OWNER

    def is_customer(self):
        return self.role == self.ROLE_CUSTOMER

    def __str__(self):
        return self.username
