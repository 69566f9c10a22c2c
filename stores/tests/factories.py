import datetime

import factory
from django.contrib.auth import get_user_model

from stores.models import Reservation, Review, Store

User = get_user_model()


class CustomerFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = User
        django_get_or_create = ("username",)

    username = factory.Sequence(lambda n: f"customer_{n}")
    name = factory.Faker("name")
    phone_number = factory.Sequence(lambda n: f"010-{1000 + n:04d}-{n % 10000:04d}")
    password = factory.PostGenerationMethodCall("set_password", "defaultpassword")
    is_active = True
    role = "customer"


class OwnerFactory(CustomerFactory):
    username = factory.Sequence(lambda n: f"owner_{n}")
    phone_number = factory.Sequence(lambda n: f"02-{2000 + n:04d}-{n % 10000:04d}")
    role = "owner"


class StoreFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Store

    name = factory.Sequence(lambda n: f"Store {n}")
    location = factory.Faker("address")
    # Around Seoul City Hall
    latitude = factory.Faker("pyfloat", min_value=37.50, max_value=37.60)
    longitude = factory.Faker("pyfloat", min_value=126.95, max_value=127.05)
    description = factory.Faker("sentence", nb_words=8)
    rating = 0.0
    owner = factory.SubFactory(OwnerFactory)


class ReservationFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Reservation

    store = factory.SubFactory(StoreFactory)
    reservation_date = factory.LazyFunction(lambda: datetime.date.today() + datetime.timedelta(days=1))
    reservation_time = factory.Sequence(lambda n: datetime.time(hour=9 + (n % 12), minute=0))
    holder_contact = factory.Sequence(lambda n: f"010-{1000 + n:04d}-{n % 10000:04d}")
    status = True


class ReviewFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Review

    reviewer_id = factory.Sequence(lambda n: f"customer_{n}")
    store = factory.SubFactory(StoreFactory)
    visited_date = factory.LazyFunction(datetime.date.today)
    visited_time = factory.Sequence(lambda n: datetime.time(hour=9 + (n % 12), minute=30))
    rate = 4.0
    comment = factory.Faker("sentence", nb_words=12)
