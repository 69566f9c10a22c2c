import pytest
from django.contrib.auth.models import AnonymousUser

from stores.tests.factories import CustomerFactory, OwnerFactory
from utils.rbac import is_customer, is_owner


@pytest.mark.unit
@pytest.mark.django_db
class TestRoles:
    def test_owner(self):
        owner = OwnerFactory()
        assert is_owner(owner)
        assert not is_customer(owner)

    def test_customer(self):
        customer = CustomerFactory()
        assert is_customer(customer)
        assert not is_owner(customer)

    def test_role_is_read_from_database(self):
        user = CustomerFactory()
        type(user).objects.filter(pk=user.pk).update(role="owner")
        assert is_owner(user)

    def test_anonymous_has_no_role(self):
        assert not is_owner(AnonymousUser())
        assert not is_customer(AnonymousUser())
