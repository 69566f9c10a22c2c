import pytest
from django.contrib.auth import get_user_model

from accounts.domain.principal import Principal
from accounts.domain.services.account_service import AccountService
from stores.domain.models import Store
from stores.tests.factories import CustomerFactory, OwnerFactory, StoreFactory
from utils.service_base import ErrorCodes

User = get_user_model()


@pytest.mark.unit
@pytest.mark.django_db
class TestAccountService:
    def setup_method(self):
        self.service = AccountService()
        self.payload = {
            "user_id": "jiwoo",
            "password": "S3cure-Passw0rd!",
            "name": "Jiwoo",
            "phone_number": "010-4444-5555",
            "role": "customer",
        }

    def test_register_hashes_password(self):
        result = self.service.register(self.payload)

        assert result.ok
        user = User.objects.get(username="jiwoo")
        assert user.check_password("S3cure-Passw0rd!")
        assert user.password != "S3cure-Passw0rd!"
        assert user.role == "customer"

    def test_register_duplicate_user_id(self):
        CustomerFactory(username="jiwoo")

        result = self.service.register(self.payload)

        assert result.error == ErrorCodes.DUPLICATE_USER
        assert result.kind == "conflict"

    def test_register_rejects_unknown_role(self):
        self.payload["role"] = "admin"

        result = self.service.register(self.payload)

        assert result.error == ErrorCodes.INVALID_INPUT

    def test_edit_account_is_partial(self):
        user = CustomerFactory(name="Before", phone_number="010-1111-1111")

        result = self.service.edit_account(user, {"phone_number": "010-2222-2222"})

        assert result.ok
        user.refresh_from_db()
        assert user.phone_number == "010-2222-2222"
        assert user.name == "Before"

    def test_edit_password(self):
        user = CustomerFactory()

        self.service.edit_account(user, {"password": "An0ther-Secret!"})

        user.refresh_from_db()
        assert user.check_password("An0ther-Secret!")

    def test_delete_owner_cascades_stores(self):
        owner = OwnerFactory()
        StoreFactory(owner=owner)

        result = self.service.delete_account(owner)

        assert result.ok
        assert not Store.objects.exists()

    def test_principal_from_user(self):
        user = OwnerFactory(username="boss", phone_number="02-555-0000")

        principal = Principal.from_user(user)

        assert principal == Principal(user_id="boss", role="owner", contact="02-555-0000")
        assert principal.is_owner
        assert not principal.is_customer
