"""
StoreService - Store Management

Owners enroll, edit and delete their stores; anyone can look a store up by
its unique name.
"""

import logging
from typing import Any, Dict

from django.contrib.auth import get_user_model
from django.db import DatabaseError, IntegrityError, transaction

from accounts.domain.principal import Principal
from stores.domain.models import Store
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from utils.transaction_utils import rollback_safe_operation

User = get_user_model()
logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "location", "latitude", "longitude", "description")
REQUIRED_FIELDS = ("name", "location", "latitude", "longitude")


class StoreService(BaseService):
    """
    Service for managing stores.

    Responsibilities:
    - Enroll a store (owner role only, unique name)
    - Partial edit and delete (store owner only)
    - Lookup by name, optionally enforcing ownership
    """

    @BaseService.log_performance
    def enroll_store(self, principal: Principal, data: Dict[str, Any]) -> ServiceResult[Store]:
        """
        Create a store owned by the principal. Rating starts at 0.

        Args:
            principal: caller, must have the owner role
            data: name, location, latitude, longitude, description (optional)
        """
        if not principal.is_owner:
            return service_err(ErrorCodes.PERMISSION_DENIED, "Only store owners can enroll stores")

        missing = [name for name in REQUIRED_FIELDS if data.get(name) in (None, "")]
        if missing:
            return service_err(ErrorCodes.VALIDATION_ERROR, f"Missing required fields: {', '.join(missing)}")

        try:
            owner = User.objects.filter(username=principal.user_id).first()
            if owner is None:
                return service_err(ErrorCodes.USER_NOT_FOUND, f"User '{principal.user_id}' not found")

            if Store.objects.filter(name=data["name"]).exists():
                return service_err(ErrorCodes.DUPLICATE_STORE, f"Store '{data['name']}' already exists")

            with transaction.atomic():
                store = Store.objects.create(
                    name=data["name"],
                    location=data["location"],
                    latitude=data["latitude"],
                    longitude=data["longitude"],
                    description=data.get("description") or "",
                    rating=0.0,
                    owner=owner,
                )

            self.logger.info(f"Store '{store.name}' enrolled by {owner.username}")
            return service_ok(store)

        except IntegrityError:
            return service_err(ErrorCodes.DUPLICATE_STORE, f"Store '{data['name']}' already exists")
        except DatabaseError as e:
            self.logger.error(f"Database error enrolling store: {e}", exc_info=True)
            return service_err(ErrorCodes.DATABASE_ERROR, "Store storage is unavailable")
        except Exception as e:
            self.logger.error(f"Error enrolling store: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def edit_store(self, principal: Principal, store_name: str, data: Dict[str, Any]) -> ServiceResult[Store]:
        """Partial update; only the keys present in ``data`` are changed."""
        lookup = self.get_owned_store(principal, store_name)
        if not lookup.ok:
            return lookup
        store = lookup.value

        try:
            new_name = data.get("name")
            if new_name and new_name != store.name and Store.objects.filter(name=new_name).exists():
                return service_err(ErrorCodes.DUPLICATE_STORE, f"Store '{new_name}' already exists")

            changed = []
            for field_name in EDITABLE_FIELDS:
                if field_name in data and data[field_name] is not None:
                    setattr(store, field_name, data[field_name])
                    changed.append(field_name)

            if changed:
                with transaction.atomic():
                    store.save(update_fields=changed)
                self.logger.info(f"Store '{store_name}' updated: {changed}")

            return service_ok(store)

        except IntegrityError:
            return service_err(ErrorCodes.DUPLICATE_STORE, f"Store '{data.get('name')}' already exists")
        except DatabaseError as e:
            self.logger.error(f"Database error editing store '{store_name}': {e}", exc_info=True)
            return service_err(ErrorCodes.DATABASE_ERROR, "Store storage is unavailable")
        except Exception as e:
            self.logger.error(f"Error editing store '{store_name}': {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def delete_store(self, principal: Principal, store_name: str) -> ServiceResult[bool]:
        """Delete the store together with its reservations and reviews."""
        lookup = self.get_owned_store(principal, store_name)
        if not lookup.ok:
            return lookup
        store = lookup.value

        try:
            with transaction.atomic(), rollback_safe_operation(f"Delete store '{store_name}'"):
                store.delete()
            return service_ok(True)

        except DatabaseError as e:
            self.logger.error(f"Database error deleting store '{store_name}': {e}", exc_info=True)
            return service_err(ErrorCodes.DATABASE_ERROR, "Store storage is unavailable")
        except Exception as e:
            self.logger.error(f"Error deleting store '{store_name}': {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def get_store(self, store_name: str) -> ServiceResult[Store]:
        try:
            return service_ok(Store.objects.select_related("owner").get(name=store_name))
        except Store.DoesNotExist:
            return service_err(ErrorCodes.STORE_NOT_FOUND, f"Store '{store_name}' not found")
        except Exception as e:
            self.logger.error(f"Error loading store '{store_name}': {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    def get_owned_store(self, principal: Principal, store_name: str) -> ServiceResult[Store]:
        """Store lookup that also requires the principal to own it."""
        result = self.get_store(store_name)
        if not result.ok:
            return result
        if not result.value.is_owned_by(principal.user_id):
            self.logger.warning(f"User {principal.user_id} is not the owner of '{store_name}'")
            return service_err(ErrorCodes.PERMISSION_DENIED, "You do not own this store")
        return result
