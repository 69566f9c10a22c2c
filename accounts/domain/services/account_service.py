"""
AccountService - Account Lifecycle

Registration, profile edits and account removal for owners and customers.
Sign-in itself is handled by simplejwt (see accounts.api.serializers.jwt_serializers).
"""

import logging
from typing import Any, Dict

from django.contrib.auth import get_user_model
from django.db import DatabaseError, IntegrityError, transaction

from utils.logging_utils import mask_value
from utils.rbac import ROLES
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

User = get_user_model()
logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "phone_number")


class AccountService(BaseService):
    """
    Service for managing user accounts.

    Responsibilities:
    - Register owners and customers (user id must be unique)
    - Partial edit of name, phone number and password
    - Delete account (owner deletion cascades to the owner's stores)
    """

    @BaseService.log_performance
    def register(self, data: Dict[str, Any]) -> ServiceResult:
        """
        Create a new account.

        Args:
            data: dict with user_id, password, name, phone_number, role

        Returns:
            ServiceResult with the created user
        """
        user_id = data.get("user_id")
        password = data.get("password")
        role = data.get("role")

        if not user_id or not password or not data.get("phone_number"):
            return service_err(ErrorCodes.VALIDATION_ERROR, "user_id, password and phone_number are required")
        if role not in ROLES:
            return service_err(ErrorCodes.INVALID_INPUT, f"role must be one of {', '.join(ROLES)}")

        try:
            if User.objects.filter(username=user_id).exists():
                return service_err(ErrorCodes.DUPLICATE_USER, f"User id '{user_id}' is already taken")

            with transaction.atomic():
                user = User.objects.create_user(
                    username=user_id,
                    password=password,
                    name=data.get("name", ""),
                    phone_number=data["phone_number"],
                    role=role,
                )

            self.logger.info(
                f"Registered {role} account {user_id} (phone={mask_value(user.phone_number)})"
            )
            return service_ok(user)

        except IntegrityError:
            return service_err(ErrorCodes.DUPLICATE_USER, f"User id '{user_id}' is already taken")
        except DatabaseError as e:
            self.logger.error(f"Database error registering {user_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.DATABASE_ERROR, "Account storage is unavailable")
        except Exception as e:
            self.logger.error(f"Error registering {user_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def edit_account(self, user, data: Dict[str, Any]) -> ServiceResult:
        """Partial update; only the keys present in ``data`` are touched."""
        try:
            changed = []
            for field_name in EDITABLE_FIELDS:
                if field_name in data and data[field_name] is not None:
                    setattr(user, field_name, data[field_name])
                    changed.append(field_name)

            if data.get("password"):
                user.set_password(data["password"])
                changed.append("password")

            if changed:
                user.save(update_fields=changed)
                self.logger.info(f"Updated account {user.username}: {changed}")

            return service_ok(user)

        except DatabaseError as e:
            self.logger.error(f"Database error editing {user.username}: {e}", exc_info=True)
            return service_err(ErrorCodes.DATABASE_ERROR, "Account storage is unavailable")
        except Exception as e:
            self.logger.error(f"Error editing account {user.username}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def delete_account(self, user) -> ServiceResult[bool]:
        try:
            username = user.username
            with transaction.atomic():
                user.delete()
            self.logger.info(f"Deleted account {username}")
            return service_ok(True)

        except DatabaseError as e:
            self.logger.error(f"Database error deleting {user.username}: {e}", exc_info=True)
            return service_err(ErrorCodes.DATABASE_ERROR, "Account storage is unavailable")
        except Exception as e:
            self.logger.error(f"Error deleting account {user.username}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))
