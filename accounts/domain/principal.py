"""
The authenticated caller, as seen by the service layer.

Views build a Principal from ``request.user`` once and pass it down, so services
never touch the request or the auth backend.
"""

from dataclasses import dataclass

from utils.rbac import ROLE_CUSTOMER, ROLE_OWNER


@dataclass(frozen=True)
class Principal:
    user_id: str
    role: str
    contact: str = ""

    @property
    def is_owner(self) -> bool:
        return self.role == ROLE_OWNER

    @property
    def is_customer(self) -> bool:
        return self.role == ROLE_CUSTOMER

    @classmethod
    def from_user(cls, user) -> "Principal":
        return cls(user_id=user.username, role=user.role, contact=user.phone_number or "")
