"""
Business logic services for accounts.
"""

from .account_service import AccountService

__all__ = ["AccountService"]
