"""
Base classes and utilities for the service layer.

This module provides the ServiceResult pattern (inspired by Rust's Result type)
and BaseService class shared by the accounts and stores services.

Guidelines
- Keep services stateless; pass dependencies via parameters.
- Return structured results instead of raising for expected outcomes.
- Reserve exceptions for truly exceptional/unrecoverable scenarios.
"""

import logging
import time
from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    A result type that encapsulates success or failure from service operations.

    Attributes:
        ok: True if operation succeeded, False otherwise
        value: The success value (present if ok=True)
        error: Error code (present if ok=False)
        error_detail: Human-readable error message (present if ok=False)

    Examples:
        >>> result = service_ok(reservation)
        >>> if result.ok:
        ...     return Response(ReservationSerializer(result.value).data, 201)
        >>> else:
        ...     return error_response(result)

        >>> result = service_err(ErrorCodes.SLOT_CONFLICT, "Slot 2024-05-01 18:00 is already taken")
        >>> print(result.error)  # "slot_conflict"
        >>> print(result.kind)  # "conflict"
    """

    ok: bool
    value: Optional[T] = None
    error: Optional[str] = None
    error_detail: Optional[str] = None

    @property
    def kind(self) -> Optional[str]:
        """Error kind (not_found, conflict, ...) for failed results, None on success."""
        if self.ok:
            return None
        return ERROR_KINDS.get(self.error, ErrorKinds.DEPENDENCY)

    def map(self, func: Callable[[T], Any]) -> "ServiceResult":
        """
        Transform the success value if ok=True, otherwise pass through error.

        Args:
            func: Function to apply to the value

        Returns:
            ServiceResult with transformed value or original error
        """
        if self.ok and self.value is not None:
            return service_ok(func(self.value))
        return self

    def to_dict(self) -> dict:
        """
        Convert to dictionary for JSON serialization.

        Returns:
            Dictionary with 'success' and either 'data' or 'error'
        """
        if self.ok:
            return {"success": True, "data": self.value}
        return {
            "success": False,
            "error": {"code": self.error, "kind": self.kind, "message": self.error_detail},
        }


def service_ok(value: T = None) -> ServiceResult[T]:
    """
    Create a successful ServiceResult.

    Args:
        value: The success value

    Returns:
        ServiceResult with ok=True and the value
    """
    return ServiceResult(ok=True, value=value)


def service_err(error: str, error_detail: str = "") -> ServiceResult:
    """
    Create a failed ServiceResult.

    Args:
        error: Error code (e.g., "store_not_found", "slot_conflict")
        error_detail: Human-readable error message

    Returns:
        ServiceResult with ok=False and error information
    """
    return ServiceResult(ok=False, error=error, error_detail=error_detail or error)


class BaseService:
    """
    Base class for all services providing common functionality.

    Provides:
    - Logging with class name
    - Performance timing decorator

    Usage:
        class ReservationLedger(BaseService):
            @BaseService.log_performance
            def book(self, store_id, date, time, holder_contact):
                self.logger.info(f"Booking store={store_id}")
                # ... implementation
    """

    def __init__(self):
        """Initialize base service with logger."""
        self.logger = logging.getLogger(self.__class__.__module__ + "." + self.__class__.__name__)

    @staticmethod
    def log_performance(func: Callable) -> Callable:
        """
        Decorator to log performance of service methods.

        Logs execution time and any errors that occur.
        """

        @wraps(func)
        def wrapper(self, *args, **kwargs):
            start_time = time.time()
            method_name = f"{self.__class__.__name__}.{func.__name__}"

            try:
                self.logger.debug(f"{method_name} started")
                result = func(self, *args, **kwargs)
                elapsed_time = (time.time() - start_time) * 1000  # Convert to ms

                if isinstance(result, ServiceResult):
                    if result.ok:
                        self.logger.info(f"{method_name} completed successfully in {elapsed_time:.2f}ms")
                    else:
                        self.logger.warning(
                            f"{method_name} failed with error '{result.error}' in {elapsed_time:.2f}ms"
                        )
                else:
                    self.logger.info(f"{method_name} completed in {elapsed_time:.2f}ms")

                return result

            except Exception as e:
                elapsed_time = (time.time() - start_time) * 1000
                self.logger.error(
                    f"{method_name} raised exception after {elapsed_time:.2f}ms: {str(e)}",
                    exc_info=True,
                )
                raise

        return wrapper


class ErrorKinds:
    """Coarse error taxonomy every error code belongs to."""

    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    VALIDATION = "validation"
    AUTHORIZATION = "authorization"
    INVALID_STATE = "invalid_state"
    DEPENDENCY = "dependency"


class ErrorCodes:
    """Standard error codes used across services."""

    # Not found
    STORE_NOT_FOUND = "store_not_found"
    RESERVATION_NOT_FOUND = "reservation_not_found"
    REVIEW_NOT_FOUND = "review_not_found"
    USER_NOT_FOUND = "user_not_found"

    # Conflicts
    DUPLICATE_STORE = "duplicate_store"
    SLOT_CONFLICT = "slot_conflict"
    DUPLICATE_REVIEW = "duplicate_review"
    DUPLICATE_USER = "duplicate_user"

    # Validation errors
    VALIDATION_ERROR = "validation_error"
    INVALID_INPUT = "invalid_input"

    # Permission errors
    PERMISSION_DENIED = "permission_denied"

    # State errors
    INVALID_CONFIRMATION = "invalid_confirmation"
    RESERVATION_ALREADY_REFUSED = "reservation_already_refused"
    INVALID_CRITERION = "invalid_criterion"
    MISSING_PARAMETER = "missing_parameter"

    # Internal errors
    INTERNAL_ERROR = "internal_error"
    DATABASE_ERROR = "database_error"


ERROR_KINDS = {
    ErrorCodes.STORE_NOT_FOUND: ErrorKinds.NOT_FOUND,
    ErrorCodes.RESERVATION_NOT_FOUND: ErrorKinds.NOT_FOUND,
    ErrorCodes.REVIEW_NOT_FOUND: ErrorKinds.NOT_FOUND,
    ErrorCodes.USER_NOT_FOUND: ErrorKinds.NOT_FOUND,
    ErrorCodes.DUPLICATE_STORE: ErrorKinds.CONFLICT,
    ErrorCodes.SLOT_CONFLICT: ErrorKinds.CONFLICT,
    ErrorCodes.DUPLICATE_REVIEW: ErrorKinds.CONFLICT,
    ErrorCodes.DUPLICATE_USER: ErrorKinds.CONFLICT,
    ErrorCodes.VALIDATION_ERROR: ErrorKinds.VALIDATION,
    ErrorCodes.INVALID_INPUT: ErrorKinds.VALIDATION,
    ErrorCodes.PERMISSION_DENIED: ErrorKinds.AUTHORIZATION,
    ErrorCodes.INVALID_CONFIRMATION: ErrorKinds.INVALID_STATE,
    ErrorCodes.RESERVATION_ALREADY_REFUSED: ErrorKinds.INVALID_STATE,
    ErrorCodes.INVALID_CRITERION: ErrorKinds.INVALID_STATE,
    ErrorCodes.MISSING_PARAMETER: ErrorKinds.INVALID_STATE,
    ErrorCodes.INTERNAL_ERROR: ErrorKinds.DEPENDENCY,
    ErrorCodes.DATABASE_ERROR: ErrorKinds.DEPENDENCY,
}
