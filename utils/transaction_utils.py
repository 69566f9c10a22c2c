"""
Transaction Utilities for the Reservation Backend
=================================================

Transaction helpers shared by the services that serialize writes through row
locks (rating aggregation, reservation refusal).

Usage Examples:
    # Retry a locked read-compute-write sequence on deadlock
    @retry_on_deadlock(max_retries=3)
    def recompute_rating(store_id):
        with transaction.atomic():
            store = Store.objects.select_for_update().get(pk=store_id)
            ...

    # Logged block that re-raises after reporting the failure
    with rollback_safe_operation("Store deletion"):
        store.delete()
"""

import logging
import time
from contextlib import contextmanager
from functools import wraps

from django.db import OperationalError

logger = logging.getLogger(__name__)

# Substrings that identify a transient lock failure across the supported backends:
# MySQL 1213/1205, PostgreSQL 40P01/55P03, SQLite "database is locked".
DEADLOCK_MARKERS = (
    "deadlock",
    "1213",
    "1205",
    "40p01",
    "55p03",
    "lock timeout",
    "could not obtain lock",
    "database is locked",
)


class TransactionError(Exception):
    """Custom exception for transaction-related errors"""

    pass


class DeadlockError(TransactionError):
    """Exception raised when a deadlock is detected"""

    pass


def is_deadlock(exc: Exception) -> bool:
    """True when an OperationalError message looks like a lock conflict."""
    message = str(exc).lower()
    return any(marker in message for marker in DEADLOCK_MARKERS)


def retry_on_deadlock(max_retries=3, delay=0.1, backoff=2.0):
    """
    Decorator to retry operations on deadlock with exponential backoff.

    Args:
        max_retries (int): Maximum number of retry attempts
        delay (float): Initial delay between retries in seconds
        backoff (float): Backoff multiplier for delay

    The wrapped callable must open its own transaction so every attempt
    starts from a clean state.
    """

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            current_delay = delay
            last_exception = None

            for attempt in range(max_retries + 1):
                try:
                    return func(*args, **kwargs)
                except OperationalError as e:
                    if not is_deadlock(e):
                        raise TransactionError(f"Database operation failed: {e}") from e
                    last_exception = DeadlockError(f"Deadlock detected: {e}")
                    if attempt < max_retries:
                        logger.warning(
                            f"Deadlock detected in {func.__name__}, retrying in {current_delay}s "
                            f"(attempt {attempt + 1}/{max_retries})"
                        )
                        time.sleep(current_delay)
                        current_delay *= backoff

            # If we get here, we've exhausted all retries
            raise last_exception

        return wrapper

    return decorator


@contextmanager
def rollback_safe_operation(operation_name="Unknown"):
    """
    Context manager that logs the start, duration and failure of an operation.

    The exception is re-raised so an enclosing transaction.atomic() rolls back.

    Args:
        operation_name (str): Name of the operation for logging
    """
    start_time = time.time()
    logger.info(f"Starting rollback-safe operation: {operation_name}")

    try:
        yield
        elapsed = time.time() - start_time
        logger.info(f"Operation '{operation_name}' completed successfully in {elapsed:.3f}s")
    except Exception as e:
        elapsed = time.time() - start_time
        logger.error(f"Operation '{operation_name}' failed after {elapsed:.3f}s: {e}")
        logger.info(f"Rolling back operation: {operation_name}")
        raise
