from unittest.mock import Mock, patch

import pytest
from django.db import OperationalError

from utils.transaction_utils import DeadlockError, TransactionError, is_deadlock, retry_on_deadlock


@pytest.mark.unit
class TestRetryOnDeadlock:
    @patch("utils.transaction_utils.time.sleep")
    def test_retries_then_succeeds(self, mock_sleep):
        func = Mock(side_effect=[OperationalError("deadlock detected"), "done"])
        func.__name__ = "func"

        assert retry_on_deadlock(max_retries=3, delay=0.1)(func)() == "done"
        assert func.call_count == 2
        mock_sleep.assert_called_once_with(0.1)

    @patch("utils.transaction_utils.time.sleep")
    def test_backoff_grows(self, mock_sleep):
        func = Mock(side_effect=OperationalError("Deadlock found when trying to get lock"))
        func.__name__ = "func"

        with pytest.raises(DeadlockError):
            retry_on_deadlock(max_retries=2, delay=0.1, backoff=2.0)(func)()

        assert func.call_count == 3
        assert [c.args[0] for c in mock_sleep.call_args_list] == [0.1, pytest.approx(0.2)]

    def test_other_operational_errors_are_not_retried(self):
        func = Mock(side_effect=OperationalError("no such table: stores_store"))
        func.__name__ = "func"

        with pytest.raises(TransactionError):
            retry_on_deadlock()(func)()

        assert func.call_count == 1

    @pytest.mark.parametrize(
        "message",
        ["(1213, 'Deadlock found')", "deadlock detected", "database is locked", "could not obtain lock on row"],
    )
    def test_deadlock_markers(self, message):
        assert is_deadlock(OperationalError(message))
