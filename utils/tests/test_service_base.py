import pytest

from utils.api_errors import status_for
from utils.logging_utils import mask_value
from utils.service_base import ErrorCodes, service_err, service_ok


@pytest.mark.unit
class TestServiceResult:
    def test_ok_has_no_kind(self):
        assert service_ok(1).kind is None

    def test_to_dict(self):
        assert service_err(ErrorCodes.SLOT_CONFLICT, "taken").to_dict() == {
            "success": False,
            "error": {"code": "slot_conflict", "kind": "conflict", "message": "taken"},
        }

    def test_map_passes_errors_through(self):
        err = service_err(ErrorCodes.STORE_NOT_FOUND)
        assert err.map(lambda v: v * 2) is err
        assert service_ok(2).map(lambda v: v * 2).value == 4

    @pytest.mark.parametrize(
        "code,expected",
        [
            (ErrorCodes.STORE_NOT_FOUND, 404),
            (ErrorCodes.SLOT_CONFLICT, 409),
            (ErrorCodes.VALIDATION_ERROR, 400),
            (ErrorCodes.PERMISSION_DENIED, 403),
            (ErrorCodes.INVALID_CONFIRMATION, 422),
            (ErrorCodes.INTERNAL_ERROR, 500),
            (ErrorCodes.DATABASE_ERROR, 503),
        ],
    )
    def test_http_status_by_kind(self, code, expected):
        assert status_for(service_err(code)) == expected


@pytest.mark.unit
class TestMaskValue:
    def test_phone_keeps_last_four_digits(self):
        assert mask_value("010-1234-5678") == "***-5678"

    def test_email(self):
        assert mask_value("lee@example.com") == "le***@example.com"
