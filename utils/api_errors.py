"""
Translate failed ServiceResults into DRF responses.

Every error code belongs to one kind (see utils.service_base.ERROR_KINDS);
views return ``error_response(result)`` instead of repeating the mapping.
"""

from rest_framework import status
from rest_framework.response import Response

from utils.service_base import ErrorCodes, ErrorKinds, ServiceResult

KIND_STATUS = {
    ErrorKinds.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKinds.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKinds.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKinds.AUTHORIZATION: status.HTTP_403_FORBIDDEN,
    ErrorKinds.INVALID_STATE: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKinds.DEPENDENCY: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(result: ServiceResult) -> int:
    if result.error == ErrorCodes.DATABASE_ERROR:
        return status.HTTP_503_SERVICE_UNAVAILABLE
    return KIND_STATUS.get(result.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)


def error_response(result: ServiceResult) -> Response:
    return Response(
        {"detail": result.error_detail, "code": result.error, "kind": result.kind},
        status=status_for(result),
    )


def validation_response(errors) -> Response:
    """Response for serializer validation failures."""
    return Response(
        {"detail": errors, "code": ErrorCodes.VALIDATION_ERROR, "kind": ErrorKinds.VALIDATION},
        status=status.HTTP_400_BAD_REQUEST,
    )
