"""
Name: Error Mapping Tests

Responsibilities:
  - Each typed application error maps to one HTTP status and RFC7807 code
"""

import pytest

from files_manager.api.exception_handlers import _classify
from files_manager.crosscutting.error_responses import ErrorCode
from files_manager.crosscutting.exceptions import (
    AuthorizationError,
    ConnectivityError,
    DatabaseError,
    FilesManagerError,
    JobValidationError,
    NotFoundError,
    ValidationError,
)

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "error,status_code,code",
    [
        (AuthorizationError(), 401, ErrorCode.UNAUTHORIZED),
        (ValidationError("Missing email"), 400, ErrorCode.VALIDATION_ERROR),
        (NotFoundError("File not found"), 404, ErrorCode.NOT_FOUND),
        (ConnectivityError("down"), 503, ErrorCode.SERVICE_UNAVAILABLE),
        (DatabaseError("Error creating user."), 500, ErrorCode.DATABASE_ERROR),
        (JobValidationError("Invalid userId"), 500, ErrorCode.INTERNAL_ERROR),
        (FilesManagerError("boom"), 500, ErrorCode.INTERNAL_ERROR),
    ],
)
def test_classify(error, status_code, code):
    assert _classify(error) == (status_code, code)
