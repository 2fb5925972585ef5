# tests/unit/core/test_errors.py
import importlib

from fastapi import status

import core.errors as errors_module
from core.errors import APIBadRequestError, APIUnprocessableEntityError

if hasattr(status, "HTTP_422_UNPROCESSABLE_CONTENT"):
    HTTP_422_UNPROCESSABLE = status.HTTP_422_UNPROCESSABLE_CONTENT
else:
    HTTP_422_UNPROCESSABLE = status.HTTP_422_UNPROCESSABLE_ENTITY


def test_api_bad_request_error():
    """Tests the APIBadRequestError custom exception."""
    try:
        raise APIBadRequestError("Too many periods")
    except APIBadRequestError as e:
        assert e.status_code == status.HTTP_400_BAD_REQUEST
        assert e.detail == "Too many periods"


def test_api_unprocessable_entity_error():
    """Tests the APIUnprocessableEntityError custom exception."""
    try:
        raise APIUnprocessableEntityError("INVALID_SIGN_MIX: Cash flows must include both an outflow and an inflow.")
    except APIUnprocessableEntityError as e:
        assert e.status_code == HTTP_422_UNPROCESSABLE
        assert e.detail.startswith("INVALID_SIGN_MIX")


def test_default_details():
    assert APIBadRequestError().detail == "Bad Request"
    assert APIUnprocessableEntityError().detail == "Unprocessable Entity"


def test_legacy_422_fallback_branch(monkeypatch):
    if hasattr(status, "HTTP_422_UNPROCESSABLE_CONTENT"):
        monkeypatch.delattr(status, "HTTP_422_UNPROCESSABLE_CONTENT", raising=False)
        reloaded = importlib.reload(errors_module)
        assert reloaded.HTTP_422_UNPROCESSABLE == status.HTTP_422_UNPROCESSABLE_ENTITY
        importlib.reload(errors_module)
