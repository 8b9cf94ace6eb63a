"""
Unit tests for error rendering.
"""

import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from tests.conftest import make_settings
from trustless_agent.core.errors import TransportError, general_exception_handler


def make_request(settings=None) -> MagicMock:
    request = MagicMock()
    request.url.path = "/run"
    request.app.state = SimpleNamespace(settings=settings)
    return request


def raise_and_capture() -> Exception:
    try:
        raise RuntimeError("boom")
    except RuntimeError as e:
        return e


class TestGeneralExceptionHandler:
    """Test rendering of unhandled exceptions."""

    @pytest.mark.asyncio
    async def test_type_and_message_by_default(self):
        response = await general_exception_handler(make_request(make_settings()), raise_and_capture())

        assert response.status_code == 500
        assert json.loads(response.body) == {"error": "Internal server error", "detail": "RuntimeError: boom"}

    @pytest.mark.asyncio
    async def test_traceback_in_debug_mode(self):
        request = make_request(make_settings(debug=True, environment="development"))

        response = await general_exception_handler(request, raise_and_capture())

        detail = json.loads(response.body)["detail"]
        assert detail.startswith("Traceback (most recent call last):")
        assert "RuntimeError: boom" in detail

    @pytest.mark.asyncio
    async def test_no_traceback_in_production_even_with_debug(self):
        request = make_request(make_settings(debug=True, environment="production"))

        response = await general_exception_handler(request, raise_and_capture())

        assert json.loads(response.body)["detail"] == "RuntimeError: boom"

    @pytest.mark.asyncio
    async def test_without_settings_on_app(self):
        response = await general_exception_handler(make_request(), raise_and_capture())
        assert json.loads(response.body)["detail"] == "RuntimeError: boom"


class TestTransportError:
    """Test TransportError status mapping."""

    def test_upstream_error_status_is_kept(self):
        assert TransportError("x", status_code=429).status_code == 429

    @pytest.mark.parametrize("upstream", [None, 200, 302])
    def test_other_statuses_become_bad_gateway(self, upstream):
        error = TransportError("x", status_code=upstream)
        assert error.status_code == 502
        assert error.upstream_status == upstream
