"""Unit tests for middleware."""
import pytest
from unittest.mock import Mock

from ballotbox.middleware.logging import LoggingMiddleware
from ballotbox.middleware.security import SECURITY_HEADERS, SecurityHeadersMiddleware


def make_request(method="GET", path="/resultados", headers=None):
    mock_request = Mock()
    mock_request.state = Mock()
    mock_request.method = method
    mock_request.url = Mock()
    mock_request.url.path = path
    mock_request.headers = headers or {}
    mock_request.client = Mock()
    mock_request.client.host = "127.0.0.1"
    return mock_request


def make_response(status_code=200, headers=None):
    mock_response = Mock()
    mock_response.headers = headers if headers is not None else {}
    mock_response.status_code = status_code
    return mock_response


@pytest.mark.unit
class TestLoggingMiddleware:
    """Test logging middleware."""

    @pytest.mark.asyncio
    async def test_request_id_added_to_state_before_handler(self):
        mock_request = make_request()
        mock_response = make_response()

        async def mock_call_next(request):
            assert isinstance(request.state.request_id, str)
            assert len(request.state.request_id) > 0
            return mock_response

        middleware = LoggingMiddleware(Mock())
        response = await middleware.dispatch(mock_request, mock_call_next)

        assert response.headers["X-Request-ID"] == mock_request.state.request_id

    @pytest.mark.asyncio
    async def test_request_ids_are_unique(self):
        middleware = LoggingMiddleware(Mock())

        async def mock_call_next(request):
            return make_response()

        first = await middleware.dispatch(make_request(), mock_call_next)
        second = await middleware.dispatch(make_request(method="POST", path="/votar"), mock_call_next)

        assert first.headers["X-Request-ID"] != second.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_handler_exception_propagates(self):
        middleware = LoggingMiddleware(Mock())

        async def mock_call_next(request):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            await middleware.dispatch(make_request(headers={"X-Forwarded-For": "203.0.113.1"}), mock_call_next)


@pytest.mark.unit
class TestSecurityHeadersMiddleware:
    """Test security headers middleware."""

    @pytest.mark.asyncio
    async def test_adds_headers(self):
        middleware = SecurityHeadersMiddleware(Mock())

        async def mock_call_next(request):
            return make_response()

        response = await middleware.dispatch(make_request(), mock_call_next)

        for name, value in SECURITY_HEADERS.items():
            assert response.headers[name] == value

    @pytest.mark.asyncio
    async def test_keeps_headers_set_by_handler(self):
        middleware = SecurityHeadersMiddleware(Mock())

        async def mock_call_next(request):
            return make_response(headers={"X-Frame-Options": "DENY"})

        response = await middleware.dispatch(make_request(), mock_call_next)

        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["X-Content-Type-Options"] == "nosniff"
