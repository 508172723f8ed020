"""Unit tests for classifying httpx failures into RegistryError."""

import httpx
import pytest

from vamdc_registry.api_clients.network_error_handler import (
    NetworkErrorHandler,
    UserGuidance,
)
from vamdc_registry.exceptions import RegistryError

ENDPOINT = "http://registry.test/q"
REQUEST = httpx.Request("POST", ENDPOINT)


@pytest.fixture
def handler():
    return NetworkErrorHandler()


class TestClassifyNetworkError:
    """Each httpx failure maps to one RegistryError with guidance."""

    def test_dns_failure(self, handler):
        error = httpx.ConnectError("[Errno -2] Name or service not known", request=REQUEST)

        with pytest.raises(RegistryError, match="Cannot resolve") as exc_info:
            handler.classify_network_error(error, ENDPOINT)

        assert "DNS Resolution Failed" in exc_info.value.user_guidance
        assert exc_info.value.__cause__ is error

    def test_ssl_failure(self, handler):
        error = httpx.ConnectError("certificate verify failed", request=REQUEST)

        with pytest.raises(RegistryError, match="SSL certificate"):
            handler.classify_network_error(error, ENDPOINT)

    def test_generic_connect_failure(self, handler):
        error = httpx.ConnectError("something odd", request=REQUEST)

        with pytest.raises(RegistryError, match="Connection to registry"):
            handler.classify_network_error(error, ENDPOINT)

    def test_timeout(self, handler):
        error = httpx.ReadTimeout("timed out", request=REQUEST)

        with pytest.raises(RegistryError, match="timed out") as exc_info:
            handler.classify_network_error(error, ENDPOINT)

        assert "Request Timeout" in exc_info.value.user_guidance

    def test_client_error_status(self, handler):
        response = httpx.Response(404, request=REQUEST)
        error = httpx.HTTPStatusError("HTTP 404", request=REQUEST, response=response)

        with pytest.raises(RegistryError, match="HTTP 404") as exc_info:
            handler.classify_network_error(error, ENDPOINT)

        assert exc_info.value.status_code == 404
        assert "Request Rejected" in exc_info.value.user_guidance

    def test_other_transport_error(self, handler):
        error = httpx.RemoteProtocolError("peer closed connection", request=REQUEST)

        with pytest.raises(RegistryError, match="Network error"):
            handler.classify_network_error(error, ENDPOINT)

    def test_redirect_loop_is_a_network_error(self, handler):
        error = httpx.TooManyRedirects("Exceeded maximum allowed redirects.", request=REQUEST)

        with pytest.raises(RegistryError, match="Network error") as exc_info:
            handler.classify_network_error(error, ENDPOINT)

        assert exc_info.value.__cause__ is error
        assert exc_info.value.status_code is None


class TestUserGuidance:
    def test_format_for_console_numbers_steps(self):
        guidance = UserGuidance(
            error_type="Example",
            troubleshooting_steps=["first", "second"],
            additional_notes=["note"],
        )

        text = guidance.format_for_console()

        assert "1. first" in text
        assert "2. second" in text
        assert "• note" in text
