"""Tests for provider failure classification."""

import httpx
import pytest

from flightabove.contracts.enums import ProviderErrorType
from flightabove.services.errors import MalformedResponseError
from flightabove.services.flights.error_classifier import classify_provider_error
from flightabove.services.flights.fr24_client import SUBSCRIPTION_URL

URL = "https://fr24api.flightradar24.com/api/live/flight-positions/light"


def _status_error(status: int, **kwargs) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", URL)
    response = httpx.Response(status, request=request, **kwargs)
    return httpx.HTTPStatusError(f"HTTP {status}", request=request, response=response)


class TestClassifyProviderError:
    @pytest.mark.parametrize("status,expected", [
        (401, ProviderErrorType.INVALID_CREDENTIAL),
        (403, ProviderErrorType.INVALID_CREDENTIAL),
        (402, ProviderErrorType.PAYMENT_REQUIRED),
        (404, ProviderErrorType.NOT_FOUND),
        (429, ProviderErrorType.RATE_LIMITED),
        (500, ProviderErrorType.OTHER),
        (503, ProviderErrorType.OTHER),
    ])
    def test_status_mapping(self, status, expected):
        err = classify_provider_error(_status_error(status))
        assert err.type == expected
        assert err.status_code == status
        assert err.message

    def test_payment_required_has_action_url(self):
        err = classify_provider_error(_status_error(402, json={"message": "Insufficient credits"}))
        assert err.action_url == SUBSCRIPTION_URL
        assert err.detail == "Insufficient credits"

    def test_other_errors_have_no_action_url(self):
        assert classify_provider_error(_status_error(401)).action_url is None

    def test_detail_from_details_key(self):
        err = classify_provider_error(_status_error(429, json={"details": "60 req/min exceeded"}))
        assert err.detail == "60 req/min exceeded"

    def test_detail_from_text_truncated(self):
        err = classify_provider_error(_status_error(500, text="x" * 1000))
        assert err.detail == "x" * 300

    def test_transport_error_is_network_failure(self):
        err = classify_provider_error(httpx.ConnectError("connection refused"))
        assert err.type == ProviderErrorType.NETWORK_FAILURE
        assert err.status_code is None
        assert err.detail == "connection refused"

    def test_timeout_is_network_failure(self):
        err = classify_provider_error(httpx.ReadTimeout(""))
        assert err.type == ProviderErrorType.NETWORK_FAILURE
        assert err.detail == "ReadTimeout"

    def test_malformed_body_is_other(self):
        err = classify_provider_error(MalformedResponseError("missing 'data' list"))
        assert err.type == ProviderErrorType.OTHER
        assert err.status_code is None
        assert "data" in err.detail

    def test_unexpected_exception_is_other(self):
        err = classify_provider_error(KeyError("lat"))
        assert err.type == ProviderErrorType.OTHER
        assert err.detail.startswith("KeyError")
