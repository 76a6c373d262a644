"""Classification of live-provider failures into ProviderError records."""

from __future__ import annotations

import httpx

from flightabove.contracts.enums import ProviderErrorType
from flightabove.contracts.provider_error import ProviderError
from flightabove.services.errors import MalformedResponseError
from flightabove.services.flights.fr24_client import SUBSCRIPTION_URL

_STATUS_TYPES: dict[int, ProviderErrorType] = {
    401: ProviderErrorType.INVALID_CREDENTIAL,
    403: ProviderErrorType.INVALID_CREDENTIAL,
    402: ProviderErrorType.PAYMENT_REQUIRED,
    404: ProviderErrorType.NOT_FOUND,
    429: ProviderErrorType.RATE_LIMITED,
}

_MESSAGES: dict[ProviderErrorType, str] = {
    ProviderErrorType.INVALID_CREDENTIAL: "The Flightradar24 API key was rejected.",
    ProviderErrorType.PAYMENT_REQUIRED: "Your Flightradar24 API credits are exhausted.",
    ProviderErrorType.RATE_LIMITED: "Too many requests to Flightradar24; try again shortly.",
    ProviderErrorType.NETWORK_FAILURE: "Could not reach Flightradar24.",
    ProviderErrorType.NOT_FOUND: "The Flightradar24 endpoint was not found.",
    ProviderErrorType.OTHER: "Flightradar24 returned an unexpected response.",
}

_DETAIL_LIMIT = 300


def classify_provider_error(exc: Exception) -> ProviderError:
    """Map an exception raised while polling the live provider to a ProviderError.

    - HTTP 401/403 -> InvalidCredential, 402 -> PaymentRequired,
      404 -> NotFound, 429 -> RateLimited, any other status -> Other
    - no HTTP response (transport error) -> NetworkFailure
    - anything else (malformed body, bug) -> Other
    """
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        err_type = _STATUS_TYPES.get(status, ProviderErrorType.OTHER)
        return ProviderError(
            type=err_type,
            message=_MESSAGES[err_type],
            status_code=status if 100 <= status <= 599 else None,
            detail=_response_detail(exc.response),
            action_url=SUBSCRIPTION_URL if err_type == ProviderErrorType.PAYMENT_REQUIRED else None,
        )

    if isinstance(exc, httpx.TransportError):
        return ProviderError(
            type=ProviderErrorType.NETWORK_FAILURE,
            message=_MESSAGES[ProviderErrorType.NETWORK_FAILURE],
            detail=str(exc) or exc.__class__.__name__,
        )

    if isinstance(exc, MalformedResponseError):
        detail = str(exc)
    else:
        detail = f"{exc.__class__.__name__}: {exc}"
    return ProviderError(
        type=ProviderErrorType.OTHER,
        message=_MESSAGES[ProviderErrorType.OTHER],
        detail=detail[:_DETAIL_LIMIT],
    )


def _response_detail(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return text[:_DETAIL_LIMIT] or None
    if isinstance(body, dict):
        for key in ("message", "details", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value[:_DETAIL_LIMIT]
    return None
