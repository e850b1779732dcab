"""Web API client — posts form-encoded arguments to named remote methods.

Method names such as ``chat.postMessage`` are resolved against the API base
URL; anything that already starts with ``http`` is used as is.  The remote
side always answers with a JSON document, which is returned unchanged.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://slack.com/api/"

_ABSOLUTE_URL = re.compile(r"^http", re.IGNORECASE)


class WebApiError(RuntimeError):
    """Raised when a request fails or the response is not JSON."""

    def __init__(self, message: str, body: str = "") -> None:
        super().__init__(message)
        self.body = body


def encode_form_fields(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Prepare *payload* for form transport.

    Structured values (attachments, blocks, any dict or list) are sent as
    JSON strings; ``None`` values are dropped.
    """
    fields: dict[str, Any] = {}
    for key, value in payload.items():
        if value is None:
            continue
        if isinstance(value, (dict, list, tuple)):
            value = json.dumps(value)
        fields[key] = value
    return fields


class WebApiClient:
    """Synchronous client for the platform's HTTP methods.

    Parameters
    ----------
    base_url:
        Prefix for relative method names.
    timeout:
        Per-request timeout in seconds.
    http_client:
        Pre-built ``httpx.Client`` (tests inject one with a mock transport).
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE,
        *,
        timeout: float = 10.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._base_url = base_url if base_url.endswith("/") else base_url + "/"
        self._client = http_client or httpx.Client(timeout=timeout)

    @property
    def base_url(self) -> str:
        return self._base_url

    def resolve_url(self, endpoint: str) -> str:
        """Turn a method name into an absolute URL."""
        if _ABSOLUTE_URL.match(endpoint):
            return endpoint
        return self._base_url + endpoint.lstrip("/")

    def post(self, endpoint: str, payload: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """POST *payload* form-encoded to *endpoint* and return the JSON result.

        Raises
        ------
        WebApiError
            On a transport failure or a body that is not valid JSON.
        """
        url = self.resolve_url(endpoint)
        fields = encode_form_fields(payload or {})

        logger.debug("POST %s (%d fields)", url, len(fields))
        try:
            response = self._client.post(url, data=fields)
        except httpx.HTTPError as exc:
            raise WebApiError(f"Request to {url} failed: {exc}") from exc

        try:
            return response.json()
        except ValueError as exc:
            raise WebApiError(
                f"Non-JSON response from {url} (HTTP {response.status_code})",
                body=response.text,
            ) from exc

    def close(self) -> None:
        self._client.close()
