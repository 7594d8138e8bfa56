"""
Bitly v4 API client for creating short links.
"""

from __future__ import annotations

import logging
import os
from typing import Any

import httpx

from src.ports.shortener import ShortenerError
from src.rules.models import ShortenerRules

logger = logging.getLogger(__name__)


class BitlyClient:
    """Creates bitlinks through POST /bitlinks."""

    def __init__(
        self,
        token: str,
        api_url: str = "https://api-ssl.bitly.com/v4",
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self.api_url,
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_rules(
        cls,
        rules: ShortenerRules,
        transport: httpx.BaseTransport | None = None,
    ) -> BitlyClient | None:
        """Create a client from config; None when the access token is not set."""
        token = os.environ.get(rules.token_env)
        if not token:
            logger.warning("Bitly not configured (missing %s)", rules.token_env)
            return None

        return cls(
            token=token,
            api_url=rules.api_url,
            timeout=rules.timeout_seconds,
            transport=transport,
        )

    def shorten(self, long_url: str, domain: str, title: str | None = None) -> str:
        """
        Create a bitlink for long_url on the given domain.

        Returns:
            The short link, e.g. "https://bit.ly/3abcXYZ"

        Raises:
            ShortenerError: If the request fails or the response has no link
        """
        payload: dict[str, Any] = {"long_url": long_url, "domain": domain}
        if title:
            payload["title"] = title

        try:
            response = self._client.post("/bitlinks", json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            message = _error_message(e.response)
            logger.error("Bitly API error %s: %s", e.response.status_code, message)
            raise ShortenerError(
                f"Bitly API error: {message}", status_code=e.response.status_code
            ) from e
        except httpx.HTTPError as e:
            logger.error("Bitly request failed: %s", e)
            raise ShortenerError(f"Bitly request failed: {e}") from e
        except ValueError as e:
            raise ShortenerError("Bitly returned a non-JSON response") from e

        link = data.get("link") if isinstance(data, dict) else None
        if not isinstance(link, str) or not link:
            raise ShortenerError("Bitly response did not include a link")

        return link

    def close(self) -> None:
        self._client.close()


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(data, dict):
        return str(data.get("description") or data.get("message") or data)
    return str(data)


class UnconfiguredShortener:
    """Stand-in used when no access token is configured: every call fails."""

    def __init__(self, reason: str) -> None:
        self.reason = reason

    def shorten(self, long_url: str, domain: str, title: str | None = None) -> str:
        raise ShortenerError(self.reason)
