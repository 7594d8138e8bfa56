"""
Bitly client tests against an httpx.MockTransport.
"""

import json

import httpx
import pytest

from src.adapters.bitly import BitlyClient, UnconfiguredShortener
from src.ports.shortener import ShortenerError
from src.rules.models import ShortenerRules


def make_client(handler) -> BitlyClient:
    return BitlyClient(
        token="test-token",
        api_url="https://api-ssl.bitly.com/v4/",
        transport=httpx.MockTransport(handler),
    )


def test_shorten_posts_bitlink_request():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"link": "https://bit.ly/3abc", "id": "bit.ly/3abc"})

    client = make_client(handler)
    link = client.shorten("https://example.com/hello?utm_source=twitter", "bit.ly", title="Hello")

    assert link == "https://bit.ly/3abc"
    assert seen["method"] == "POST"
    assert seen["url"] == "https://api-ssl.bitly.com/v4/bitlinks"
    assert seen["auth"] == "Bearer test-token"
    assert seen["body"] == {
        "long_url": "https://example.com/hello?utm_source=twitter",
        "domain": "bit.ly",
        "title": "Hello",
    }


def test_shorten_omits_empty_title():
    bodies = []

    def handler(request):
        bodies.append(json.loads(request.content))
        return httpx.Response(201, json={"link": "https://bit.ly/x"})

    make_client(handler).shorten("https://example.com/", "bit.ly")

    assert "title" not in bodies[0]


def test_api_error_maps_to_shortener_error():
    def handler(request):
        return httpx.Response(403, json={"message": "FORBIDDEN", "description": "Bad token"})

    with pytest.raises(ShortenerError) as exc_info:
        make_client(handler).shorten("https://example.com/", "bit.ly")

    assert exc_info.value.status_code == 403
    assert "Bad token" in str(exc_info.value)


def test_transport_error_maps_to_shortener_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ShortenerError) as exc_info:
        make_client(handler).shorten("https://example.com/", "bit.ly")

    assert exc_info.value.status_code is None


def test_missing_link_is_an_error():
    def handler(request):
        return httpx.Response(200, json={"id": "bit.ly/3abc"})

    with pytest.raises(ShortenerError, match="did not include a link"):
        make_client(handler).shorten("https://example.com/", "bit.ly")


def test_non_json_response_is_an_error():
    def handler(request):
        return httpx.Response(200, text="<html>oops</html>")

    with pytest.raises(ShortenerError, match="non-JSON"):
        make_client(handler).shorten("https://example.com/", "bit.ly")


def test_from_rules_without_token_returns_none(monkeypatch):
    monkeypatch.delenv("TEST_BITLY_TOKEN", raising=False)
    assert BitlyClient.from_rules(ShortenerRules(token_env="TEST_BITLY_TOKEN")) is None


def test_from_rules_with_token(monkeypatch):
    monkeypatch.setenv("TEST_BITLY_TOKEN", "abc")
    client = BitlyClient.from_rules(
        ShortenerRules(token_env="TEST_BITLY_TOKEN", api_url="https://bitly.test/v4")
    )

    assert client is not None
    assert client.api_url == "https://bitly.test/v4"
    client.close()


def test_unconfigured_shortener_always_fails():
    shortener = UnconfiguredShortener("BITLY_ACCESS_TOKEN is not set")
    with pytest.raises(ShortenerError, match="not set"):
        shortener.shorten("https://example.com/", "bit.ly")
