# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Unit tests for the fetcher module."""

import asyncio
import base64

import httpx
import pytest

from iconfetch.icons.fetcher import (
    IconFetcher,
    decode_data_uri,
    is_data_uri,
    is_html_mime_type,
    is_image_mime_type,
)
from iconfetch.icons.models import FetchResponse
from tests.fakes import PNG_BYTES, FakeWeb, failure, html_page, image, redirect


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("image/png", True),
        ("IMAGE/X-ICON", True),
        ("image/svg+xml; charset=utf-8", True),
        ("text/html", False),
        ("application/octet-stream", False),
        ("", False),
        (None, False),
        (FetchResponse(ok=True, status=200, final_url="u", mime_type="image/jpeg"), True),
        (FetchResponse(ok=True, status=200, final_url="u", mime_type="text/plain"), False),
        (httpx.Response(200, headers={"Content-Type": "image/gif"}), True),
    ],
)
def test_is_image_mime_type(value, expected: bool) -> None:
    """Test MIME matching on strings and response values."""
    assert is_image_mime_type(value) is expected


def test_is_html_mime_type() -> None:
    """Test HTML detection ignores case and parameters."""
    assert is_html_mime_type("text/html; charset=UTF-8")
    assert is_html_mime_type("TEXT/HTML")
    assert not is_html_mime_type("application/json")
    assert not is_html_mime_type("")
    assert not is_html_mime_type(None)


def test_decode_data_uri() -> None:
    """Test that a png data URI decodes to the exact payload bytes."""
    payload = base64.b64encode(PNG_BYTES + b"\x00").decode()
    uri = f"data:image/png;base64,{payload}"

    response = decode_data_uri(uri)

    assert is_data_uri(uri)
    assert response.ok is True
    assert response.status == 200
    assert response.mime_type == "image/png"
    assert response.content == PNG_BYTES + b"\x00"
    assert response.length == len(PNG_BYTES) + 1


def test_decode_data_uri_invalid_payload() -> None:
    """Test that an undecodable payload is reported unreachable."""
    response = decode_data_uri("data:image/jpeg;base64,@@not-base64@@")

    assert response.ok is False
    assert response.status == 404


@pytest.mark.parametrize(
    "uri",
    ["data:image/gif;base64,R0lGOD==", "data:text/html;base64,PGI+", "https://example.com/a.png"],
)
def test_is_data_uri_rejects(uri: str) -> None:
    """Test that only base64 png and jpeg data URIs are treated as data URIs."""
    assert not is_data_uri(uri)


@pytest.mark.asyncio
async def test_get_data_uri_without_network(fetcher: IconFetcher, fake_web: FakeWeb) -> None:
    """Test that data URIs are decoded without issuing any request."""
    payload = base64.b64encode(PNG_BYTES).decode()

    response = await fetcher.get(f"data:image/png;base64,{payload}")

    assert response.ok is True
    assert response.content == PNG_BYTES
    assert fake_web.requested == []


@pytest.mark.asyncio
async def test_get_image(fetcher: IconFetcher, fake_web: FakeWeb) -> None:
    """Test a successful GET is normalized into a response."""
    fake_web.routes["https://example.com/fav.png"] = image()

    response = await fetcher.get("https://example.com/fav.png")

    assert response.ok is True
    assert response.status == 200
    assert response.final_url == "https://example.com/fav.png"
    assert response.mime_type == "image/png"
    assert response.content == PNG_BYTES
    assert response.length == len(PNG_BYTES)
    assert ("content-type", "image/png") in response.headers


@pytest.mark.asyncio
async def test_get_follows_redirects(fetcher: IconFetcher, fake_web: FakeWeb) -> None:
    """Test that redirects are followed and the final URL reported."""
    fake_web.routes["http://example.com/"] = redirect("https://www.example.com/home")
    fake_web.routes["https://www.example.com/home"] = html_page("<html></html>")

    response = await fetcher.get("http://example.com/")

    assert response.ok is True
    assert response.final_url == "https://www.example.com/home"
    assert response.text() == "<html></html>"


@pytest.mark.asyncio
async def test_get_not_found(fetcher: IconFetcher) -> None:
    """Test that a 404 comes back as a failed response."""
    response = await fetcher.get("https://example.com/missing.png")

    assert response.ok is False
    assert response.status == 404


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [httpx.ConnectError, httpx.ReadTimeout, httpx.RemoteProtocolError])
async def test_get_transport_failure(
    fetcher: IconFetcher, fake_web: FakeWeb, error: type[httpx.TransportError]
) -> None:
    """Test that transport failures never raise and look like a 404."""
    fake_web.routes["https://example.com/fav.png"] = failure(error)

    response = await fetcher.get("https://example.com/fav.png")

    assert response.ok is False
    assert response.status == 404
    assert response.final_url == "https://example.com/fav.png"


@pytest.mark.asyncio
@pytest.mark.parametrize("url", [None, "", "not a url", "ftp://example.com/x.ico"])
async def test_get_unusable_url(fetcher: IconFetcher, url: str | None) -> None:
    """Test that unusable URLs are reported unreachable."""
    response = await fetcher.get(url)

    assert response.ok is False
    assert response.status == 404


@pytest.mark.asyncio
async def test_get_probe_timeout(fetcher: IconFetcher, mocker) -> None:
    """Test that a probe exceeding its time bound is reported unreachable."""
    fetcher.probe_timeout_sec = 0.01

    async def slow_get(*args, **kwargs):
        await asyncio.sleep(1)

    mocker.patch.object(fetcher.session, "get", side_effect=slow_get)

    response = await fetcher.get("https://slow.example.com/fav.ico")

    assert response.ok is False
    assert response.status == 404


@pytest.mark.parametrize(
    ("encoding", "content", "expected"),
    [
        (None, "héllo".encode(), "héllo"),
        ("iso-8859-1", "héllo".encode("iso-8859-1"), "héllo"),
        ("x-bogus-charset", "héllo".encode(), "héllo"),
        ("utf-8", b"caf\xff", "caf\ufffd"),
    ],
)
def test_fetch_response_text(encoding: str | None, content: bytes, expected: str) -> None:
    """Test that bodies decode with the sent charset, UTF-8 when missing or unknown."""
    response = FetchResponse(
        ok=True, status=200, final_url="u", encoding=encoding, content=content
    )

    assert response.text() == expected
