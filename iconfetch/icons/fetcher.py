"""Fetcher normalizing HTTP(S) responses and data URIs into `FetchResponse` values"""

import asyncio
import base64
import binascii
import logging
from typing import Any

import httpx

from iconfetch.icons.constants import (
    DATA_URI_PATTERN,
    HTML_MIME_TYPE_PATTERN,
    IMAGE_MIME_TYPE_PATTERN,
    REQUEST_HEADERS,
    UNREACHABLE_STATUS,
)
from iconfetch.icons.models import FetchResponse, IconConfig
from iconfetch.utils.http_client import create_http_client

logger = logging.getLogger(__name__)


def is_image_mime_type(value: Any) -> bool:
    """Check whether a MIME string, or the MIME type of a response, is `image/*`."""
    match value:
        case str():
            mime_type = value
        case FetchResponse():
            mime_type = value.mime_type
        case httpx.Response():
            mime_type = value.headers.get("Content-Type", "")
        case _:
            return False
    return IMAGE_MIME_TYPE_PATTERN.match(mime_type.strip()) is not None


def is_html_mime_type(mime_type: str | None) -> bool:
    """Check whether a MIME string is `text/html`."""
    return bool(mime_type) and HTML_MIME_TYPE_PATTERN.match(mime_type.strip()) is not None


def is_data_uri(url: str | None) -> bool:
    """Check whether URL is a base64 png or jpeg data URI."""
    return bool(url) and DATA_URI_PATTERN.match(url.strip()) is not None


def unreachable(url: str | None) -> FetchResponse:
    """Return the failed response used for anything that couldn't be fetched."""
    return FetchResponse(ok=False, status=UNREACHABLE_STATUS, final_url=url or "")


def decode_data_uri(uri: str) -> FetchResponse:
    """Decode a `data:image/(png|jpeg);base64,...` URI without any network I/O."""
    match = DATA_URI_PATTERN.match(uri.strip())
    if match is None:
        return unreachable(uri)
    mime_type, payload = match.groups()
    try:
        content = base64.b64decode("".join(payload.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        logger.debug(f"Invalid base64 payload in data URI: {e}")
        return unreachable(uri)
    return FetchResponse(
        ok=True,
        status=200,
        final_url=uri,
        mime_type=mime_type.lower(),
        content=content,
    )


class IconFetcher:
    """Fetch pages and icons with GET, following redirects.

    HEAD is never used since many servers answer it inconsistently. Transport
    failures of any kind come back as an unreachable response, never as an exception.
    """

    def __init__(self, config: IconConfig, session: httpx.AsyncClient | None = None) -> None:
        self.probe_timeout_sec = config.probe_timeout_sec
        self.session = session or create_http_client(
            max_connections=config.max_connections,
            connect_timeout=config.connect_timeout_sec,
            request_timeout=config.request_timeout_sec,
        )

    async def get(self, url: str | None) -> FetchResponse:
        """Fetch URL and return a normalized response."""
        if not url:
            return unreachable(url)

        if is_data_uri(url):
            return decode_data_uri(url)

        try:
            async with asyncio.timeout(self.probe_timeout_sec):
                response = await self.session.get(
                    url, headers=REQUEST_HEADERS, follow_redirects=True
                )
        except (httpx.HTTPError, httpx.InvalidURL, TimeoutError) as e:
            logger.debug(f"Failed to fetch URL {url}: {e!r}")
            return unreachable(url)

        return FetchResponse(
            ok=response.is_success,
            status=response.status_code,
            final_url=str(response.url),
            headers=list(response.headers.multi_items()),
            mime_type=response.headers.get("Content-Type", ""),
            encoding=response.charset_encoding,
            content=response.content,
        )

    async def close(self) -> None:
        """Close HTTP session and release resources."""
        await self.session.aclose()
