"""Concurrent validation of icon candidates"""

import asyncio
import logging

from iconfetch.icons.fetcher import IconFetcher, is_image_mime_type, unreachable
from iconfetch.icons.models import Candidate, FetchResponse, ValidatedIcon

logger = logging.getLogger(__name__)


class IconValidator:
    """Probe every candidate with GET and keep the reachable, image typed ones."""

    def __init__(self, fetcher: IconFetcher) -> None:
        self.fetcher = fetcher

    async def validate_icons(self, candidates: list[Candidate]) -> list[ValidatedIcon]:
        """Return the valid candidates enriched with MIME type, length and bytes.

        Each distinct URL is probed once and all probes run concurrently. The call
        returns only after every probe settled; one failing probe never aborts the
        others. Output follows the order of `candidates`.
        """
        urls = list(dict.fromkeys(c.url for c in candidates if c.url))
        if not urls:
            return []

        results = await asyncio.gather(
            *(self.fetcher.get(url) for url in urls), return_exceptions=True
        )
        probes: dict[str, FetchResponse] = {}
        for url, result in zip(urls, results):
            if isinstance(result, BaseException):
                logger.warning(f"Unexpected error probing {url}: {result!r}")
                probes[url] = unreachable(url)
            else:
                probes[url] = result

        validated: list[ValidatedIcon] = []
        for candidate in candidates:
            if not candidate.url:
                continue
            response = probes[candidate.url]
            if not self.is_valid(response):
                logger.debug(
                    f"Rejected {candidate.icon_type.value} candidate {candidate.url}: "
                    f"status={response.status} type={response.mime_type!r}"
                )
                continue
            validated.append(
                ValidatedIcon(
                    url=candidate.url,
                    icon_type=candidate.icon_type,
                    mime_type=response.mime_type,
                    length=response.length,
                    content=response.content,
                    headers=response.headers,
                )
            )
        return validated

    @staticmethod
    def is_valid(response: FetchResponse) -> bool:
        """Check if a probe reached an image."""
        return response.ok and is_image_mime_type(response)
