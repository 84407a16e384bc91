"""Candidate discovery from page metadata and root domain conventions"""

import asyncio
import logging
from typing import Optional

from bs4 import BeautifulSoup

from iconfetch.icons.constants import PARSER, SELECTOR_RULES, SKIPPED_URL_SCHEMES
from iconfetch.icons.fetcher import IconFetcher, is_html_mime_type
from iconfetch.icons.models import Candidate, IconType
from iconfetch.icons.url_tools import (
    resolve_relative_url,
    root_icon_url,
    second_level_domain_url,
)

logger = logging.getLogger(__name__)


def root_icon_candidates(url: Optional[str]) -> list[Candidate]:
    """Return the `/favicon.ico` candidates for a URL's host and its second-level domain.

    The root icon candidate is always present; its URL is None if `url` can't be parsed.
    """
    root_url = root_icon_url(url)
    candidates = [Candidate(url=root_url, icon_type=IconType.ROOT_ICON)]

    second_level_url = root_icon_url(second_level_domain_url(url))
    if second_level_url and second_level_url != root_url:
        candidates.append(
            Candidate(url=second_level_url, icon_type=IconType.SECOND_LEVEL_ROOT_ICON)
        )
    return candidates


def metadata_candidates(
    html: Optional[str],
    base_url: str,
    selector_rules: dict[IconType, tuple[str, str]] = SELECTOR_RULES,
) -> list[Candidate]:
    """Apply the selector rules to HTML and resolve every match against `base_url`."""
    if not html:
        return []

    page = BeautifulSoup(html, PARSER)
    candidates: list[Candidate] = []
    for icon_type, (selector, attribute) in selector_rules.items():
        for element in page.select(selector):
            value = element.get(attribute)
            if isinstance(value, list):
                value = " ".join(value)
            value = (value or "").strip()
            if not value or value.lower().startswith(SKIPPED_URL_SCHEMES):
                continue
            candidates.append(
                Candidate(url=resolve_relative_url(base_url, value), icon_type=icon_type)
            )
    return candidates


def unique_candidates(candidates: list[Candidate]) -> list[Candidate]:
    """Drop exact (url, icon type) repeats, keeping discovery order."""
    return list(dict.fromkeys(candidates))


class CandidateDiscovery:
    """Produce every icon candidate for a requested URL."""

    def __init__(
        self,
        fetcher: IconFetcher,
        selector_rules: dict[IconType, tuple[str, str]] = SELECTOR_RULES,
    ) -> None:
        self.fetcher = fetcher
        self.selector_rules = selector_rules

    async def find_all_icons(self, requested_url: str) -> list[Candidate]:
        """Fetch the page, then collect metadata and root icon candidates concurrently.

        A failed page fetch only skips the metadata candidates; root icon candidates
        for `requested_url` are always returned.
        """
        page = await self.fetcher.get(requested_url)
        final_url = page.final_url if page.ok and page.final_url else requested_url

        html: Optional[str] = None
        if page.ok and is_html_mime_type(page.mime_type):
            html = page.text()
        elif page.ok:
            logger.debug(f"{requested_url} does not contain HTML ({page.mime_type})")
        else:
            logger.debug(f"Page fetch failed for {requested_url} with status {page.status}")

        async with asyncio.TaskGroup() as task_group:
            root_task = task_group.create_task(self._root_icons(requested_url))
            metadata_task = task_group.create_task(self._metadata_icons(html, final_url))
            redirect_task = (
                task_group.create_task(self._root_icons(final_url))
                if final_url != requested_url
                else None
            )

        candidates = root_task.result() + metadata_task.result()
        if redirect_task is not None:
            candidates += redirect_task.result()

        candidates = unique_candidates(candidates)
        logger.debug(f"Found {len(candidates)} icon candidates for {requested_url}")
        return candidates

    async def _root_icons(self, url: str) -> list[Candidate]:
        return root_icon_candidates(url)

    async def _metadata_icons(self, html: Optional[str], base_url: str) -> list[Candidate]:
        if not html:
            return []
        try:
            return await asyncio.to_thread(
                metadata_candidates, html, base_url, self.selector_rules
            )
        except Exception as e:
            logger.warning(f"Error extracting metadata icons from {base_url}: {e}")
            return []
