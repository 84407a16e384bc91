"""Icon resolution pipeline: discovery, validation, selection and caching"""

import logging
from typing import Optional

from iconfetch.exceptions import CacheEntryError, CacheWriteError, InputError, NoIconFoundError
from iconfetch.icons.cache import IconCache, cache_key
from iconfetch.icons.discovery import CandidateDiscovery
from iconfetch.icons.fetcher import IconFetcher
from iconfetch.icons.models import CacheEntry, IconConfig, ValidatedIcon
from iconfetch.icons.selector import IconSelector
from iconfetch.icons.url_tools import is_absolute_http_url, second_level_domain_url
from iconfetch.icons.validator import IconValidator
from iconfetch.metrics import IconMetrics

logger = logging.getLogger(__name__)


class IconResolver:
    """Resolve the icons of a requested page URL."""

    def __init__(
        self,
        config: IconConfig,
        metrics: IconMetrics,
        fetcher: Optional[IconFetcher] = None,
        cache: Optional[IconCache] = None,
    ) -> None:
        self.config = config
        self.metrics = metrics
        self.fetcher = fetcher or IconFetcher(config)
        self.discovery = CandidateDiscovery(self.fetcher)
        self.validator = IconValidator(self.fetcher)
        self.cache = cache or IconCache(config)

    async def find_icons(self, requested_url: Optional[str]) -> list[ValidatedIcon]:
        """Return every valid icon for the requested URL.

        Falls back to scanning the second-level domain when the page itself yields
        nothing.

        Raises:
            - `InputError` if the URL isn't an absolute http(s) URL.
            - `NoIconFoundError` if no candidate validated.
        """
        if not requested_url or not is_absolute_http_url(requested_url):
            raise InputError()

        with self.metrics.resolve_duration.time():
            logger.info(f"Checking {requested_url} for icons")
            icons = await self._scan(requested_url)

            if not icons:
                second_level_url = second_level_domain_url(requested_url)
                if second_level_url and second_level_url != requested_url.rstrip("/"):
                    logger.info(f"Checking {second_level_url} for root icons")
                    icons = await self._scan(second_level_url)

        if not icons:
            self.metrics.not_found.inc()
            raise NoIconFoundError()
        return icons

    async def best_icon(self, requested_url: Optional[str]) -> ValidatedIcon:
        """Return the single best icon for the requested URL.

        Raises:
            - `InputError` if the URL isn't an absolute http(s) URL.
            - `NoIconFoundError` if no icon validated or none has a prioritized type.
        """
        icons = await self.find_icons(requested_url)
        best = IconSelector.pick_best_icon(icons)
        if best is None:
            self.metrics.not_found.inc()
            raise NoIconFoundError()
        return best

    async def fetch_icon(self, requested_url: Optional[str]) -> CacheEntry:
        """Return the best icon for the requested URL, going through the cache when
        caching is enabled. Lookups of the same URL are serialized.

        Raises:
            - `InputError` if the URL isn't an absolute http(s) URL.
            - `NoIconFoundError` if no icon could be resolved.
        """
        if not requested_url or not is_absolute_http_url(requested_url):
            raise InputError()

        if not self.config.caching:
            best = await self.best_icon(requested_url)
            return CacheEntry.from_icon(cache_key(requested_url), best)

        async with self.cache.lock(requested_url):
            cached = await self._cached_icon(requested_url)
            if cached is not None:
                return cached

            best = await self.best_icon(requested_url)
            entry = CacheEntry.from_icon(cache_key(requested_url), best)
            try:
                await self.cache.put(requested_url, entry)
            except CacheWriteError as e:
                logger.error(f"Failed to cache icon for {requested_url}: {e}")
            return entry

    async def close(self) -> None:
        """Release the HTTP session."""
        await self.fetcher.close()

    async def _scan(self, url: str) -> list[ValidatedIcon]:
        candidates = await self.discovery.find_all_icons(url)
        return await self.validator.validate_icons(candidates)

    async def _cached_icon(self, requested_url: str) -> Optional[CacheEntry]:
        try:
            cached = await self.cache.get(requested_url)
        except CacheEntryError as e:
            logger.warning(f"Ignoring unreadable cache entry for {requested_url}: {e}")
            cached = None

        if cached is None:
            logger.info(f"{requested_url} cache miss")
            self.metrics.cache_lookups.labels(result="miss").inc()
        else:
            logger.info(f"{requested_url} cache hit")
            self.metrics.cache_lookups.labels(result="hit").inc()
        return cached
