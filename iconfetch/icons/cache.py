"""Content-addressed on-disk icon cache keyed by the requested URL"""

import asyncio
import binascii
import hashlib
import logging
import os
import pathlib
import tempfile
import weakref
from typing import Optional

from pydantic import ValidationError

from iconfetch.exceptions import CacheEntryError, CacheWriteError
from iconfetch.icons.models import CacheEntry, IconConfig, StoredIcon

logger = logging.getLogger(__name__)


def cache_key(requested_url: str) -> str:
    """Return the MD5 hex digest of the requested URL string."""
    return hashlib.md5(requested_url.encode(), usedforsecurity=False).hexdigest()


class IconCache:
    """One JSON file per requested URL under the cache root.

    The key is derived from the URL the caller asked about, not from the icon URL:
    two pages sharing an icon are cached separately. Entries never expire.
    """

    def __init__(self, config: IconConfig) -> None:
        self.root: pathlib.Path = config.source_cache
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def path_for(self, key: str) -> pathlib.Path:
        """Return the file path of a cache key."""
        return self.root / f"{key}.json"

    def lock(self, requested_url: str) -> asyncio.Lock:
        """Return the lock serializing lookups of one requested URL.

        Callers hold it across get-resolve-put so a URL is resolved at most once at a
        time.
        """
        key = cache_key(requested_url)
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    async def get(self, requested_url: str) -> Optional[CacheEntry]:
        """Return the cached entry for a requested URL, or None on a miss.

        Raises:
            - `CacheEntryError` if the stored file can't be deserialized.
        """
        key = cache_key(requested_url)
        path = self.path_for(key)
        try:
            raw = await asyncio.to_thread(path.read_bytes)
        except FileNotFoundError:
            return None
        except OSError as e:
            raise CacheEntryError(f"Unable to read cache file {path}: {e}") from e

        try:
            entry = StoredIcon.model_validate_json(raw).to_entry(key)
        except (ValidationError, binascii.Error, ValueError) as e:
            raise CacheEntryError(f"Corrupt cache file {path}: {e}") from e

        logger.info(f"Read icon {path} for {entry.source_url}")
        return entry

    async def put(self, requested_url: str, entry: CacheEntry) -> pathlib.Path:
        """Store an entry for a requested URL and return the written path.

        The file is replaced atomically, so readers see either the old or the new entry.

        Raises:
            - `CacheWriteError` if the file can't be written.
        """
        path = self.path_for(cache_key(requested_url))
        data = StoredIcon.from_entry(entry).model_dump_json(by_alias=True)
        try:
            await asyncio.to_thread(self._write, path, data)
        except OSError as e:
            raise CacheWriteError(f"Unable to write cache file {path}: {e}") from e

        logger.info(f"Wrote icon {path} for {entry.source_url}")
        return path

    async def delete(self, requested_url: str) -> bool:
        """Remove the entry of a requested URL. Returns False if there was none."""
        path = self.path_for(cache_key(requested_url))
        try:
            await asyncio.to_thread(path.unlink)
        except FileNotFoundError:
            return False
        logger.info(f"Removed icon {path}")
        return True

    def _write(self, path: pathlib.Path, data: str) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.root, prefix=".", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp_file:
                tmp_file.write(data)
            os.replace(tmp_name, path)
        except BaseException:
            pathlib.Path(tmp_name).unlink(missing_ok=True)
            raise
