"""Data models for icon discovery, validation, selection and caching"""

import base64
import codecs
import pathlib
from enum import Enum, unique
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


@unique
class IconType(str, Enum):
    """Where a candidate icon reference came from."""

    SHORTCUT_ICON = "shortcutIcon"
    ICON = "icon"
    APPLE_TOUCH_ICON = "appleTouchIcon"
    APPLE_TOUCH_ICON_PRECOMPOSED = "appleTouchIconPrecomposed"
    MSAPPLICATION_TILE_IMAGE = "msapplicationTileImage"
    TWITTER = "twitter"
    OPENGRAPH = "opengraph"
    ICON_IMAGE = "iconImage"
    ROOT_ICON = "rootIcon"
    SECOND_LEVEL_ROOT_ICON = "secondLevelRootIcon"


class IconConfig(BaseModel):
    """Configuration handed to the icon components at construction time."""

    source_cache: pathlib.Path
    cache_duration: int = 60
    caching: bool = False
    max_connections: int = 100
    connect_timeout_sec: float = 5.0
    request_timeout_sec: float = 5.0
    probe_timeout_sec: float = 8.0

    @classmethod
    def from_settings(cls, icon_settings: Any) -> "IconConfig":
        """Build the configuration from the `icons` section of the settings."""
        return cls(
            source_cache=pathlib.Path(icon_settings.source_cache),
            cache_duration=icon_settings.cache_duration,
            caching=icon_settings.caching,
            max_connections=icon_settings.max_connections,
            connect_timeout_sec=icon_settings.connect_timeout_sec,
            request_timeout_sec=icon_settings.request_timeout_sec,
            probe_timeout_sec=icon_settings.probe_timeout_sec,
        )


class Candidate(BaseModel):
    """An unvalidated icon reference. `url` is None when it could not be derived."""

    model_config = ConfigDict(frozen=True)

    url: str | None
    icon_type: IconType


class FetchResponse(BaseModel):
    """A fetched resource, normalized across HTTP responses and data URIs."""

    ok: bool
    status: int
    final_url: str
    headers: list[tuple[str, str]] = Field(default_factory=list)
    mime_type: str = ""
    encoding: str | None = None
    content: bytes = b""

    @property
    def length(self) -> int:
        """Return the number of bytes held."""
        return len(self.content)

    def text(self) -> str:
        """Decode the body, falling back to UTF-8 when no charset, or an unknown one,
        was sent.
        """
        encoding = self.encoding or "utf-8"
        try:
            codecs.lookup(encoding)
        except LookupError:
            encoding = "utf-8"
        return self.content.decode(encoding, errors="replace")


class ValidatedIcon(BaseModel):
    """A candidate confirmed reachable and image typed, with its fetched bytes."""

    url: str
    icon_type: IconType
    mime_type: str
    length: int
    content: bytes
    headers: list[tuple[str, str]] = Field(default_factory=list)


class CacheEntry(BaseModel):
    """An icon as stored in, or read back from, the icon cache."""

    key: str
    mime_type: str
    length: int
    content: bytes
    source_url: str
    headers: list[tuple[str, str]] = Field(default_factory=list)
    is_cached: bool = False

    @classmethod
    def from_icon(cls, key: str, icon: ValidatedIcon) -> "CacheEntry":
        """Create an entry for a freshly validated icon."""
        return cls(
            key=key,
            mime_type=icon.mime_type,
            length=icon.length,
            content=icon.content,
            source_url=icon.url,
            headers=icon.headers,
        )


class StoredIcon(BaseModel):
    """On-disk layout of a cache file: `{headers, type, length, base64, sourceUrl}`."""

    model_config = ConfigDict(populate_by_name=True)

    headers: list[tuple[str, str]]
    type: str
    length: int
    base64: str
    source_url: str = Field(alias="sourceUrl")

    @classmethod
    def from_entry(cls, entry: CacheEntry) -> "StoredIcon":
        """Serialize a cache entry, base64-encoding its bytes."""
        return cls(
            headers=entry.headers,
            type=entry.mime_type,
            length=entry.length,
            base64=base64.b64encode(entry.content).decode("ascii"),
            source_url=entry.source_url,
        )

    def to_entry(self, key: str) -> CacheEntry:
        """Deserialize into a cache entry, decoding the stored bytes.

        Raises:
            binascii.Error if the stored payload isn't valid base64.
        """
        return CacheEntry(
            key=key,
            mime_type=self.type,
            length=self.length,
            content=base64.b64decode(self.base64, validate=True),
            source_url=self.source_url,
            headers=self.headers,
            is_cached=True,
        )
