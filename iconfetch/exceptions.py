"""Iconfetch specific exceptions."""


class IconLookupError(Exception):
    """Base error for a failed icon lookup.

    `external_message` is safe to show to API clients; everything else stays in
    the server logs.
    """

    default_message: str = "No icon URL found"

    def __init__(self, external_message: str | None = None) -> None:
        self.external_message = external_message or self.default_message
        super().__init__(self.external_message)


class InputError(IconLookupError):
    """Raised when the requested URL is missing or not an absolute http(s) URL."""

    default_message = "Please supply a URI encoded url as a URL query parameter"


class NoIconFoundError(IconLookupError):
    """Raised when discovery and validation produced no usable icon."""


class CacheEntryError(ValueError):
    """Exception raised for cache entries that can't be deserialized."""

    pass


class CacheWriteError(Exception):
    """Exception raised when an icon can't be written to the cache."""

    pass
