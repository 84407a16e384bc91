"""URL manipulation utilities for icon discovery"""

from urllib.parse import urljoin, urlparse
from typing import Optional

from iconfetch.icons.constants import ROOT_ICON_PATH, SECOND_LEVEL_DOMAIN_PATTERN


def root_icon_url(url: Optional[str]) -> Optional[str]:
    """Return `{scheme}://{hostname}/favicon.ico` for an absolute URL, None otherwise."""
    if not url:
        return None
    try:
        parsed_url = urlparse(url)
        hostname = parsed_url.hostname
    except ValueError:
        return None
    if not parsed_url.scheme or not hostname:
        return None
    return f"{parsed_url.scheme}://{hostname}{ROOT_ICON_PATH}"


def second_level_domain_url(url: Optional[str]) -> Optional[str]:
    """Return `{scheme}://{last two hostname labels}`, e.g. "http://example.com" for
    "http://a.b.example.com".

    None when the hostname has no label in front of its last two, or the URL isn't
    absolute.
    """
    if not url:
        return None
    try:
        parsed_url = urlparse(url)
        hostname = parsed_url.hostname
    except ValueError:
        return None
    if not parsed_url.scheme or not hostname:
        return None

    match = SECOND_LEVEL_DOMAIN_PATTERN.search(hostname)
    if match is None:
        return None
    return f"{parsed_url.scheme}://{match.group(1)}"


def resolve_relative_url(base: Optional[str], maybe_relative: Optional[str]) -> Optional[str]:
    """Resolve a possibly relative URL against `base`; unchanged if either is empty."""
    if not base or not maybe_relative:
        return maybe_relative
    return urljoin(base, maybe_relative)


def is_absolute_http_url(url: Optional[str]) -> bool:
    """Check if URL is an absolute http(s) URL with a host."""
    if not url:
        return False
    try:
        parsed_url = urlparse(url)
        hostname = parsed_url.hostname
    except ValueError:
        return False
    return parsed_url.scheme in ("http", "https") and bool(hostname)
