"""Constants for icon discovery, validation and selection"""

import re

from iconfetch.icons.models import IconType

# Metadata selector rules: icon type -> (CSS selector, attribute holding the URL).
# `i` makes the attribute value comparison case-insensitive ("SHORTCUT ICON").
SELECTOR_RULES: dict[IconType, tuple[str, str]] = {
    IconType.SHORTCUT_ICON: ('link[rel="shortcut icon" i]', "href"),
    IconType.ICON: ('link[rel="icon" i]', "href"),
    IconType.APPLE_TOUCH_ICON: ('link[rel="apple-touch-icon" i]', "href"),
    IconType.APPLE_TOUCH_ICON_PRECOMPOSED: ('link[rel="apple-touch-icon-precomposed" i]', "href"),
    IconType.MSAPPLICATION_TILE_IMAGE: ('meta[name="msapplication-TileImage" i]', "content"),
    IconType.TWITTER: ('meta[name="twitter:image" i]', "content"),
    IconType.OPENGRAPH: ('meta[property="og:image" i]', "content"),
    IconType.ICON_IMAGE: ('img[src*="Icon"]', "src"),
}

# Best icon first. `icon` is discovered and validated but never selected.
PRIORITY_ORDER: list[IconType] = [
    IconType.SHORTCUT_ICON,
    IconType.ROOT_ICON,
    IconType.APPLE_TOUCH_ICON,
    IconType.APPLE_TOUCH_ICON_PRECOMPOSED,
    IconType.OPENGRAPH,
    IconType.TWITTER,
    IconType.MSAPPLICATION_TILE_IMAGE,
    IconType.SECOND_LEVEL_ROOT_ICON,
    IconType.ICON_IMAGE,
]

ROOT_ICON_PATH: str = "/favicon.ico"

# Last two dot-separated labels of a hostname. Not public-suffix aware:
# "www.example.co.uk" yields "co.uk".
SECOND_LEVEL_DOMAIN_PATTERN: re.Pattern = re.compile(r"\.([^.\s]+?\.[^.\s]+?)$", re.IGNORECASE)

DATA_URI_PATTERN: re.Pattern = re.compile(
    r"^data:(image/(?:png|jpeg));base64,(.*)$", re.IGNORECASE | re.DOTALL
)

IMAGE_MIME_TYPE_PATTERN: re.Pattern = re.compile(r"^image/", re.IGNORECASE)

HTML_MIME_TYPE_PATTERN: re.Pattern = re.compile(r"^text/html", re.IGNORECASE)

# URL schemes found in markup that can never point at an icon.
SKIPPED_URL_SCHEMES: tuple[str, ...] = ("javascript:", "mailto:")

PARSER: str = "html.parser"

# Status reported for any candidate that could not be reached at all.
UNREACHABLE_STATUS: int = 404

# HTTP request configuration
REQUEST_HEADERS: dict[str, str] = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10.15; rv:128.0) Gecko/20100101 Firefox/128.0"
    ),
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8"
    ),
    "Accept-Language": "en-GB,en-US;q=0.9,en;q=0.8",
    "DNT": "1",
    "Upgrade-Insecure-Requests": "1",
}
