"""Initialize the icon resolver"""

import logging

from iconfetch.configs import settings
from iconfetch.icons.models import IconConfig
from iconfetch.icons.resolver import IconResolver
from iconfetch.metrics import get_metrics

logger = logging.getLogger(__name__)

resolver: IconResolver | None = None


def init_resolver() -> None:
    """Initialize the icon resolver

    This should only be called once at the startup of application.
    """
    global resolver

    config = IconConfig.from_settings(settings.icons)
    resolver = IconResolver(config=config, metrics=get_metrics())
    logger.info(
        "Icon resolver initialization completed",
        extra={"caching": config.caching, "source_cache": str(config.source_cache)},
    )


async def shutdown_resolver() -> None:
    """Close the icon resolver and its HTTP session."""
    global resolver

    if resolver is not None:
        await resolver.close()
        resolver = None


def get_resolver() -> IconResolver:
    """Return the icon resolver"""
    if resolver is None:
        raise ValueError("Icon resolver has not been initialized.")
    return resolver
