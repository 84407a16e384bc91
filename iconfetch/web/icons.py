"""Icon API"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from starlette.responses import Response

from iconfetch.icons import get_resolver
from iconfetch.icons.resolver import IconResolver
from iconfetch.web.models import IconResponse

logger = logging.getLogger(__name__)
router = APIRouter()

URL_CHARACTER_MAX: int = 4096


@router.get(
    "/",
    tags=["icons"],
    summary="All valid icons of a page",
    response_model=list[IconResponse],
)
async def icons(
    url: Annotated[str | None, Query(max_length=URL_CHARACTER_MAX)] = None,
    resolver: IconResolver = Depends(get_resolver),
) -> list[IconResponse]:
    """Return every reachable, image typed icon referenced by the page at `url`.

    **Args:**

    - `url`: The URI encoded absolute URL of the page.

    Responds with 404 and a short reason when no icon is found.
    """
    return [IconResponse.from_icon(icon) for icon in await resolver.find_icons(url)]


@router.get(
    "/best",
    tags=["icons"],
    summary="The best icon of a page",
    response_model=IconResponse,
)
async def best(
    url: Annotated[str | None, Query(max_length=URL_CHARACTER_MAX)] = None,
    resolver: IconResolver = Depends(get_resolver),
) -> IconResponse:
    """Return the highest priority icon of the page at `url`."""
    return IconResponse.from_icon(await resolver.best_icon(url))


@router.get(
    "/icon",
    tags=["icons"],
    summary="The best icon of a page, served as an image",
    response_class=Response,
)
async def icon(
    url: Annotated[str | None, Query(max_length=URL_CHARACTER_MAX)] = None,
    resolver: IconResolver = Depends(get_resolver),
) -> Response:
    """Return the bytes of the best icon of the page at `url`.

    The icon is served from the on-disk cache when caching is enabled; the
    `x-icon-from-cache` header tells whether it was.
    """
    entry = await resolver.fetch_icon(url)
    return Response(
        content=entry.content,
        status_code=200,
        media_type=entry.mime_type,
        headers={
            "Content-Disposition": "inline",
            "Content-Length": str(len(entry.content)),
            "Cache-Control": f"max-age={resolver.config.cache_duration}",
            "Access-Control-Allow-Origin": "*",
            "x-icon-from-cache": str(entry.is_cached).lower(),
        },
    )
