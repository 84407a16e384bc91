"""App startup point"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse, PlainTextResponse
from prometheus_client import make_asgi_app

from iconfetch import icons
from iconfetch.configs import settings
from iconfetch.configs.app_configs.config_logging import configure_logging
from iconfetch.configs.app_configs.config_sentry import configure_sentry
from iconfetch.exceptions import IconLookupError
from iconfetch.middleware import logging as mw_logging
from iconfetch.web import dockerflow, icons as icons_api

tags_metadata = [
    {
        "name": "icons",
        "description": "Find the icons of a web page and pick the best one.",
    },
]

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Set up various configurations at startup and handle shutdown clean up.
    See lifespan events in fastAPI docs https://fastapi.tiangolo.com/advanced/events/
    """
    # Setup methods run before `yield` and cleanup methods after.
    configure_logging()
    configure_sentry()
    icons.init_resolver()
    yield
    await icons.shutdown_resolver()


app = FastAPI(openapi_tags=tags_metadata, lifespan=lifespan, default_response_class=ORJSONResponse)


@app.exception_handler(IconLookupError)
async def icon_lookup_exception_handler(
    request: Request, exc: IconLookupError
) -> PlainTextResponse:
    """Use HTTP status code: 404 with a short reason for every failed lookup."""
    logger.info(f"HTTP 404: {exc.external_message} for path: {request.url.path}")
    return PlainTextResponse(exc.external_message, status_code=status.HTTP_404_NOT_FOUND)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> ORJSONResponse:
    """Use HTTP status code: 400 for all invalid requests."""
    # `exc.errors()` is intentionally omitted in the log to avoid log excessively
    # large error messages.
    logger.warning(f"HTTP 400: request validation error for path: {request.url.path}")
    return ORJSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({"detail": exc.errors()}),
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET", "OPTIONS", "HEAD"],
)
app.add_middleware(mw_logging.LoggingMiddleware)

app.include_router(dockerflow.router)
app.include_router(icons_api.router)

if settings.metrics.enabled:
    app.mount(settings.metrics.path, make_asgi_app())


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, proxy_headers=True)
