"""Entry point for the content distribution service."""

import sys
import time
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.responses import JSONResponse

from common.constants import (
    CORS_ALLOWED_HEADERS,
    CORS_ALLOWED_METHODS,
    CORS_EXPOSED_HEADERS,
    DOCS_ALIAS_PATHS,
    SERVICE_NAME,
    SERVICE_TITLE,
    SERVICE_VERSION,
)
from common.logging_config import get_logger, setup_logging
from distributor.archive import unpack_archive
from distributor.cache import ContentCache
from distributor.config import Settings, load_settings
from distributor.exceptions import AuthError, ContentServiceError
from distributor.routes import content_router
from distributor.schemas.common import HealthResponse
from distributor.utils import generate_uuid, get_current_timestamp

logger = get_logger("distributor")


def _error_body(message: str) -> dict:
    return {"success": False, "error": message}


async def log_requests(request: Request, call_next):
    """
    Middleware to log all HTTP requests and responses.
    """
    request_id = generate_uuid()
    request.state.request_id = request_id

    start_time = time.time()

    logger.info(f"Request started: {request.method} {request.url.path} [request_id={request_id}]")

    response = await call_next(request)

    duration = time.time() - start_time
    user_id = getattr(request.state, 'user_id', None)

    logger.info(
        f"Request completed: {request.method} {request.url.path} "
        f"status={response.status_code} duration={duration:.3f}s "
        f"[request_id={request_id}] [user_id={'anonymous' if user_id is None else user_id}]"
    )

    response.headers["X-Request-ID"] = request_id

    return response


async def auth_error_handler(request: Request, exc: AuthError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Authentication rejected: {exc.message} [request_id={request_id}] path={request.url.path}"
    )
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message))


async def content_service_error_handler(request: Request, exc: ContentServiceError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    if exc.status_code >= 500:
        logger.error(
            f"Content service error: {exc.message} [request_id={request_id}] path={request.url.path}",
            exc_info=True
        )
    else:
        logger.warning(
            f"Content request rejected: {exc.message} [request_id={request_id}] path={request.url.path}"
        )
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message))


async def unhandled_error_handler(request: Request, exc: Exception):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"Unhandled error: {exc} [request_id={request_id}] path={request.url.path}",
        exc_info=True
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(str(exc))
    )


def setup_cors(app: FastAPI, origins: list) -> None:
    """
    Install CORS handling.

    An empty origin list reflects any requesting origin, with credentials.
    """
    if origins:
        origin_options = {"allow_origins": origins}
    else:
        origin_options = {"allow_origin_regex": ".*"}

    app.add_middleware(
        CORSMiddleware,
        allow_credentials=True,
        allow_methods=CORS_ALLOWED_METHODS,
        allow_headers=CORS_ALLOWED_HEADERS,
        expose_headers=CORS_EXPOSED_HEADERS,
        **origin_options,
    )


def create_app(settings: Optional[Settings] = None, content_cache: Optional[ContentCache] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Service settings (defaults to load_settings())
        content_cache: Cache serving the listing; an unloaded cache over
            settings.content_dir is created when omitted

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = load_settings()
    if content_cache is None:
        content_cache = ContentCache(settings.content_dir)

    app = FastAPI(
        title=SERVICE_TITLE,
        description="Authenticated listing and delivery of packaged media content",
        version=SERVICE_VERSION,
    )
    app.state.settings = settings
    app.state.content_cache = content_cache

    app.middleware("http")(log_requests)
    setup_cors(app, settings.cors_origins)

    app.add_exception_handler(AuthError, auth_error_handler)
    app.add_exception_handler(ContentServiceError, content_service_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(content_router)

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check():
        """
        Liveness probe. Requires no authentication.
        """
        return HealthResponse(status="OK", service=SERVICE_NAME, timestamp=get_current_timestamp())

    async def swagger_ui():
        return get_swagger_ui_html(openapi_url=app.openapi_url, title=f"{SERVICE_TITLE} - Swagger UI")

    for docs_path in DOCS_ALIAS_PATHS:
        app.add_api_route(docs_path, swagger_ui, methods=["GET"], include_in_schema=False)

    return app


def prepare_content(settings: Settings) -> ContentCache:
    """
    Unpack the archive into the content root and index it.

    Args:
        settings: Service settings

    Returns:
        Loaded ContentCache

    Raises:
        ContentServiceError: If the archive is missing or corrupt
        OSError: If unpacking or indexing fails
    """
    logger.info("Extracting content archive...")
    unpack_archive(settings.archive_path, settings.content_dir)

    content_cache = ContentCache(settings.content_dir)
    content_cache.load_cache()
    return content_cache


def main(log_level: Optional[str] = None) -> None:
    """
    Boot the service: unpack, index, then listen.

    Args:
        log_level: Overrides the LOG_LEVEL environment variable
    """
    setup_logging("distributor", log_level=log_level)
    settings = load_settings()

    logger.info(f"Starting {SERVICE_TITLE}...")
    try:
        content_cache = prepare_content(settings)
    except (ContentServiceError, OSError) as e:
        logger.error(f"Failed to start server: {e}", exc_info=True)
        sys.exit(1)

    app = create_app(settings, content_cache)

    logger.info(f"{SERVICE_NAME} listening on {settings.host}:{settings.port}")
    logger.info(f"Content API available at: http://localhost:{settings.port}/api/content")
    logger.info(f"Health check available at: http://localhost:{settings.port}/health")
    logger.info(f"API Documentation available at: http://localhost:{settings.port}/docs")

    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
