"""Content listing and file delivery API routes."""

from pathlib import Path

from fastapi import APIRouter, Depends, Request, Response, Security
from fastapi.concurrency import run_in_threadpool
from fastapi.security import APIKeyCookie, HTTPBearer

from common.constants import TOKEN_COOKIE_NAME
from common.logging_config import get_logger
from distributor.auth import get_current_user
from distributor.cache import ContentCache
from distributor.exceptions import ContentServiceError
from distributor.file_server import serve_file
from distributor.schemas.common import ErrorResponse
from distributor.schemas.content import ContentListingResponse
from distributor.types import Credential

logger = get_logger(__name__)

# Declared for the OpenAPI document; the gate itself is get_current_user.
bearer_scheme = HTTPBearer(auto_error=False)
cookie_scheme = APIKeyCookie(name=TOKEN_COOKIE_NAME, auto_error=False)

router = APIRouter(
    prefix="/api/content",
    tags=["Content"],
    dependencies=[Security(bearer_scheme), Security(cookie_scheme)],
)

AUTH_RESPONSES = {
    401: {"model": ErrorResponse, "description": "Missing, expired or invalid token"},
    403: {"model": ErrorResponse, "description": "Account inactive or access denied"},
    500: {"model": ErrorResponse, "description": "Internal server error"},
}


def get_content_cache(request: Request) -> ContentCache:
    """
    FastAPI dependency returning the application's content cache.
    """
    return request.app.state.content_cache


def get_content_root(request: Request) -> Path:
    """
    FastAPI dependency returning the directory files are served from.
    """
    return request.app.state.settings.content_dir


@router.get("", response_model=ContentListingResponse, responses=AUTH_RESPONSES)
async def get_content_listing(
    current_user: Credential = Depends(get_current_user),
    content_cache: ContentCache = Depends(get_content_cache),
):
    """
    Get the content listing.

    Returns the snapshot built at startup; the content root is not re-read.

    Returns:
        - success: always true
        - content: every file and directory, directories before their children
        - totalFiles: number of file entries in content

    Raises:
        - 401: Missing, expired or invalid token
        - 403: Account not active
        - 500: Listing not loaded or internal error
    """
    snapshot = content_cache.get_cache()
    return ContentListingResponse.from_snapshot(snapshot)


@router.get(
    "/file/{file_path:path}",
    response_class=Response,
    responses={
        200: {
            "description": "File content",
            "content": {"application/octet-stream": {"schema": {"type": "string", "format": "binary"}}},
        },
        400: {"model": ErrorResponse, "description": "Path is a directory"},
        404: {"model": ErrorResponse, "description": "File not found"},
        **AUTH_RESPONSES,
    },
)
async def get_content_file(
    file_path: str,
    current_user: Credential = Depends(get_current_user),
    content_root=Depends(get_content_root),
):
    """
    Serve one content file.

    Parameters:
        - file_path: Path relative to the content root (e.g., "images/logo.png")

    Returns:
        - Raw file bytes with a Content-Type derived from the extension

    Raises:
        - 400: Path is a directory
        - 401: Missing, expired or invalid token
        - 403: Account not active, or path outside the content root
        - 404: File not found
        - 500: Internal server error
    """
    try:
        data, media_type = await run_in_threadpool(serve_file, content_root, file_path)
    except OSError as e:
        logger.error(f"Failed to read content file {file_path}: {e}", exc_info=True)
        raise ContentServiceError(str(e)) from e

    logger.debug(f"Serving {file_path} ({len(data)} bytes, {media_type}) to user_id={current_user.id}")
    return Response(content=data, headers={"Content-Type": media_type})
