"""Shorten and redirect routes implementation."""

from typing import Optional

from fastapi import APIRouter, Query, Request, Response, status

from shortener.common.url_builder import build_short_url, escape_non_ascii
from shortener.exceptions import NotFoundError, StoreError
from ..api.schemas import ShortenResponse, ErrorResponse

router = APIRouter()


@router.get(
    "/shorten",
    response_model=ShortenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing or empty long_url"},
        500: {"model": ErrorResponse, "description": "Store error"},
    },
    summary="Shorten URL",
    description="Return the short URL for long_url, creating it on first use.",
)
async def shorten_url(
    request: Request,
    long_url: Optional[str] = Query(None, description="The URL to shorten"),
):
    """Shorten a URL. Errors are rendered by the app's exception handlers."""
    service = request.app.state.service
    config = request.app.state.config

    # Resolve or create the mapping
    result = await service.shorten(long_url)

    # Build complete short URL
    short_url = build_short_url(
        short_key=result.short_key,
        base_url=config.base_url,
        path_prefix=config.path_prefix,
    )

    return ShortenResponse(short_url=short_url)


@router.get(
    "/{short_key}",
    status_code=status.HTTP_301_MOVED_PERMANENTLY,
    responses={
        301: {"description": "Redirect to the original URL"},
        404: {"model": ErrorResponse, "description": "Short URL not found"},
    },
    summary="Redirect to original URL",
)
async def redirect_to_url(request: Request, short_key: str):
    """Redirect to the original URL."""
    service = request.app.state.service

    # Any lookup failure is reported as not found
    try:
        long_url = await service.resolve(short_key)
    except StoreError as e:
        raise NotFoundError("Short URL not found") from e

    # RedirectResponse would percent-quote the stored URL; only non-ASCII is escaped here
    return Response(
        status_code=status.HTTP_301_MOVED_PERMANENTLY,
        headers={"location": escape_non_ascii(long_url)},
    )
