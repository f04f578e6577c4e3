"""
Transcript cleaning router.

This router provides the public surface of the service:
- POST /        clean a raw transcript
- OPTIONS /     CORS preflight
- GET /health   liveness probe

Dispatch is method first, path second: POST cleans and OPTIONS answers the
preflight on any path, so every other method outside GET /health is a 405
rather than a 404.
"""

import json
import logging
from functools import lru_cache
from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from models.transcript import TranscriptCleanRequest, CleanedTranscript, HealthResponse
from services.transcript_cleaner import TranscriptCleaner

logger = logging.getLogger(__name__)

SERVICE_NAME = "Transcript Cleaner API"
SERVICE_VERSION = "1.0.0"

router = APIRouter(tags=["transcript"])


@lru_cache
def get_cleaner() -> TranscriptCleaner:
    """Return the shared TranscriptCleaner, built on first use."""
    return TranscriptCleaner()


async def parse_clean_request(request: Request) -> TranscriptCleanRequest:
    """
    Parse the request body as JSON whatever its Content-Type.

    Browsers posting cross-origin often send text/plain to skip the
    preflight, so the body is decoded directly instead of relying on
    FastAPI's application/json body binding.

    Raises:
        RequestValidationError: If the body is not JSON or has the wrong shape
    """
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise RequestValidationError([{
            "type": "json_invalid",
            "loc": ("body",),
            "msg": f"JSON decode error: {type(e).__name__}",
            "input": {},
        }]) from e

    try:
        return TranscriptCleanRequest.model_validate(payload)
    except ValidationError as e:
        raise RequestValidationError(e.errors()) from e


@router.post("/", response_model=CleanedTranscript)
async def clean_transcript(
    body: TranscriptCleanRequest = Depends(parse_clean_request),
    cleaner: TranscriptCleaner = Depends(get_cleaner)
):
    """
    Clean a raw transcript and return the text with its statistics.

    Args:
        body: TranscriptCleanRequest with transcript and optional video_url
        cleaner: Shared TranscriptCleaner instance

    Returns:
        CleanedTranscript with cleaned_text, word_count, estimated_duration
        and original_length

    Raises:
        HTTPException: 400 when the transcript is missing or empty
    """
    if not body.transcript:
        logger.warning("Transcript rejected: missing or empty transcript field")
        raise HTTPException(status_code=400, detail="Transcript is required")

    logger.info(
        f"Transcript cleaning started: length={len(body.transcript)} chars, "
        f"video_url={body.video_url or 'None'}"
    )

    result = cleaner.clean(body.transcript)

    logger.info(
        f"Transcript cleaning complete: cleaned_length={len(result.cleaned_text)}, "
        f"word_count={result.word_count}, "
        f"estimated_duration={result.estimated_duration}"
    )
    return result


@router.options("/")
async def preflight():
    """Answer CORS preflight requests for POST /."""
    return Response(
        status_code=200,
        headers={
            "Access-Control-Allow-Methods": "POST, OPTIONS",
            "Access-Control-Allow-Headers": "Content-Type",
        }
    )


@router.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(service=SERVICE_NAME, version=SERVICE_VERSION)


# Catch-all routes; registered last so the routes above win on an exact match

@router.post("/{path:path}", response_model=CleanedTranscript, include_in_schema=False)
async def clean_transcript_any_path(
    path: str,
    body: TranscriptCleanRequest = Depends(parse_clean_request),
    cleaner: TranscriptCleaner = Depends(get_cleaner)
):
    return await clean_transcript(body=body, cleaner=cleaner)


@router.options("/{path:path}", include_in_schema=False)
async def preflight_any_path(path: str):
    return await preflight()
