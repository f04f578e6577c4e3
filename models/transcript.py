"""
Transcript Cleaning Request/Response Models

This module defines the Pydantic models for the transcript cleaning API.
These models handle validation and serialization for POST / and GET /health.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class TranscriptCleanRequest(BaseModel):
    """
    Request body for the transcript cleaning endpoint.

    The transcript is optional at the model level so that a missing field
    reaches the router and is answered with the API's own 400 error body.

    Attributes:
        transcript: Raw caption dump to clean
        video_url: Source video, accepted for compatibility but not used
    """
    transcript: Optional[str] = Field(
        default=None,
        description="Raw transcript to clean"
    )
    video_url: Optional[str] = Field(
        default=None,
        description="URL of the video the transcript belongs to"
    )


class CleanedTranscript(BaseModel):
    """
    Result of cleaning a transcript.

    Attributes:
        cleaned_text: Reflowed text without timestamps or filler tokens
        word_count: Number of whitespace-delimited tokens in cleaned_text
        estimated_duration: Spoken duration, e.g. "1 minute" or "3 minutes"
        original_length: Character count of the untouched input
    """
    model_config = ConfigDict(frozen=True)

    cleaned_text: str = Field(
        ...,
        description="Cleaned, human-readable transcript text"
    )
    word_count: int = Field(
        ...,
        ge=0,
        description="Number of words in cleaned_text"
    )
    estimated_duration: str = Field(
        ...,
        description="Estimated spoken duration at the configured speaking rate"
    )
    original_length: int = Field(
        ...,
        ge=0,
        description="Character count of the raw transcript"
    )


class HealthResponse(BaseModel):
    """Liveness probe response."""
    status: str = "healthy"
    service: str
    version: str


class ErrorResponse(BaseModel):
    """Error body shared by every non-2xx response."""
    error: str
