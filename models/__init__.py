"""Data models for the transcript cleaner service."""
from .transcript import (
    TranscriptCleanRequest,
    CleanedTranscript,
    HealthResponse,
    ErrorResponse,
)

__all__ = [
    # Request models
    "TranscriptCleanRequest",
    # Response models
    "CleanedTranscript",
    "HealthResponse",
    "ErrorResponse",
]
