"""TranscriptCleaner for turning timestamped caption dumps into readable prose.

The cleaner runs a fixed pipeline over the whole transcript in memory:

1. Normalize line endings to ``\\n``
2. Re-split single-line transcripts on timestamp markers
3. Extract caption text, dropping metadata, URLs and filler tokens
4. Join and repair whitespace, punctuation and sentence boundaries
5. Compute word count and estimated spoken duration

The filler deny-list and the timestamp marker pattern are corpus-specific
heuristics, so both can be overridden per instance or through the environment.
"""
import enum
import logging
import math
import os
import re
from typing import Iterable, List, Optional

from models.transcript import CleanedTranscript


logger = logging.getLogger(__name__)

DEFAULT_FILLER_TOKENS = ("No text", "Lift", "clush", "A", "[Music]")
DEFAULT_TIMESTAMP_PATTERN = r"\d{2}:\d{2}:\d{2}\.\d{3}"
DEFAULT_WORDS_PER_MINUTE = 150

# Separator for TRANSCRIPT_FILLER_TOKENS; tokens themselves may contain spaces
FILLER_TOKENS_SEPARATOR = "|"

RE_WHITESPACE = re.compile(r"\s+")
RE_SPACE_BEFORE_PUNCTUATION = re.compile(r"\s+([.,!?])")
# Known limitation: also fires on proper nouns and acronyms ("the NASA team")
RE_SENTENCE_BOUNDARY = re.compile(r"([a-z])\s+([A-Z])")


class LineKind(str, enum.Enum):
    """Classification of a single transcript line."""
    COMMENT = "comment"
    URL = "url"
    BLANK = "blank"
    CAPTION = "caption"
    UNRECOGNIZED = "unrecognized"


class TranscriptCleaner:
    """Deterministic, stateless cleaner for raw speech-to-text transcripts.

    Instances only hold configuration, so a single instance can be shared
    across concurrent requests.
    """

    def __init__(
        self,
        filler_tokens: Optional[Iterable[str]] = None,
        timestamp_pattern: Optional[str] = None,
        words_per_minute: Optional[int] = None
    ):
        """Initialize the cleaner from arguments, the environment or defaults.

        Args:
            filler_tokens: Caption texts to drop when a caption equals one exactly
            timestamp_pattern: Regex matching a single timestamp marker
            words_per_minute: Speaking rate used for the duration estimate

        Raises:
            ValueError: If the pattern does not compile or the rate is not positive
        """
        if filler_tokens is None:
            env_tokens = os.getenv("TRANSCRIPT_FILLER_TOKENS")
            if env_tokens:
                filler_tokens = [
                    token.strip()
                    for token in env_tokens.split(FILLER_TOKENS_SEPARATOR)
                    if token.strip()
                ]
            else:
                filler_tokens = DEFAULT_FILLER_TOKENS
        self.filler_tokens = frozenset(filler_tokens)

        self.timestamp_pattern = (
            timestamp_pattern
            or os.getenv("TRANSCRIPT_TIMESTAMP_PATTERN")
            or DEFAULT_TIMESTAMP_PATTERN
        )
        try:
            self._marker_re = re.compile(self.timestamp_pattern)
            self._caption_re = re.compile(
                rf"^\s*(?:{self.timestamp_pattern})\s*(?P<caption>.+)$"
            )
        except re.error as e:
            raise ValueError(
                f"Invalid timestamp pattern {self.timestamp_pattern!r}: {e}"
            ) from e
        if self._marker_re.match(""):
            raise ValueError(
                f"Timestamp pattern {self.timestamp_pattern!r} matches the empty string"
            )

        if words_per_minute is None:
            raw_rate = os.getenv("TRANSCRIPT_WORDS_PER_MINUTE")
            try:
                words_per_minute = int(raw_rate) if raw_rate else DEFAULT_WORDS_PER_MINUTE
            except ValueError as e:
                raise ValueError(
                    f"TRANSCRIPT_WORDS_PER_MINUTE must be an integer, got {raw_rate!r}"
                ) from e
        if words_per_minute <= 0:
            raise ValueError(
                f"words_per_minute must be positive, got {words_per_minute}"
            )
        self.words_per_minute = words_per_minute

        logger.info(
            f"TranscriptCleaner initialized: filler_tokens={len(self.filler_tokens)}, "
            f"timestamp_pattern={self.timestamp_pattern}, "
            f"words_per_minute={self.words_per_minute}"
        )

    def clean(self, raw: str) -> CleanedTranscript:
        """Clean a raw transcript and compute its statistics.

        Never raises for string input; an empty or content-free transcript
        yields empty text with a one minute duration.
        """
        normalized = self.normalize_newlines(raw)
        segmented = self.resegment(normalized)
        captions = self.extract_captions(segmented)
        cleaned_text = self.reflow(captions)

        word_count = len(cleaned_text.split())

        logger.debug(
            f"Transcript cleaned: original_length={len(raw)}, "
            f"captions={len(captions)}, word_count={word_count}"
        )

        return CleanedTranscript(
            cleaned_text=cleaned_text,
            word_count=word_count,
            estimated_duration=self.estimate_duration(word_count),
            original_length=len(raw)
        )

    @staticmethod
    def normalize_newlines(text: str) -> str:
        """Convert \\r\\n and \\r line endings to \\n."""
        return text.replace("\r\n", "\n").replace("\r", "\n")

    def resegment(self, text: str) -> str:
        """Insert a newline before every marker of a single-line transcript.

        Transcripts that already contain a newline are returned untouched,
        even if some markers are embedded mid-line.
        """
        if "\n" in text:
            return text
        return self._marker_re.sub(lambda m: "\n" + m.group(0), text)

    def classify_line(self, line: str) -> LineKind:
        """Classify a line by its prefix; only CAPTION lines carry text."""
        if line.startswith("#"):
            return LineKind.COMMENT
        if line.startswith("http"):
            return LineKind.URL
        if not line.strip():
            return LineKind.BLANK
        if self._caption_re.match(line):
            return LineKind.CAPTION
        return LineKind.UNRECOGNIZED

    def extract_captions(self, text: str) -> List[str]:
        """Return caption texts in order, without markers or filler tokens."""
        captions = []
        for line in text.split("\n"):
            if self.classify_line(line) is not LineKind.CAPTION:
                continue

            caption = self._caption_re.match(line).group("caption").strip()
            if caption in self.filler_tokens:
                continue
            if caption:
                captions.append(caption)
        return captions

    def reflow(self, captions: List[str]) -> str:
        """Join captions and repair whitespace, punctuation and sentence breaks.

        Markers left inside caption text (a multi-line transcript with
        flattened runs) are blanked out, and the repair is repeated until the
        text is marker free. Without such markers the repair runs once.
        """
        text = self._repair(self._blank_markers(" ".join(captions)))
        while self._marker_re.search(text):
            repaired = self._repair(self._blank_markers(text))
            if repaired == text:
                break
            text = repaired
        return text

    def _blank_markers(self, text: str) -> str:
        return self._marker_re.sub(" ", text)

    @staticmethod
    def _repair(text: str) -> str:
        text = RE_WHITESPACE.sub(" ", text)
        text = RE_SPACE_BEFORE_PUNCTUATION.sub(r"\1", text)
        text = RE_SENTENCE_BOUNDARY.sub(r"\1. \2", text)
        return text.strip()

    def estimate_duration(self, word_count: int) -> str:
        """Format the spoken duration, rounding half up and never below a minute."""
        minutes = max(1, math.floor(word_count / self.words_per_minute + 0.5))
        return f"{minutes} minute{'s' if minutes > 1 else ''}"
