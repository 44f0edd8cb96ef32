"""Data models for Transcribeasy.

All times are integer centiseconds (hundredths of a second), the unit the
recognizer reports in.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .exceptions import ConfigurationError, InvalidFormatError


@dataclass(frozen=True)
class RawSegment:
    """A single timed fragment of recognized text."""
    start: int
    end: int
    text: str


@dataclass(frozen=True)
class Chunk:
    """One on-screen subtitle entry, built from one or more raw segments."""
    start: int
    end: int
    text: str

    @classmethod
    def from_segment(cls, segment: RawSegment) -> "Chunk":
        return cls(start=segment.start, end=segment.end, text=segment.text)

    def extended_with(self, segment: RawSegment) -> "Chunk":
        """Returns the chunk that would result from absorbing `segment`."""
        text = f"{self.text} {segment.text}" if self.text else segment.text
        return Chunk(start=self.start, end=segment.end, text=text)


class OutputFormat(Enum):
    SRT = "srt"
    TXT = "txt"
    BOTH = "both"

    @classmethod
    def parse(cls, value) -> "OutputFormat":
        """
        Resolves a user supplied format name. Matching is exact.

        Raises:
            InvalidFormatError: If `value` is not one of "srt", "txt" or "both".
        """
        accepted = [member.value for member in cls]
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for member in cls:
                if member.value == value:
                    return member
        raise InvalidFormatError(value, accepted)

    @property
    def writes_subtitle(self) -> bool:
        return self in (OutputFormat.SRT, OutputFormat.BOTH)

    @property
    def writes_transcript(self) -> bool:
        return self in (OutputFormat.TXT, OutputFormat.BOTH)


@dataclass(frozen=True)
class OutputRequest:
    """What to write and how to merge. A limit of 0 means unlimited."""
    write_subtitle: bool
    write_transcript: bool
    max_segment_duration: int = 0
    max_chars_per_chunk: int = 0

    @classmethod
    def from_parameters(
        cls,
        output_format,
        max_segment_length: int = 0,
        max_characters_per_segment: int = 0
    ) -> "OutputRequest":
        """
        Builds a request from invocation parameters.

        Args:
            output_format: "srt", "txt", "both" or an OutputFormat member.
            max_segment_length: Maximum chunk span in seconds (0 disables).
            max_characters_per_segment: Maximum chunk text length (0 disables).

        Raises:
            InvalidFormatError: For an unrecognized output format.
            ConfigurationError: For negative or non-integer limits.
        """
        fmt = OutputFormat.parse(output_format)
        seconds = _non_negative_int("max_segment_length", max_segment_length)
        chars = _non_negative_int("max_characters_per_segment", max_characters_per_segment)
        return cls(
            write_subtitle=fmt.writes_subtitle,
            write_transcript=fmt.writes_transcript,
            max_segment_duration=seconds * 100,
            max_chars_per_chunk=chars,
        )


def _non_negative_int(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"'{name}' must be a non-negative integer, got {value!r}.")
    if value < 0:
        raise ConfigurationError(f"'{name}' must be a non-negative integer, got {value}.")
    return value


@dataclass
class TranscriptionResult:
    """Holds the structured output from the ASR process."""
    language: Optional[str]
    segments: List[RawSegment] = field(default_factory=list)
    source_path: Optional[str] = None
