"""Turns recognizer segments into subtitle/transcript files and a transcript string."""

import logging
from typing import Iterable, List

from .chunk_merger import ChunkMerger
from .models import OutputRequest, RawSegment
from .output_formatter import OutputWriter, SRTFormatter, TranscriptFormatter
from .utils import derive_output_paths

logger = logging.getLogger(__name__)


def clean_segments(segments: Iterable[RawSegment]) -> List[RawSegment]:
    """Trims segment text and drops segments left empty."""
    cleaned = []
    for segment in segments:
        text = segment.text.strip()
        if not text:
            continue
        if text != segment.text:
            segment = RawSegment(start=segment.start, end=segment.end, text=text)
        cleaned.append(segment)
    return cleaned


def transcribe_segments(
    segments: Iterable[RawSegment],
    input_path: str,
    output_format,
    max_segment_length: int = 0,
    max_characters_per_segment: int = 0
) -> str:
    """
    Merges segments into chunks and writes the requested outputs.

    Args:
        segments: Ordered recognizer segments (centiseconds).
        input_path: Path of the source media; outputs are written beside it.
        output_format: "srt", "txt" or "both".
        max_segment_length: Maximum chunk span in seconds (0 = unlimited).
        max_characters_per_segment: Maximum chunk length in characters (0 = unlimited).

    Returns:
        The full transcript, chunk texts joined with single spaces.

    Raises:
        InvalidFormatError: If `output_format` is not recognized.
        ConfigurationError: If a limit is negative.
        OutputFileError: If an output file cannot be created or written.
    """
    request = OutputRequest.from_parameters(output_format, max_segment_length, max_characters_per_segment)

    merger = ChunkMerger(request.max_segment_duration, request.max_chars_per_chunk)
    chunks = merger.merge(clean_segments(segments))

    subtitle_path, transcript_path = derive_output_paths(
        input_path, request.write_subtitle, request.write_transcript
    )
    destinations = []
    if subtitle_path is not None:
        destinations.append((SRTFormatter(), subtitle_path))
    if transcript_path is not None:
        destinations.append((TranscriptFormatter(), transcript_path))

    return OutputWriter().write(chunks, destinations)
