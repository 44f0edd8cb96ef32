"""Utility functions for Transcribeasy."""

import os
import logging
from pathlib import Path
from typing import Optional, Tuple

from .exceptions import FileSystemError

logger = logging.getLogger(__name__)

SUBTITLE_EXTENSION = "srt"
TRANSCRIPT_EXTENSION = "txt"


def ensure_dir_exists(dir_path: str) -> None:
    """
    Ensures that a directory exists. Creates it if it doesn't.

    Args:
        dir_path: The path to the directory.

    Raises:
        FileSystemError: If the directory cannot be created due to permissions
                         or if the path exists but is not a directory.
    """
    if not dir_path:
        raise ValueError("Directory path cannot be empty.")
    try:
        if not os.path.exists(dir_path):
            os.makedirs(dir_path)
            logger.info(f"Created directory: {dir_path}")
        elif not os.path.isdir(dir_path):
            raise FileSystemError(f"Path exists but is not a directory: {dir_path}")
    except OSError as e:
        logger.error(f"Error creating or accessing directory {dir_path}: {e}", exc_info=True)
        raise FileSystemError(f"Could not create or access directory {dir_path}: {e}") from e


def format_timestamp(centiseconds: int) -> str:
    """
    Formats centiseconds into SRT time format HH:MM:SS,mmm.

    The hour field is not wrapped at 24.

    Args:
        centiseconds: Time in hundredths of a second.

    Returns:
        Formatted time string.
    """
    if centiseconds < 0:
        raise ValueError(f"Timestamp cannot be negative: {centiseconds}")
    milliseconds = centiseconds * 10
    hrs = milliseconds // 3600000
    milliseconds %= 3600000
    mins = milliseconds // 60000
    milliseconds %= 60000
    secs = milliseconds // 1000
    milliseconds %= 1000
    return f"{hrs:02d}:{mins:02d}:{secs:02d},{milliseconds:03d}"


def seconds_to_centiseconds(seconds: float) -> int:
    """Converts float seconds (Whisper's unit) to whole centiseconds."""
    if seconds < 0:
        seconds = 0.0
    return int(round(seconds * 100))


def derive_output_paths(
    input_path: str,
    write_subtitle: bool,
    write_transcript: bool
) -> Tuple[Optional[Path], Optional[Path]]:
    """
    Places outputs next to the input file, sharing its stem.

    Args:
        input_path: Path of the source audio/video file.
        write_subtitle: Whether a .srt path is wanted.
        write_transcript: Whether a .txt path is wanted.

    Returns:
        (subtitle_path, transcript_path); an entry is None when not requested.
    """
    source = Path(input_path)
    parent = source.parent  # Path("x.wav").parent is Path(".")
    stem = source.stem
    subtitle_path = parent / f"{stem}.{SUBTITLE_EXTENSION}" if write_subtitle else None
    transcript_path = parent / f"{stem}.{TRANSCRIPT_EXTENSION}" if write_transcript else None
    return subtitle_path, transcript_path
