"""Renders merged chunks into subtitle (SRT) and plain transcript (TXT) files."""

import logging
from abc import ABC, abstractmethod
from contextlib import ExitStack
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from .exceptions import OutputFileError
from .models import Chunk
from .utils import format_timestamp

logger = logging.getLogger(__name__)


class ChunkFormatter(ABC):
    """Abstract base class for per-chunk output formatters."""

    suffix: str = ""

    @abstractmethod
    def format_chunk(self, index: int, chunk: Chunk) -> str:
        """
        Renders one chunk.

        Args:
            index: 1-based position of the chunk in the output.
            chunk: The chunk to render.

        Returns:
            The exact text to append to the output file for this chunk.
        """
        pass


class SRTFormatter(ChunkFormatter):
    """Formats chunks as SubRip (SRT) blocks."""

    suffix = ".srt"

    def format_chunk(self, index: int, chunk: Chunk) -> str:
        start_time_str = format_timestamp(chunk.start)
        end_time_str = format_timestamp(chunk.end)
        return f"{index}\n{start_time_str} --> {end_time_str}\n{chunk.text.strip()}\n\n"


class TranscriptFormatter(ChunkFormatter):
    """One line of plain text per chunk."""

    suffix = ".txt"

    def format_chunk(self, index: int, chunk: Chunk) -> str:
        return f"{chunk.text.strip()}\n"


def render_transcript(chunks: Iterable[Chunk]) -> str:
    """Joins trimmed chunk texts with single spaces."""
    return " ".join(chunk.text.strip() for chunk in chunks)


class OutputWriter:
    """Writes every requested format in a single pass over the chunks."""

    def write(
        self,
        chunks: Sequence[Chunk],
        destinations: List[Tuple[ChunkFormatter, Path]]
    ) -> str:
        """
        Creates all destination files, then streams the chunks into them.

        Args:
            chunks: Finalized chunks in display order.
            destinations: (formatter, path) pairs; may be empty.

        Returns:
            The transcript string (chunk texts joined with single spaces).

        Raises:
            OutputFileError: If a file cannot be created (operation "create")
                             or written (operation "write"). Files already
                             created or partly written are left as they are.
        """
        with ExitStack() as stack:
            handles = []
            for formatter, path in destinations:
                try:
                    handle = stack.enter_context(open(path, 'w', encoding='utf-8', newline='\n'))
                except OSError as e:
                    logger.error(f"Could not create output file {path}: {e}")
                    raise OutputFileError(path, "create", e) from e
                logger.info(f"Writing {formatter.suffix} output to: {path}")
                handles.append((formatter, path, handle))

            for index, chunk in enumerate(chunks, start=1):
                for formatter, path, handle in handles:
                    try:
                        handle.write(formatter.format_chunk(index, chunk))
                    except OSError as e:
                        logger.error(f"Failed while writing chunk {index} to {path}: {e}")
                        raise OutputFileError(path, "write", e) from e

            for formatter, path, handle in handles:
                try:
                    handle.flush()
                except OSError as e:
                    logger.error(f"Failed to flush {path}: {e}")
                    raise OutputFileError(path, "write", e) from e

        logger.info(f"Wrote {len(chunks)} chunks to {len(destinations)} file(s).")
        return render_transcript(chunks)
