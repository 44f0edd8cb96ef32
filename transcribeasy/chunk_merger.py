"""Coalesces raw recognizer segments into on-screen chunks."""

import logging
from typing import Iterable, List, Optional

from .models import Chunk, RawSegment

logger = logging.getLogger(__name__)


class ChunkMerger:
    """
    Greedy single-pass fold of segments into chunks under two soft limits.

    A segment is never split and never dropped. A segment that alone
    exceeds a limit still becomes its own chunk; the limits only gate merging.
    """

    def __init__(self, max_segment_duration: int = 0, max_chars_per_chunk: int = 0):
        """
        Args:
            max_segment_duration: Maximum chunk span in centiseconds, measured
                                  from the chunk's first start to the candidate
                                  segment's end. 0 disables the limit.
            max_chars_per_chunk: Maximum characters in the joined chunk text.
                                 0 disables the limit.
        """
        self.max_segment_duration = max_segment_duration
        self.max_chars_per_chunk = max_chars_per_chunk

    def _duration_ok(self, candidate: Chunk) -> bool:
        if not self.max_segment_duration:
            return True
        return candidate.end - candidate.start <= self.max_segment_duration

    def _chars_ok(self, candidate: Chunk) -> bool:
        if not self.max_chars_per_chunk:
            return True
        return len(candidate.text) <= self.max_chars_per_chunk

    def merge(self, segments: Iterable[RawSegment]) -> List[Chunk]:
        """
        Merges segments, in order, into chunks.

        Args:
            segments: Ordered raw segments with trimmed, non-empty text.

        Returns:
            The finalized chunks in input order.
        """
        chunks: List[Chunk] = []
        current: Optional[Chunk] = None
        consumed = 0

        for segment in segments:
            consumed += 1
            if current is None:
                current = Chunk.from_segment(segment)
                continue

            candidate = current.extended_with(segment)
            if self._duration_ok(candidate) and self._chars_ok(candidate):
                current = candidate
            else:
                logger.debug(
                    f"Closing chunk {len(chunks) + 1} at {current.end}cs "
                    f"(candidate span={candidate.end - candidate.start}cs, chars={len(candidate.text)})"
                )
                chunks.append(current)
                current = Chunk.from_segment(segment)

        if current is not None:
            chunks.append(current)

        logger.info(
            f"Merged {consumed} segments into {len(chunks)} chunks "
            f"(max_duration={self.max_segment_duration}cs, max_chars={self.max_chars_per_chunk})"
        )
        return chunks


def merge_segments(
    segments: Iterable[RawSegment],
    max_segment_duration: int = 0,
    max_chars_per_chunk: int = 0
) -> List[Chunk]:
    """Convenience wrapper around ChunkMerger.merge."""
    return ChunkMerger(max_segment_duration, max_chars_per_chunk).merge(segments)
