"""Tests for merging raw segments into chunks.

Covers the duration gate (span from chunk start, not summed), the character
gate, the single-segment override, and text/order preservation.
"""

import pytest

from transcribeasy.chunk_merger import ChunkMerger, merge_segments
from transcribeasy.models import Chunk, RawSegment


def _texts(chunks):
    return [chunk.text for chunk in chunks]


def test_scenario_duration_limit_at_boundary_is_accepted(scenario_segments):
    chunks = merge_segments(scenario_segments, max_segment_duration=300)
    assert chunks == [
        Chunk(0, 300, "Hello world"),
        Chunk(300, 700, "this is long"),
    ]


def test_empty_input_yields_no_chunks():
    assert ChunkMerger(300, 40).merge([]) == []


def test_disabled_limits_merge_everything(scenario_segments):
    chunks = merge_segments(scenario_segments)
    assert chunks == [Chunk(0, 700, "Hello world this is long")]


def test_single_segment_passes_through():
    assert merge_segments([RawSegment(5, 9, "hi")], 1, 1) == [Chunk(5, 9, "hi")]


def test_duration_is_span_based_not_summed():
    # Each segment lasts 1s but the gap makes the span 6s.
    segments = [RawSegment(0, 100, "a"), RawSegment(500, 600, "b")]
    assert _texts(merge_segments(segments, max_segment_duration=300)) == ["a", "b"]
    assert _texts(merge_segments(segments, max_segment_duration=600)) == ["a b"]


def test_character_limit_counts_joined_text():
    segments = [RawSegment(0, 10, "Hello"), RawSegment(10, 20, "world"), RawSegment(20, 30, "!")]
    # "Hello world" is 11 characters, "Hello world !" is 13
    assert _texts(merge_segments(segments, max_chars_per_chunk=11)) == ["Hello world", "!"]
    assert _texts(merge_segments(segments, max_chars_per_chunk=10)) == ["Hello", "world !"]


def test_character_limit_counts_code_points():
    segments = [RawSegment(0, 10, "héllo"), RawSegment(10, 20, "wörld")]
    assert _texts(merge_segments(segments, max_chars_per_chunk=11)) == ["héllo wörld"]


def test_oversized_segment_is_kept_whole():
    long_text = "x" * 50
    segments = [RawSegment(0, 10, "short"), RawSegment(10, 20, long_text), RawSegment(20, 30, "tail")]
    chunks = merge_segments(segments, max_chars_per_chunk=20)
    assert _texts(chunks) == ["short", long_text, "tail"]


def test_oversized_duration_segment_is_kept_whole():
    segments = [RawSegment(0, 1000, "very long utterance"), RawSegment(1000, 1050, "ok")]
    chunks = merge_segments(segments, max_segment_duration=200)
    assert chunks == [Chunk(0, 1000, "very long utterance"), Chunk(1000, 1050, "ok")]


def test_either_limit_rejects_merge():
    segments = [RawSegment(0, 100, "one"), RawSegment(100, 200, "two")]
    assert len(merge_segments(segments, max_segment_duration=1000, max_chars_per_chunk=5)) == 2
    assert len(merge_segments(segments, max_segment_duration=150, max_chars_per_chunk=100)) == 2
    assert len(merge_segments(segments, max_segment_duration=200, max_chars_per_chunk=7)) == 1


@pytest.mark.parametrize("max_duration, max_chars", [(0, 0), (200, 0), (0, 12), (350, 20), (1, 1)])
def test_text_preserved_in_order_and_chunks_ordered(max_duration, max_chars):
    segments = [
        RawSegment(0, 120, "the quick"),
        RawSegment(130, 260, "brown fox"),
        RawSegment(260, 300, "jumps"),
        RawSegment(420, 610, "over the lazy"),
        RawSegment(610, 700, "dog"),
    ]
    chunks = merge_segments(segments, max_duration, max_chars)

    assert " ".join(_texts(chunks)) == " ".join(s.text for s in segments)
    starts = [chunk.start for chunk in chunks]
    assert starts == sorted(set(starts))

    # Every chunk boundary falls on a segment boundary.
    boundaries = {s.start for s in segments}
    assert all(chunk.start in boundaries for chunk in chunks)
    assert {chunk.end for chunk in chunks} <= {s.end for s in segments}

    if max_chars:
        for chunk in chunks:
            single = any(chunk.text == s.text for s in segments)
            assert len(chunk.text) <= max_chars or single


def test_merge_does_not_mutate_input(scenario_segments):
    before = list(scenario_segments)
    merge_segments(scenario_segments, 300, 0)
    assert scenario_segments == before
