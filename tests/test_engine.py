"""End-to-end tests for the segment → files + transcript core."""

import pytest

from transcribeasy.engine import clean_segments, transcribe_segments
from transcribeasy.exceptions import ConfigurationError, InvalidFormatError, OutputFileError
from transcribeasy.models import RawSegment

SCENARIO_SRT = (
    "1\n00:00:00,000 --> 00:00:03,000\nHello world\n\n"
    "2\n00:00:03,000 --> 00:00:07,000\nthis is long\n\n"
)


def test_scenario_both_outputs(audio_path, scenario_segments):
    transcript = transcribe_segments(scenario_segments, str(audio_path), "both", 3, 0)

    assert transcript == "Hello world this is long"
    assert audio_path.with_suffix(".srt").read_text(encoding="utf-8") == SCENARIO_SRT
    assert audio_path.with_suffix(".txt").read_text(encoding="utf-8") == "Hello world\nthis is long\n"


def test_srt_only_does_not_create_transcript(audio_path, scenario_segments):
    transcribe_segments(scenario_segments, str(audio_path), "srt", 3, 0)
    assert audio_path.with_suffix(".srt").exists()
    assert not audio_path.with_suffix(".txt").exists()


def test_txt_only_does_not_create_subtitles(audio_path, scenario_segments):
    transcript = transcribe_segments(scenario_segments, str(audio_path), "txt")
    assert transcript == "Hello world this is long"
    assert audio_path.with_suffix(".txt").read_text(encoding="utf-8") == "Hello world this is long\n"
    assert not audio_path.with_suffix(".srt").exists()


def test_invalid_format_fails_before_writing(audio_path, scenario_segments):
    with pytest.raises(InvalidFormatError) as exc_info:
        transcribe_segments(scenario_segments, str(audio_path), "vtt")
    assert "vtt" in str(exc_info.value)
    assert not audio_path.with_suffix(".srt").exists()
    assert not audio_path.with_suffix(".txt").exists()


def test_negative_limit_is_rejected(audio_path, scenario_segments):
    with pytest.raises(ConfigurationError):
        transcribe_segments(scenario_segments, str(audio_path), "both", -1, 0)


def test_empty_input_creates_empty_files(audio_path):
    transcript = transcribe_segments([], str(audio_path), "both", 3, 10)
    assert transcript == ""
    assert audio_path.with_suffix(".srt").read_bytes() == b""
    assert audio_path.with_suffix(".txt").read_bytes() == b""


def test_blank_segments_never_reach_output(audio_path):
    segments = [
        RawSegment(0, 50, "  "),
        RawSegment(50, 100, " Hi there "),
        RawSegment(100, 120, ""),
        RawSegment(120, 200, "\tfriend\n"),
    ]
    transcript = transcribe_segments(segments, str(audio_path), "srt", 0, 0)
    assert transcript == "Hi there friend"
    assert audio_path.with_suffix(".srt").read_text(encoding="utf-8") == (
        "1\n00:00:00,500 --> 00:00:02,000\nHi there friend\n\n"
    )


def test_clean_segments_trims_and_filters():
    cleaned = clean_segments([RawSegment(0, 1, " a "), RawSegment(1, 2, " "), RawSegment(2, 3, "b")])
    assert cleaned == [RawSegment(0, 1, "a"), RawSegment(2, 3, "b")]


def test_rerun_is_byte_identical(audio_path, scenario_segments):
    first = transcribe_segments(scenario_segments, str(audio_path), "both", 3, 20)
    srt_first = audio_path.with_suffix(".srt").read_bytes()
    txt_first = audio_path.with_suffix(".txt").read_bytes()

    second = transcribe_segments(scenario_segments, str(audio_path), "both", 3, 20)

    assert first == second
    assert audio_path.with_suffix(".srt").read_bytes() == srt_first
    assert audio_path.with_suffix(".txt").read_bytes() == txt_first


def test_unwritable_destination_reports_path(tmp_path, scenario_segments):
    missing = tmp_path / "gone" / "talk.wav"
    with pytest.raises(OutputFileError) as exc_info:
        transcribe_segments(scenario_segments, str(missing), "srt")
    assert exc_info.value.operation == "create"
    assert exc_info.value.path.endswith("talk.srt")
