"""Shared fixtures for the transcribeasy test suite.

Fakes stand in for ffmpeg and the Whisper model so the merge/format core and
the pipeline orchestration can be exercised without media files or models.
"""

import logging
import os
from typing import List, Optional

import pytest

from transcribeasy.models import RawSegment, TranscriptionResult
from transcribeasy.transcriber import Transcriber


SCENARIO_SEGMENTS: List[RawSegment] = [
    RawSegment(0, 150, "Hello"),
    RawSegment(150, 300, "world"),
    RawSegment(300, 700, "this is long"),
]


class FakeAudioExtractor:
    """Writes a placeholder WAV instead of running ffmpeg."""

    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.calls = []
        self.created = []

    def extract_audio(self, input_path, output_audio_dir, output_filename=None):
        self.calls.append(input_path)
        if self.error is not None:
            raise self.error
        base_name = os.path.splitext(output_filename or os.path.basename(input_path))[0]
        path = os.path.join(output_audio_dir, f"{base_name}.wav")
        with open(path, "wb") as f:
            f.write(b"RIFF")
        self.created.append(path)
        return path


class FakeTranscriber(Transcriber):
    """Returns canned segments."""

    def __init__(self, segments=None, error: Optional[Exception] = None):
        self.segments = list(segments or [])
        self.error = error
        self.calls = []

    def transcribe(self, audio_path):
        self.calls.append(audio_path)
        if self.error is not None:
            raise self.error
        return TranscriptionResult(language="en", segments=list(self.segments), source_path=audio_path)


@pytest.fixture
def scenario_segments():
    return list(SCENARIO_SEGMENTS)


@pytest.fixture
def audio_path(tmp_path):
    path = tmp_path / "talk.wav"
    path.write_bytes(b"RIFF")
    return path


@pytest.fixture
def pipeline_config(tmp_path):
    return {
        "temp_dir": str(tmp_path / "temp"),
        "output_format": "both",
        "max_segment_length": 0,
        "max_characters_per_segment": 0,
    }


@pytest.fixture
def restore_root_logging():
    """Undo handler changes made by setup_logging during a test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
