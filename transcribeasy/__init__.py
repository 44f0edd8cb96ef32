"""Transcribeasy: speech-recognition segments to SRT subtitles and text transcripts."""

__version__ = "0.1.0"
