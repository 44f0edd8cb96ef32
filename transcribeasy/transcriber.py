"""Speech-to-text segment sources."""

from abc import ABC, abstractmethod

from .models import TranscriptionResult


class Transcriber(ABC):
    """Abstract base class for transcription services."""

    @abstractmethod
    def transcribe(self, audio_path: str) -> TranscriptionResult:
        """
        Transcribes the given audio file.

        Args:
            audio_path: Path to the audio file (16 kHz mono WAV).

        Returns:
            A TranscriptionResult whose segments are ordered, timed in
            centiseconds, and carry trimmed non-empty text.

        Raises:
            TranscriptionError: If transcription fails.
            FileNotFoundError: If the audio file doesn't exist.
        """
        pass
