"""Handles Speech-to-Text transcription using Whisper."""

import logging
import os
from typing import Dict, Optional, Tuple

import torch
import whisper

from .exceptions import ConfigurationError, ModelLoadError, TranscriptionError
from .models import RawSegment, TranscriptionResult
from .transcriber import Transcriber
from .utils import seconds_to_centiseconds

logger = logging.getLogger(__name__)

# Loaded models, keyed by (model name, device); batch runs reuse them.
_model_cache: Dict[Tuple[str, str], "whisper.Whisper"] = {}


class WhisperTranscriber(Transcriber):
    """Implements transcription using OpenAI's Whisper model."""

    def __init__(
        self,
        model_name: str = "base",
        device: str = "cpu",
        fp16: bool = False,
        language: Optional[str] = "en",
        beam_size: int = 5
    ):
        """
        Initializes the WhisperTranscriber.

        Args:
            model_name: The name of the Whisper model to use (e.g., "base", "medium.en")
                        or a path to a checkpoint file.
            device: The device to run the model on ("cuda" or "cpu").
            fp16: Whether to use float16 precision (CUDA only).
            language: Language to decode in; None lets Whisper detect it.
            beam_size: Beam width for beam-search decoding.

        Raises:
            ConfigurationError: If the specified device is invalid.
            ModelLoadError: If the model fails to load.
        """
        self.model_name = model_name
        self.device = device
        self.fp16 = fp16
        self.language = language
        self.beam_size = beam_size

        if self.device == "cuda" and not torch.cuda.is_available():
            logger.warning("CUDA device requested but not available. Falling back to CPU.")
            self.device = "cpu"
        elif self.device not in ["cuda", "cpu"]:
            raise ConfigurationError(f"Invalid device specified: {self.device}. Choose 'cuda' or 'cpu'.")

        logger.info(f"Initializing WhisperTranscriber with model '{self.model_name}' on device '{self.device}' (FP16: {self.fp16})")
        self.model = self._load_model()

    def _load_model(self):
        cache_key = (self.model_name, self.device)
        if cache_key in _model_cache:
            logger.debug(f"Reusing cached Whisper model '{self.model_name}'.")
            return _model_cache[cache_key]
        try:
            model = whisper.load_model(self.model_name, device=self.device)
        except Exception as e:
            logger.error(f"Failed to load Whisper model '{self.model_name}': {e}", exc_info=True)
            raise ModelLoadError(f"Failed to load model '{self.model_name}': {e}") from e
        logger.info(f"Whisper model '{self.model_name}' loaded successfully.")
        _model_cache[cache_key] = model
        return model

    def transcribe(self, audio_path: str) -> TranscriptionResult:
        """
        Transcribes the audio file using the loaded Whisper model.

        Args:
            audio_path: Path to the audio file (WAV format recommended).

        Returns:
            A TranscriptionResult with centisecond-timed segments.

        Raises:
            FileNotFoundError: If the audio file doesn't exist.
            TranscriptionError: If transcription fails during processing.
        """
        logger.info(f"Starting transcription for: {audio_path}")
        if not os.path.exists(audio_path):
            raise FileNotFoundError(f"Audio file not found: {audio_path}")

        try:
            result = self.model.transcribe(
                audio_path,
                language=self.language,
                beam_size=self.beam_size,
                fp16=self.fp16 if self.device == "cuda" else False,  # FP16 only works on CUDA
                verbose=None
            )
        except Exception as e:
            logger.error(f"Error during Whisper transcription process for {audio_path}: {e}", exc_info=True)
            raise TranscriptionError(f"Failed to run model on {audio_path}: {e}") from e

        logger.info(f"Transcription completed. Detected language: {result.get('language', 'N/A')}")

        segments = []
        for seg_data in result.get('segments', []):
            if 'start' not in seg_data or 'end' not in seg_data or 'text' not in seg_data:
                logger.warning(f"Skipping incomplete segment data: {seg_data}")
                continue
            text = seg_data['text'].strip()
            if not text:
                continue
            start = seconds_to_centiseconds(float(seg_data['start']))
            end = max(start, seconds_to_centiseconds(float(seg_data['end'])))
            segments.append(RawSegment(start=start, end=end, text=text))

        logger.info(f"Processed {len(segments)} segments from transcription.")
        return TranscriptionResult(
            language=result.get('language'),
            segments=segments,
            source_path=audio_path
        )
