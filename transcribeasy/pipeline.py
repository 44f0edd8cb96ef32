"""Orchestrates decoding, recognition and output writing for one input file."""

import logging
import os
import time
from typing import Optional

from .audio_extractor import AudioExtractor
from .engine import transcribe_segments
from .exceptions import FileSystemError, TranscribeasyError
from .models import OutputRequest
from .transcriber import Transcriber
from .utils import ensure_dir_exists

logger = logging.getLogger(__name__)


class TranscriptionPipeline:
    """
    Manages the end-to-end process of transcribing a media file.
    """

    def __init__(
        self,
        config: dict,
        audio_extractor: AudioExtractor,
        transcriber: Transcriber
    ):
        """
        Initializes the TranscriptionPipeline.

        Args:
            config: A dictionary containing configuration settings.
            audio_extractor: Decodes input media into recognizer-ready WAV.
            transcriber: The segment source.

        Raises:
            FileSystemError: If the temporary directory is missing from the
                             config or is not writable.
        """
        self.config = config
        self.audio_extractor = audio_extractor
        self.transcriber = transcriber

        self.temp_dir = config.get('temp_dir')
        if not self.temp_dir:
            raise FileSystemError("Configuration missing 'temp_dir'.")
        try:
            ensure_dir_exists(self.temp_dir)
            test_file = os.path.join(self.temp_dir, f".transcribeasy_write_test_{os.getpid()}")
            with open(test_file, "w") as f:
                f.write("test")
            os.remove(test_file)
        except (OSError, ValueError) as e:
            raise FileSystemError(f"Temporary directory '{self.temp_dir}' is invalid or not writable: {e}") from e

    def _cleanup_temp_files(self, *file_paths: Optional[str]) -> None:
        """Removes temporary files specified."""
        for file_path in file_paths:
            if file_path and os.path.exists(file_path):
                try:
                    os.remove(file_path)
                    logger.info(f"Cleaned up temporary file: {file_path}")
                except OSError as e:
                    logger.warning(f"Could not remove temporary file {file_path}: {e}")

    def run(
        self,
        input_path: str,
        output_format: Optional[str] = None,
        max_segment_length: Optional[int] = None,
        max_characters_per_segment: Optional[int] = None
    ) -> str:
        """
        Transcribes `input_path` and writes the requested files beside it.

        Parameters left as None fall back to the configuration.

        Returns:
            The full transcript string.

        Raises:
            ConfigurationError: For an invalid format or limit, before any processing.
            FileNotFoundError: If the input file is not found.
            UpstreamError: If decoding, model loading or recognition fails.
            OutputFileError: If an output file cannot be created or written.
        """
        if output_format is None:
            output_format = self.config.get('output_format', 'both')
        if max_segment_length is None:
            max_segment_length = self.config.get('max_segment_length', 0)
        if max_characters_per_segment is None:
            max_characters_per_segment = self.config.get('max_characters_per_segment', 0)

        # Reject bad parameters before touching the input
        OutputRequest.from_parameters(output_format, max_segment_length, max_characters_per_segment)

        start_time = time.time()
        logger.info(f"--- Starting transcription for: {input_path} ---")
        logger.info(
            f"Output format: {output_format}, max segment length: {max_segment_length}s, "
            f"max characters per segment: {max_characters_per_segment}"
        )
        base_name = os.path.splitext(os.path.basename(input_path))[0]
        temp_audio_name = f"{base_name}_{int(time.time())}_{os.getpid()}.wav"
        extracted_audio_path = None

        try:
            logger.info("Step 1: Decoding audio...")
            extracted_audio_path = self.audio_extractor.extract_audio(input_path, self.temp_dir, temp_audio_name)

            logger.info("Step 2: Running speech recognition...")
            result = self.transcriber.transcribe(extracted_audio_path)
            logger.info(f"Recognition complete. Found {len(result.segments)} segments.")

            logger.info("Step 3: Merging segments and writing output...")
            transcript = transcribe_segments(
                result.segments,
                input_path,
                output_format,
                max_segment_length,
                max_characters_per_segment
            )

            logger.info(f"--- Transcription completed in {time.time() - start_time:.2f} seconds ---")
            return transcript

        except (TranscribeasyError, FileNotFoundError) as e:
            logger.error(f"Transcription failed: {e}")
            raise
        except Exception as e:
            logger.critical(f"An unexpected critical error occurred during transcription: {e}", exc_info=True)
            raise TranscribeasyError(f"An unexpected critical error occurred: {e}") from e
        finally:
            self._cleanup_temp_files(extracted_audio_path)
