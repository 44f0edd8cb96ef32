"""Converts input media to the 16 kHz mono WAV the recognizer expects, using ffmpeg."""

import ffmpeg
import os
import logging
from typing import Optional

from .exceptions import AudioExtractionError, FileSystemError
from .utils import ensure_dir_exists

logger = logging.getLogger(__name__)

SAMPLE_RATE = 16000


class AudioExtractor:
    """Decodes an audio or video file into a recognizer-ready WAV file."""

    def __init__(self, ffmpeg_path: Optional[str] = None):
        """
        Initializes the AudioExtractor.

        Args:
            ffmpeg_path: Optional path to the ffmpeg executable.
                         If None, assumes ffmpeg is in the system PATH.
        """
        self.ffmpeg_cmd = ffmpeg_path or 'ffmpeg'
        logger.info(f"Using ffmpeg command: {self.ffmpeg_cmd}")

    def extract_audio(self, input_path: str, output_audio_dir: str, output_filename: Optional[str] = None) -> str:
        """
        Decodes the first audio stream of `input_path` to 16-bit PCM mono WAV.

        Args:
            input_path: Path to the input audio or video file.
            output_audio_dir: Directory to save the decoded audio file.
            output_filename: Optional base name for the output audio file.
                             If None, uses the input filename.

        Returns:
            The full path to the decoded WAV file.

        Raises:
            FileNotFoundError: If the input file does not exist.
            AudioExtractionError: If ffmpeg fails to decode the audio.
            FileSystemError: If the output directory cannot be created/accessed.
        """
        logger.info(f"Starting audio extraction for: {input_path}")
        if not os.path.exists(input_path):
            raise FileNotFoundError(f"Input file not found: {input_path}")

        ensure_dir_exists(output_audio_dir)

        if output_filename is None:
            base_name = os.path.splitext(os.path.basename(input_path))[0]
        else:
            base_name = os.path.splitext(output_filename)[0]

        output_audio_path = os.path.join(output_audio_dir, f"{base_name}.wav")
        logger.debug(f"Output audio path set to: {output_audio_path}")

        if os.path.exists(output_audio_path):
            logger.warning(f"Output audio file already exists, overwriting: {output_audio_path}")
            try:
                os.remove(output_audio_path)
            except OSError as e:
                raise FileSystemError(f"Could not remove existing audio file {output_audio_path}: {e}") from e

        try:
            logger.info(f"Running ffmpeg to decode audio to {output_audio_path}...")
            (
                ffmpeg
                .input(input_path)
                .output(output_audio_path, acodec='pcm_s16le', ar=SAMPLE_RATE, ac=1)
                .overwrite_output()
                .run(cmd=self.ffmpeg_cmd, capture_stdout=True, capture_stderr=True)
            )
        except ffmpeg.Error as e:
            stderr_output = e.stderr.decode('utf-8', errors='replace') if e.stderr else "No stderr output"
            logger.error(f"ffmpeg error during audio extraction for {input_path}: {stderr_output}")
            if os.path.exists(output_audio_path):
                try:
                    os.remove(output_audio_path)
                except OSError:
                    logger.warning(f"Could not clean up partially created audio file: {output_audio_path}")
            raise AudioExtractionError(f"Failed to decode audio from {input_path}: {stderr_output}") from e
        except FileNotFoundError as e:
            logger.error(f"ffmpeg executable not found: {self.ffmpeg_cmd}")
            raise AudioExtractionError(f"ffmpeg executable not found: {self.ffmpeg_cmd}") from e

        logger.info(f"Successfully decoded audio to: {output_audio_path}")
        return output_audio_path
