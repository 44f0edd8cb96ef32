"""Command-Line Interface handler for Transcribeasy."""

import argparse
import logging
import os
import sys

from .audio_extractor import AudioExtractor
from .config_loader import ConfigLoader
from .exceptions import ConfigurationError, TranscribeasyError
from .log_setup import setup_logging
from .models import OutputRequest
from .pipeline import TranscriptionPipeline

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def build_pipeline(config: dict) -> TranscriptionPipeline:
    """Instantiates the extractor, the Whisper model and the pipeline from config."""
    # Imported here so that --help and config errors don't pay for loading torch
    from .whisper_transcriber import WhisperTranscriber

    device = config.get('device', 'cpu')
    audio_extractor = AudioExtractor(ffmpeg_path=config.get('ffmpeg_path'))
    transcriber = WhisperTranscriber(
        model_name=config.get('whisper_model', 'base'),
        device=device,
        fp16=config.get('whisper_fp16', False) if device == 'cuda' else False,
        language=config.get('language', 'en'),
        beam_size=config.get('beam_size', 5)
    )
    return TranscriptionPipeline(config=config, audio_extractor=audio_extractor, transcriber=transcriber)


def apply_overrides(config: dict, args: argparse.Namespace) -> dict:
    """Copies CLI flags that were given over the configuration values."""
    overrides = {
        'temp_dir': args.temp_dir,
        'device': args.device,
        'whisper_model': args.model,
        'language': args.language,
        'output_format': args.output_format,
        'max_segment_length': args.max_segment_length,
        'max_characters_per_segment': args.max_characters,
    }
    for key, value in overrides.items():
        if value is not None:
            logger.info(f"Overriding {key} from config with CLI argument: {value}")
            config[key] = value
    return config


def validate_request(config: dict) -> bool:
    """Checks output format and limits before anything is decoded or loaded."""
    try:
        OutputRequest.from_parameters(
            config.get('output_format'),
            config.get('max_segment_length', 0),
            config.get('max_characters_per_segment', 0)
        )
    except ConfigurationError as e:
        logger.critical(f"Invalid parameters [{e.kind.value}]: {e.detail}")
        return False
    return True


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-c", "--config",
        default="config.yaml",
        help="Path to the configuration YAML file. Defaults apply if it does not exist."
    )
    parser.add_argument(
        "-f", "--output-format",
        default=None,
        help="Which files to write: srt, txt or both."
    )
    parser.add_argument(
        "--max-segment-length",
        type=int,
        default=None,
        help="Maximum subtitle duration in seconds (0 = no limit)."
    )
    parser.add_argument(
        "--max-characters",
        type=int,
        default=None,
        help="Maximum characters per subtitle (0 = no limit)."
    )
    parser.add_argument(
        "--model",
        default=None,
        help="Whisper model name or checkpoint path."
    )
    parser.add_argument(
        "--language",
        default=None,
        help="Language to transcribe in (e.g. en)."
    )
    parser.add_argument(
        "--device",
        default=None,
        choices=["cuda", "cpu"],
        help="Override the processing device specified in config."
    )
    parser.add_argument(
        "--temp-dir",
        default=None,
        help="Override the temporary directory specified in the config file."
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=LOG_LEVELS,
        help="Set the logging level for console and file output."
    )


class CLIHandler:
    """Parses arguments and runs a single transcription."""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Creates the argument parser for the CLI."""
        parser = argparse.ArgumentParser(
            description="Transcribeasy: transcribe an audio or video file to SRT subtitles and/or a text transcript.",
            formatter_class=argparse.ArgumentDefaultsHelpFormatter
        )
        parser.add_argument(
            "-i", "--input",
            required=True,
            help="Path to the input audio or video file. Outputs are written beside it."
        )
        add_common_arguments(parser)
        return parser

    def run(self, argv=None) -> int:
        """Parses arguments, sets up logging, loads config, and runs the pipeline.

        Returns:
            The process exit code.
        """
        args = self.parser.parse_args(argv)
        log_level = getattr(logging, args.log_level.upper(), logging.INFO)

        try:
            config = ConfigLoader().load_with_defaults(args.config)
        except TranscribeasyError as e:
            setup_logging(log_level=log_level)
            logger.critical(f"Failed to load configuration from {args.config}: {e}")
            return 1

        setup_logging(log_level=log_level, log_dir=config['log_dir'], log_file=config['log_file'])
        apply_overrides(config, args)
        if not validate_request(config):
            return 1

        if not os.path.isfile(args.input):
            logger.critical(f"Input file not found or is not a file: {args.input}")
            return 1

        try:
            pipeline = build_pipeline(config)
            transcript = pipeline.run(args.input)
        except TranscribeasyError as e:
            kind = e.kind.value if e.kind else "error"
            logger.error(f"Transcription failed [{kind}]: {e.detail}")
            return 1
        except KeyboardInterrupt:
            logger.warning("Process interrupted by user (Ctrl+C). Exiting.")
            return 1
        except Exception as e:
            logger.critical(f"An unexpected critical error occurred at the top level: {e}", exc_info=True)
            return 2

        print(transcript)
        return 0


def main() -> None:
    sys.exit(CLIHandler().run())
