"""
Batch processing: transcribes every media file in a directory, smallest first,
loading the recognition model once.
"""

import argparse
import logging
import os
import sys
import time
from typing import List, Tuple

from tqdm import tqdm

from .cli import add_common_arguments, apply_overrides, build_pipeline, validate_request
from .config_loader import ConfigLoader
from .exceptions import TranscribeasyError
from .log_setup import setup_logging

logger = logging.getLogger(__name__)

MEDIA_EXTENSIONS = (".wav", ".mp3", ".m4a", ".flac", ".ogg", ".mp4", ".mkv", ".mov", ".webm")


def find_and_sort_media(input_dir: str) -> List[Tuple[str, int]]:
    """
    Finds all media files in the input directory and sorts them by size.

    Args:
        input_dir: The directory to search.

    Returns:
        A list of (filepath, filesize) tuples, smallest first. Ties are
        ordered by path so runs are repeatable.

    Raises:
        FileNotFoundError: If the input directory doesn't exist.
        ValueError: If the input path is not a directory.
    """
    if not os.path.exists(input_dir):
        raise FileNotFoundError(f"Input directory not found: {input_dir}")
    if not os.path.isdir(input_dir):
        raise ValueError(f"Input path is not a directory: {input_dir}")

    media = []
    logger.info(f"Scanning directory for media files: {input_dir}")
    for filename in os.listdir(input_dir):
        if not filename.lower().endswith(MEDIA_EXTENSIONS):
            continue
        filepath = os.path.join(input_dir, filename)
        try:
            if os.path.isfile(filepath):
                media.append((filepath, os.path.getsize(filepath)))
        except OSError as e:
            logger.warning(f"Could not access file {filepath}: {e}. Skipping.")

    media.sort(key=lambda item: (item[1], item[0]))
    logger.info(f"Found {len(media)} media files. Sorted by size (smallest first).")
    return media


def process_batch(pipeline, media_paths: List[str]) -> Tuple[int, int]:
    """
    Runs the pipeline over each path, continuing past per-file failures.

    Returns:
        (succeeded, failed) counts.
    """
    succeeded = 0
    failed = 0
    with tqdm(total=len(media_paths), unit="file", desc="Starting Batch") as pbar:
        for media_path in media_paths:
            filename = os.path.basename(media_path)
            pbar.set_description(f"Processing: {filename[:30]}")
            try:
                file_start = time.time()
                pipeline.run(media_path)
                logger.info(f"Transcribed {filename} in {time.time() - file_start:.2f}s.")
                succeeded += 1
            except (TranscribeasyError, FileNotFoundError) as e:
                logger.error(f"Transcription failed for '{filename}': {e}")
                failed += 1
            finally:
                pbar.update(1)
    return succeeded, failed


def run_batch_processing(argv=None) -> int:
    """Parses arguments, sets up, and runs batch transcription. Returns the exit code."""
    parser = argparse.ArgumentParser(
        description="Transcribeasy Batch: transcribe every audio/video file in a directory.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "-i", "--input-dir",
        required=True,
        help="Directory containing the input media files."
    )
    add_common_arguments(parser)
    args = parser.parse_args(argv)
    log_level = getattr(logging, args.log_level.upper(), logging.INFO)

    try:
        config = ConfigLoader().load_with_defaults(args.config)
    except TranscribeasyError as e:
        setup_logging(log_level=log_level)
        logger.critical(f"Failed to load configuration: {e}")
        return 1

    setup_logging(log_level=log_level, log_dir=config['log_dir'], log_file=config['log_file'])
    apply_overrides(config, args)
    if not validate_request(config):
        return 1

    try:
        media_paths = [path for path, _ in find_and_sort_media(args.input_dir)]
    except (FileNotFoundError, ValueError) as e:
        logger.critical(f"Input directory error: {e}")
        return 1
    if not media_paths:
        logger.warning(f"No media files found in {args.input_dir}. Exiting.")
        return 0

    try:
        pipeline = build_pipeline(config)
    except TranscribeasyError as e:
        logger.critical(f"Failed to initialize components: {e}")
        return 1

    batch_start = time.time()
    logger.info(f"--- Starting batch transcription for {len(media_paths)} files ---")
    try:
        succeeded, failed = process_batch(pipeline, media_paths)
    except KeyboardInterrupt:
        logger.warning("Batch process interrupted by user (Ctrl+C). Exiting.")
        return 1

    logger.info(f"--- Batch transcription finished in {time.time() - batch_start:.2f} seconds ---")
    logger.info(f"Succeeded: {succeeded}/{len(media_paths)}, failed: {failed}/{len(media_paths)}")
    return 1 if failed else 0


def main() -> None:
    sys.exit(run_batch_processing())
