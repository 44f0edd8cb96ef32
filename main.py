#!/usr/bin/env python3
"""
Transcribeasy Entry Point Script

Transcribes one audio or video file to SRT subtitles and/or a text transcript.
"""

import sys
from transcribeasy.cli import main

if __name__ == "__main__":
    if sys.version_info < (3, 8):
        sys.stderr.write("Transcribeasy requires Python 3.8 or later.\n")
        sys.exit(1)

    main()
