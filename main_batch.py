#!/usr/bin/env python3
"""
Transcribeasy Batch Processing Entry Point

Transcribes every audio/video file in a directory, smallest first.
"""

import sys
from transcribeasy.batch import main

if __name__ == "__main__":
    if sys.version_info < (3, 8):
        sys.stderr.write("Transcribeasy requires Python 3.8 or later.\n")
        sys.exit(1)

    main()
