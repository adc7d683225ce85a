#!/usr/bin/env python3
"""
Wrapper script for the imagez command line tool.
Makes it easier to run without the -m flag.

Usage:
    python imagez_tool.py input.png output.jpg --width 640 --quality 0.9
"""

import sys
from imagez.imagez_cli import main

if __name__ == '__main__':
    sys.exit(main())
