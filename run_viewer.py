#!/usr/bin/env python3
"""
Launcher script for the image viewer.
Run: python run_viewer.py image.png [zoom]
"""

import sys
import os

# Add project root to path
project_root = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, project_root)

try:
    from imagez.image_io import load_image
    from imagez.viewer import show
except ImportError as e:
    print(f"Import error: {e}")
    print("Make sure tkinter is installed and you're running from the project root directory")
    sys.exit(1)


def main():
    if len(sys.argv) < 2:
        print("Usage: python run_viewer.py image.png [zoom]")
        return 1

    image = load_image(sys.argv[1])
    zoom = float(sys.argv[2]) if len(sys.argv) > 2 else None
    show(image, zoom=zoom, title=os.path.basename(sys.argv[1]))
    return 0


if __name__ == '__main__':
    sys.exit(main())
