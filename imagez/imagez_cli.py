#!/usr/bin/env python3
"""
Imagez CLI
Load an image, apply transforms and filters, and save it with encoder options.

Usage:
    python -m imagez.imagez_cli input.png output.jpg [options]
"""

import sys
import os
import argparse

from .errors import ImagezError, InvalidParameterError
from .filters import NAMED_FILTERS, filter_image
from .image_io import DEFAULT_QUALITY, load_image, save
from .jpeg_metadata import SUBSAMPLING_NAMES
from .transform import flip, resize, rotate, scale


def build_parser():
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        description='Transform an image and save it with format-specific options'
    )

    parser.add_argument('input', help='Input image path or URL')
    parser.add_argument('output', help='Output image path; the extension selects the format')

    parser.add_argument(
        '--width',
        type=int,
        help='Resize to this width (height follows the aspect ratio unless --height is given)'
    )

    parser.add_argument(
        '--height',
        type=int,
        help='Resize to this height (requires --width)'
    )

    parser.add_argument(
        '--scale',
        type=float,
        help='Scale by this factor'
    )

    parser.add_argument(
        '--rotate',
        type=int,
        default=0,
        help='Rotate clockwise by a multiple of 90 degrees (default: 0)'
    )

    parser.add_argument(
        '--flip',
        choices=['horizontal', 'vertical'],
        help='Flip the image'
    )

    parser.add_argument(
        '--filter',
        dest='filters',
        action='append',
        choices=sorted(NAMED_FILTERS),
        default=[],
        help='Apply a filter; may be repeated'
    )

    parser.add_argument(
        '--quality',
        type=float,
        default=DEFAULT_QUALITY,
        help=f'Compression quality 0.0-1.0 (default: {DEFAULT_QUALITY})'
    )

    parser.add_argument(
        '--progressive',
        action=argparse.BooleanOptionalAction,
        default=None,
        help='Force progressive encoding on or off (default: encoder metadata)'
    )

    parser.add_argument(
        '--subsampling',
        choices=list(SUBSAMPLING_NAMES),
        default='4:4:4',
        help='JPEG chroma subsampling (default: 4:4:4)'
    )

    parser.add_argument(
        '--show',
        action='store_true',
        help='Display the result in a window'
    )

    return parser


def process(image, args):
    """Apply the transforms and filters selected on the command line."""
    if args.width is not None:
        image = resize(image, args.width, args.height)
    elif args.height is not None:
        raise InvalidParameterError("--height requires --width")

    if args.scale is not None:
        image = scale(image, args.scale)

    image = rotate(image, args.rotate)

    if args.flip:
        image = flip(image, args.flip)

    for name in args.filters:
        image = filter_image(image, NAMED_FILTERS[name]())

    return image


def main(argv=None):
    """Main function for CLI."""
    args = build_parser().parse_args(argv)

    print(f"Reading {args.input}...")
    try:
        image = load_image(args.input)
        print(f"  Loaded {image.width}x{image.height} {image.mode} image")

        image = process(image, args)

        output_dir = os.path.dirname(args.output)
        if output_dir and not os.path.exists(output_dir):
            os.makedirs(output_dir)

        print(f"Saving {args.output}...")
        save(
            image,
            args.output,
            quality=args.quality,
            progressive=args.progressive,
            subsampling=args.subsampling,
        )
    except ImagezError as e:
        print(f"Error: {str(e)}")
        return 1

    print(f"  Saved {image.width}x{image.height} image to: {args.output}")

    if args.show:
        from .viewer import show
        show(image, title=os.path.basename(args.output))

    return 0


if __name__ == '__main__':
    sys.exit(main())
