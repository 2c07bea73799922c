"""Command-line PDF to JPEG conversion.

Usage:
    marble-pdf2jpg ./public/pdfs/products/sample.pdf ./public/images/products/sample
    marble-pdf2jpg ./sample.pdf ./output --density 150 --quality 80
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from marble.logging_config import setup_logging
from marble.parsers import sort_page_files
from marble.pipelines.rasterize import RasterizeError, RasterOptions, rasterize_pdf

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="marble-pdf2jpg",
        description="Convert every page of a PDF into a JPEG file.",
    )
    parser.add_argument("pdf", type=Path, help="PDF file to convert")
    parser.add_argument("output_dir", type=Path, help="Directory for the page images")
    parser.add_argument("--density", type=int, help="DPI (default: INGEST_DPI, 300)")
    parser.add_argument("--width", type=int, help="Output width in pixels")
    parser.add_argument("--height", type=int, help="Output height in pixels")
    parser.add_argument("--quality", type=int, choices=range(1, 101), metavar="1-100", help="JPEG quality")
    parser.add_argument("--prefix", help="File name prefix (default: page)")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()

    if not args.pdf.is_file():
        logger.error(f"PDF file not found: {args.pdf}")
        return 1

    options = RasterOptions.from_settings(
        dpi=args.density,
        width=args.width,
        height=args.height,
        quality=args.quality,
        prefix=args.prefix,
        fmt="jpeg",
    )

    try:
        pages = rasterize_pdf(args.pdf, args.output_dir, options)
    except (RasterizeError, OSError) as e:
        logger.error(f"Conversion failed: {e}")
        return 1

    for number, page in enumerate(sort_page_files(pages), start=1):
        print(f"Page {number}: {page}")
    print(f"Converted {len(pages)} pages into {args.output_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
