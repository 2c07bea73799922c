"""Rasterize PDF pages to image files with poppler (through pdf2image)."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from pdf2image import convert_from_path
from pdf2image.exceptions import (
    PDFInfoNotInstalledError,
    PDFPageCountError,
    PDFPopplerTimeoutError,
    PDFSyntaxError,
)

from marble.config import settings

logger = logging.getLogger(__name__)

IMAGE_SUFFIXES = {".jpg", ".jpeg", ".png"}


class RasterizeError(Exception):
    """Raised when the external converter fails."""
    pass


@dataclass
class RasterOptions:
    """Converter options; defaults come from INGEST_* settings."""
    dpi: int
    fmt: str
    quality: int
    width: int | None
    height: int | None
    prefix: str
    poppler_path: str | None = None

    @classmethod
    def from_settings(cls, **overrides) -> RasterOptions:
        options = cls(
            dpi=settings.ingest.dpi,
            fmt=settings.ingest.image_format,
            quality=settings.ingest.jpeg_quality,
            width=settings.ingest.max_width,
            height=settings.ingest.max_height,
            prefix=settings.ingest.output_prefix,
            poppler_path=settings.ingest.poppler_path,
        )
        for key, value in overrides.items():
            if value is not None:
                setattr(options, key, value)
        return options


def rasterize_pdf(pdf_path: Path, output_dir: Path, options: RasterOptions | None = None) -> list[Path]:
    """Write one image per page of ``pdf_path`` into ``output_dir``.

    Args:
        pdf_path: PDF on disk
        output_dir: Target directory, created if missing
        options: Converter options (defaults from settings)

    Returns:
        Paths of the written pages, as reported by the converter

    Raises:
        RasterizeError: If poppler is missing or the PDF cannot be converted
    """
    options = options or RasterOptions.from_settings()
    size = (options.width, options.height) if (options.width or options.height) else None
    jpegopt = {"quality": options.quality, "progressive": False, "optimize": False}

    logger.info(f"Rasterizing {pdf_path} into {output_dir} at {options.dpi} dpi")

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        paths = convert_from_path(
            str(pdf_path),
            dpi=options.dpi,
            output_folder=str(output_dir),
            fmt=options.fmt,
            jpegopt=jpegopt if options.fmt == "jpeg" else None,
            output_file=options.prefix,
            poppler_path=options.poppler_path,
            size=size,
            paths_only=True,
        )
    except (
        PDFInfoNotInstalledError,
        PDFPageCountError,
        PDFPopplerTimeoutError,
        PDFSyntaxError,
        OSError,
    ) as e:
        logger.error(f"PDF conversion failed for {pdf_path}: {e}")
        raise RasterizeError(f"PDF conversion failed: {e}") from e

    logger.info(f"Converted {len(paths)} pages from {pdf_path.name}")
    return [Path(p) for p in paths]


def list_page_images(output_dir: Path, prefix: str | None = None) -> list[Path]:
    """Image files in ``output_dir`` (optionally only those with ``prefix``)."""
    if not output_dir.is_dir():
        return []
    return [
        p for p in output_dir.iterdir()
        if p.is_file()
        and p.suffix.lower() in IMAGE_SUFFIXES
        and (prefix is None or p.name.startswith(prefix))
    ]
