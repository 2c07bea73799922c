"""Catalog PDF to products pipeline.

Rasterizes every page of an uploaded catalog, guesses product names from the
PDF text and stores one product per page image.
"""
from __future__ import annotations

import asyncio
import logging
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO

from sqlalchemy.ext.asyncio import AsyncSession

from marble import models
from marble.crud import create_row
from marble.parsers import extract_catalog_text, guess_product_names, sort_page_files
from marble.pipelines.rasterize import RasterOptions, list_page_images, rasterize_pdf
from marble.storage import MediaKind, entity_dir, public_url, remove_file

logger = logging.getLogger(__name__)

PRODUCTS_ENTITY = "products"


@dataclass
class IngestResult:
    """Products created from one catalog PDF."""
    pdf_name: str
    products: list[models.Product] = field(default_factory=list)
    extracted_text: str = ""
    guessed_names: list[str] = field(default_factory=list)


class ProductIngestError(Exception):
    """Raised when a catalog PDF cannot be turned into products."""
    pass


def fallback_name(pdf_name: str, page_number: int) -> str:
    return f"{pdf_name} - Page {page_number}"


def output_dir_for(pdf_name: str) -> Path:
    """images/products/<pdf-name>, suffixed -2, -3... if a previous import used it."""
    base = entity_dir(MediaKind.IMAGES, PRODUCTS_ENTITY)
    candidate = base / pdf_name
    counter = 1
    while candidate.exists() and any(candidate.iterdir()):
        counter += 1
        candidate = base / f"{pdf_name}-{counter}"
    return candidate


def write_temp_pdf(file_obj: BinaryIO) -> Path:
    """Copy the upload to a temporary file the converter can read."""
    file_obj.seek(0)
    with tempfile.NamedTemporaryFile(suffix=".pdf", delete=False) as tmp:
        shutil.copyfileobj(file_obj, tmp)
    return Path(tmp.name)


async def ingest_pdf_products(
    session: AsyncSession,
    file_obj: BinaryIO,
    filename: str,
    *,
    category: str | None = None,
) -> IngestResult:
    """Create products from the pages of a catalog PDF.

    Steps:
    1. Persist the upload to a temporary path
    2. Rasterize every page into images/products/<pdf-name>/
    3. List generated images, ordered by page number
    4. Extract PDF text (empty unless INGEST_EXTRACT_TEXT is on)
    5. Guess product names from the text
    6. Insert one product per page, in page order
    7. Remove the temporary PDF

    Args:
        session: Database session
        file_obj: Uploaded PDF
        filename: Original filename
        category: Category name stored on every product

    Returns:
        IngestResult with the created products

    Raises:
        ProductIngestError: If any step fails; nothing is committed then
    """
    pdf_name = Path(filename).stem or "catalog"
    result = IngestResult(pdf_name=pdf_name)
    temp_pdf: Path | None = None

    try:
        logger.info(f"Ingesting catalog PDF: {filename}")

        # Step 1: Temporary copy
        temp_pdf = write_temp_pdf(file_obj)

        # Step 2: Rasterize (poppler is a blocking subprocess)
        output_dir = output_dir_for(pdf_name)
        options = RasterOptions.from_settings()
        await asyncio.to_thread(rasterize_pdf, temp_pdf, output_dir, options)

        # Step 3: Page images in page order
        pages = sort_page_files(list_page_images(output_dir, prefix=options.prefix))
        logger.info(f"Found {len(pages)} page images for {pdf_name}")

        # Steps 4-5: Names
        result.extracted_text = await asyncio.to_thread(extract_catalog_text, temp_pdf)
        result.guessed_names = guess_product_names(result.extracted_text)

        # Step 6: One product per page
        for number, page in enumerate(pages, start=1):
            if number <= len(result.guessed_names):
                name = result.guessed_names[number - 1]
            else:
                name = fallback_name(pdf_name, number)

            product = await create_row(
                session,
                models.Product,
                {
                    "name": name,
                    "description": f"Page {number} of the {pdf_name} catalog",
                    "image_path": public_url(page),
                    "category": category,
                    "pdf_path": None,
                },
                commit=False,
            )
            result.products.append(product)

        await session.commit()
        for product in result.products:
            await session.refresh(product)

        logger.info(f"Created {len(result.products)} products from {filename}")
        return result

    except Exception as e:
        logger.error(f"Catalog ingestion failed: {e}", exc_info=True)
        await session.rollback()
        raise ProductIngestError(f"Ingestion failed: {e}") from e

    finally:
        # Step 7: Cleanup
        if temp_pdf is not None:
            remove_file(temp_pdf)
