"""Product endpoints, including the catalog PDF import."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from marble import crud, models
from marble.db import get_session
from marble.parsers import ParseError, is_pdf
from marble.pipelines.pdf_products import ProductIngestError, ingest_pdf_products
from marble.schemas import MessageResponse, PdfImportResponse, ProductOut
from marble.storage import save_upload

router = APIRouter(prefix="/api/products", tags=["products"])
logger = logging.getLogger(__name__)

ENTITY = "products"


@router.get("", response_model=list[ProductOut])
async def list_products(session: AsyncSession = Depends(get_session)):
    products = await crud.list_rows(
        session, models.Product, models.Product.created_at.desc(), models.Product.id.desc()
    )
    logger.info(f"Products fetched: {len(products)}")
    return products


@router.get("/{product_id}", response_model=ProductOut)
async def get_product(product_id: int, session: AsyncSession = Depends(get_session)):
    return await crud.get_or_404(session, models.Product, product_id)


@router.post("", response_model=ProductOut)
async def create_product(
    name: str = Form(...),
    description: str | None = Form(None),
    category: str | None = Form(None),
    image: UploadFile | None = File(None),
    pdf: UploadFile | None = File(None),
    session: AsyncSession = Depends(get_session),
):
    image_path = await save_upload(image, ENTITY) if image and image.filename else None
    pdf_path = await save_upload(pdf, ENTITY) if pdf and pdf.filename else None

    return await crud.create_row(
        session,
        models.Product,
        {
            "name": name,
            "description": description,
            "image_path": image_path,
            "category": category,
            "pdf_path": pdf_path,
        },
    )


@router.put("/{product_id}", response_model=ProductOut)
async def update_product(
    product_id: int,
    name: str | None = Form(None),
    description: str | None = Form(None),
    category: str | None = Form(None),
    image_path: str | None = Form(None),
    pdf_path: str | None = Form(None),
    image: UploadFile | None = File(None),
    pdf: UploadFile | None = File(None),
    session: AsyncSession = Depends(get_session),
):
    """Update a product; a new upload wins over the submitted path."""
    product = await crud.get_or_404(session, models.Product, product_id)

    if image and image.filename:
        image_path = await save_upload(image, ENTITY)
    if pdf and pdf.filename:
        pdf_path = await save_upload(pdf, ENTITY)

    return await crud.update_row(
        session,
        product,
        crud.sent_fields(
            name=name,
            description=description,
            category=category,
            image_path=image_path,
            pdf_path=pdf_path,
        ),
    )


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(product_id: int, session: AsyncSession = Depends(get_session)):
    await crud.delete_row(session, models.Product, product_id)
    return MessageResponse(message="Product deleted successfully")


@router.post("/from-pdf", response_model=PdfImportResponse)
async def create_products_from_pdf(
    pdf: UploadFile = File(..., description="Catalog PDF"),
    category: str | None = Form(None),
    session: AsyncSession = Depends(get_session),
) -> PdfImportResponse:
    """Create one product per page of a catalog PDF.

    Each page is rasterized to an image; product names come from the PDF
    text when extraction is enabled, otherwise "<pdf-name> - Page N".
    """
    if not pdf.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="PDF file is required",
        )

    logger.info(f"Received catalog PDF: {pdf.filename}")

    try:
        head = await pdf.read(5)
        if not is_pdf(pdf.filename, head):
            raise ParseError(f"Not a PDF file: {pdf.filename}")

        result = await ingest_pdf_products(
            session,
            pdf.file,
            pdf.filename,
            category=category,
        )

        return PdfImportResponse(
            message=f"Created {len(result.products)} products from {pdf.filename}",
            count=len(result.products),
            products=[ProductOut.model_validate(p) for p in result.products],
            extracted_text=result.extracted_text,
        )

    except (ParseError, ProductIngestError):
        # Re-raise to be caught by exception handlers
        raise
    except Exception as e:
        logger.error(f"Unexpected error importing {pdf.filename}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Internal server error: {str(e)}",
        )
    finally:
        await pdf.close()
