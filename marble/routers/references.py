"""Reference (completed project) endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from marble import crud, models
from marble.db import get_session
from marble.schemas import MessageResponse, ReferenceOut
from marble.storage import save_upload

router = APIRouter(prefix="/api/references", tags=["references"])

ENTITY = "references"


@router.get("", response_model=list[ReferenceOut])
async def list_references(session: AsyncSession = Depends(get_session)):
    return await crud.list_rows(
        session, models.Reference, models.Reference.created_at.desc(), models.Reference.id.desc()
    )


@router.get("/{reference_id}", response_model=ReferenceOut)
async def get_reference(reference_id: int, session: AsyncSession = Depends(get_session)):
    return await crud.get_or_404(session, models.Reference, reference_id)


@router.post("", response_model=ReferenceOut)
async def create_reference(
    name: str = Form(...),
    description: str | None = Form(None),
    location: str | None = Form(None),
    image: UploadFile | None = File(None),
    session: AsyncSession = Depends(get_session),
):
    image_path = await save_upload(image, ENTITY) if image and image.filename else None
    return await crud.create_row(
        session,
        models.Reference,
        {"name": name, "description": description, "location": location, "image_path": image_path},
    )


@router.put("/{reference_id}", response_model=ReferenceOut)
async def update_reference(
    reference_id: int,
    name: str | None = Form(None),
    description: str | None = Form(None),
    location: str | None = Form(None),
    image_path: str | None = Form(None),
    image: UploadFile | None = File(None),
    session: AsyncSession = Depends(get_session),
):
    reference = await crud.get_or_404(session, models.Reference, reference_id)
    if image and image.filename:
        image_path = await save_upload(image, ENTITY)

    return await crud.update_row(
        session,
        reference,
        crud.sent_fields(name=name, description=description, location=location, image_path=image_path),
    )


@router.delete("/{reference_id}", response_model=MessageResponse)
async def delete_reference(reference_id: int, session: AsyncSession = Depends(get_session)):
    await crud.delete_row(session, models.Reference, reference_id)
    return MessageResponse(message="Reference deleted successfully")
