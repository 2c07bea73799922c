"""Category endpoints (JSON bodies)."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from marble import crud, models
from marble.db import get_session
from marble.schemas import CategoryIn, CategoryOut, MessageResponse

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=list[CategoryOut])
async def list_categories(session: AsyncSession = Depends(get_session)):
    return await crud.list_rows(session, models.Category, models.Category.name.asc())


@router.get("/{category_id}", response_model=CategoryOut)
async def get_category(category_id: int, session: AsyncSession = Depends(get_session)):
    return await crud.get_or_404(session, models.Category, category_id)


@router.post("", response_model=CategoryOut)
async def create_category(request: CategoryIn, session: AsyncSession = Depends(get_session)):
    return await crud.create_row(session, models.Category, request.model_dump())


@router.put("/{category_id}", response_model=CategoryOut)
async def update_category(
    category_id: int,
    request: CategoryIn,
    session: AsyncSession = Depends(get_session),
):
    category = await crud.get_or_404(session, models.Category, category_id)
    return await crud.update_row(session, category, request.model_dump(exclude_unset=True))


@router.delete("/{category_id}", response_model=MessageResponse)
async def delete_category(category_id: int, session: AsyncSession = Depends(get_session)):
    # Products keep their category string
    await crud.delete_row(session, models.Category, category_id)
    return MessageResponse(message="Category deleted successfully")
