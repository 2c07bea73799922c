"""Generic async CRUD helpers shared by the routers.

Reusable from both the request handlers and the ingestion pipeline.
"""
from __future__ import annotations

from typing import Any, Mapping, Sequence, TypeVar

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Base

ModelT = TypeVar("ModelT", bound=Base)


async def list_rows(session: AsyncSession, model: type[ModelT], *order_by: Any) -> Sequence[ModelT]:
    """All rows of ``model`` in the given order."""
    result = await session.execute(select(model).order_by(*order_by))
    return result.scalars().all()


async def get_or_404(session: AsyncSession, model: type[ModelT], row_id: int) -> ModelT:
    """Fetch a row by primary key or raise 404."""
    row = await session.get(model, row_id)
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{model.__name__} {row_id} not found",
        )
    return row


async def create_row(
    session: AsyncSession,
    model: type[ModelT],
    values: Mapping[str, Any],
    *,
    commit: bool = True,
) -> ModelT:
    """Insert a row. With ``commit=False`` the row is only flushed."""
    row = model(**dict(values))
    session.add(row)
    if commit:
        await session.commit()
        await session.refresh(row)
    else:
        await session.flush()
    return row


def sent_fields(**fields: Any) -> dict[str, Any]:
    """Drop form fields the client left out (None)."""
    return {key: value for key, value in fields.items() if value is not None}


async def update_row(session: AsyncSession, row: ModelT, values: Mapping[str, Any]) -> ModelT:
    """Apply every given value, None included."""
    for key, value in values.items():
        setattr(row, key, value)
    await session.commit()
    await session.refresh(row)
    return row


async def delete_row(session: AsyncSession, model: type[ModelT], row_id: int) -> None:
    """Delete by primary key or raise 404."""
    row = await get_or_404(session, model, row_id)
    await session.delete(row)
    await session.commit()
