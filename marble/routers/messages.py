"""Contact form messages."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from marble import crud, models
from marble.db import get_session
from marble.schemas import ContactMessageIn, ContactMessageOut, MessageResponse

router = APIRouter(prefix="/api/messages", tags=["messages"])
logger = logging.getLogger(__name__)


@router.get("", response_model=list[ContactMessageOut])
async def list_messages(session: AsyncSession = Depends(get_session)):
    return await crud.list_rows(
        session, models.ContactMessage, models.ContactMessage.created_at.desc(), models.ContactMessage.id.desc()
    )


@router.post("", response_model=ContactMessageOut)
async def create_message(request: ContactMessageIn, session: AsyncSession = Depends(get_session)):
    logger.info(f"Contact message from {request.email}")
    return await crud.create_row(session, models.ContactMessage, request.model_dump())


@router.patch("/{message_id}/read", response_model=ContactMessageOut)
async def mark_message_read(message_id: int, session: AsyncSession = Depends(get_session)):
    message = await crud.get_or_404(session, models.ContactMessage, message_id)
    return await crud.update_row(session, message, {"is_read": True})


@router.delete("/{message_id}", response_model=MessageResponse)
async def delete_message(message_id: int, session: AsyncSession = Depends(get_session)):
    await crud.delete_row(session, models.ContactMessage, message_id)
    return MessageResponse(message="Message deleted successfully")
