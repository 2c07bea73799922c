"""News endpoints."""
from __future__ import annotations

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from marble import crud, models
from marble.db import get_session
from marble.media import is_video_link
from marble.schemas import MessageResponse, NewsOut
from marble.storage import save_upload

router = APIRouter(prefix="/api/news", tags=["news"])
logger = logging.getLogger(__name__)

ENTITY = "news"


def _check_video_link(video_link: str | None) -> None:
    if video_link and not is_video_link(video_link):
        logger.warning(f"Unsupported video link stored as-is: {video_link}")


@router.get("", response_model=list[NewsOut])
async def list_news(session: AsyncSession = Depends(get_session)):
    return await crud.list_rows(session, models.News, models.News.created_at.desc(), models.News.id.desc())


@router.get("/{news_id}", response_model=NewsOut)
async def get_news(news_id: int, session: AsyncSession = Depends(get_session)):
    return await crud.get_or_404(session, models.News, news_id)


@router.post("", response_model=NewsOut)
async def create_news(
    title: str = Form(...),
    summary: str | None = Form(None),
    content: str | None = Form(None),
    video_link: str | None = Form(None),
    created_at: datetime | None = Form(None),
    image: UploadFile | None = File(None),
    video: UploadFile | None = File(None),
    session: AsyncSession = Depends(get_session),
):
    _check_video_link(video_link)
    values = {
        "title": title,
        "summary": summary,
        "content": content,
        "video_link": video_link or None,
        "image_path": await save_upload(image, ENTITY) if image and image.filename else None,
        "video_path": await save_upload(video, ENTITY) if video and video.filename else None,
    }
    if created_at is not None:
        values["created_at"] = created_at

    return await crud.create_row(session, models.News, values)


@router.put("/{news_id}", response_model=NewsOut)
async def update_news(
    news_id: int,
    title: str | None = Form(None),
    summary: str | None = Form(None),
    content: str | None = Form(None),
    video_link: str | None = Form(None),
    created_at: datetime | None = Form(None),
    image_path: str | None = Form(None),
    video_path: str | None = Form(None),
    image: UploadFile | None = File(None),
    video: UploadFile | None = File(None),
    session: AsyncSession = Depends(get_session),
):
    news = await crud.get_or_404(session, models.News, news_id)
    _check_video_link(video_link)

    if image and image.filename:
        image_path = await save_upload(image, ENTITY)
    if video and video.filename:
        video_path = await save_upload(video, ENTITY)

    return await crud.update_row(
        session,
        news,
        crud.sent_fields(
            title=title,
            summary=summary,
            content=content,
            video_link=video_link,
            created_at=created_at,
            image_path=image_path,
            video_path=video_path,
        ),
    )


@router.delete("/{news_id}", response_model=MessageResponse)
async def delete_news(news_id: int, session: AsyncSession = Depends(get_session)):
    await crud.delete_row(session, models.News, news_id)
    return MessageResponse(message="News deleted successfully")
