"""Admin helpers: credential check and the generic image upload."""
from __future__ import annotations

import logging
import secrets

from fastapi import APIRouter, File, HTTPException, UploadFile, status

from marble.config import settings
from marble.schemas import LoginRequest, LoginResponse, UploadResponse
from marble.storage import save_upload

router = APIRouter(prefix="/api", tags=["admin"])
logger = logging.getLogger(__name__)


@router.post("/auth/login", response_model=LoginResponse)
async def login(request: LoginRequest) -> LoginResponse:
    """Compare against the configured admin credentials.

    There is no session or token; the frontend keeps its own flag.
    """
    valid = secrets.compare_digest(
        request.username.encode(), settings.admin.username.encode()
    ) and secrets.compare_digest(
        request.password.encode(), settings.admin.password.encode()
    )
    if not valid:
        logger.warning(f"Failed admin login for {request.username!r}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )
    return LoginResponse(success=True)


@router.post("/upload", response_model=UploadResponse)
async def upload_image(image: UploadFile | None = File(None)) -> UploadResponse:
    if image is None or not image.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file uploaded",
        )
    return UploadResponse(imageUrl=await save_upload(image, "uploads"))
