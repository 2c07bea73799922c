"""Pydantic request/response models for the REST API."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, computed_field, field_validator

from .media import video_embed_url, video_thumbnail_url


class ORMModel(BaseModel):
    """Base for responses built from SQLAlchemy rows."""
    model_config = ConfigDict(from_attributes=True)


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str


class ErrorResponse(BaseModel):
    """Error response."""
    error: str
    detail: str | None = None


class MessageResponse(BaseModel):
    """Plain acknowledgement."""
    message: str


class ProductOut(ORMModel):
    id: int
    name: str
    description: str | None = None
    image_path: str | None = None
    category: str | None = None
    pdf_path: str | None = None
    created_at: datetime
    updated_at: datetime


class NewsOut(ORMModel):
    id: int
    title: str
    summary: str | None = None
    content: str | None = None
    image_path: str | None = None
    video_path: str | None = None
    video_link: str | None = None
    created_at: datetime
    updated_at: datetime

    @computed_field
    @property
    def video_embed_url(self) -> str | None:
        return video_embed_url(self.video_link)

    @computed_field
    @property
    def video_thumbnail_url(self) -> str | None:
        return video_thumbnail_url(self.video_link)


class ReferenceOut(ORMModel):
    id: int
    name: str
    description: str | None = None
    location: str | None = None
    image_path: str | None = None
    created_at: datetime
    updated_at: datetime


class CategoryIn(BaseModel):
    """Create/update category request."""
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None


class CategoryOut(ORMModel):
    id: int
    name: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime


class TeamMemberOut(ORMModel):
    id: int
    name: str
    position: str | None = None
    department: str | None = None
    image_path: str | None = None
    parent_id: int | None = None
    sort_order: int
    created_at: datetime
    updated_at: datetime


class TeamNode(TeamMemberOut):
    """Team member with the members reporting to them."""
    children: list[TeamNode] = Field(default_factory=list)


class ContactMessageIn(BaseModel):
    """Contact form submission."""
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    message: str = Field(min_length=1)


class ContactMessageOut(ORMModel):
    id: int
    name: str
    email: str
    message: str
    is_read: bool
    created_at: datetime


class CompanyInfoIn(BaseModel):
    """Partial company profile update."""
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    founded_year: int | None = Field(default=None, ge=1800, le=2100)
    about_text: str | None = None
    mission: str | None = None
    vision: str | None = None
    address: str | None = None
    phone: str | None = None
    email: EmailStr | None = None

    @field_validator("name")
    @classmethod
    def name_not_null(cls, value: str | None) -> str:
        # Unset keeps the stored name; an explicit null is rejected
        if value is None:
            raise ValueError("name cannot be null")
        return value


class CompanyInfoOut(ORMModel):
    name: str
    description: str | None = None
    founded_year: int | None = None
    about_text: str | None = None
    mission: str | None = None
    vision: str | None = None
    address: str | None = None
    phone: str | None = None
    email: str | None = None
    updated_at: datetime


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    success: bool


class UploadResponse(BaseModel):
    """Generic upload response (camelCase kept for the frontend)."""
    imageUrl: str


class PdfImportResponse(BaseModel):
    """Result of a catalog PDF import."""
    message: str
    count: int
    products: list[ProductOut]
    extracted_text: str
