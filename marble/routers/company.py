"""Company profile (single row, created with defaults on first read)."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from marble import crud, models
from marble.db import get_session
from marble.schemas import CompanyInfoIn, CompanyInfoOut

router = APIRouter(prefix="/api/company-info", tags=["company"])

COMPANY_INFO_ID = 1

DEFAULT_COMPANY_INFO = {
    "name": "AC Madencilik",
    "description": "Mermer ve taş ürünleri satışı ve ihracatı ile faaliyet gösteren profesyonel bir madencilik şirketi.",
    "founded_year": 2008,
    "about_text": (
        "AC Madencilik, 2008 yılında kurulan mermer sektöründeki öncü şirketlerden biridir. "
        "Yıllar boyunca kazandığı deneyim ve modern teknolojilerle birlikte sektörde öne çıkmıştır."
    ),
    "mission": "Mekanları zamansız sanat eserlerine dönüştüren olağanüstü mermer ürünleri sunmak.",
    "vision": "Mermer mükemmelliği ve yeniliği için küresel standart olmak.",
    "address": "Bandırma, Balıkesir",
    "phone": "+90 266 715 42 80",
    "email": "info@acmadencilik.com.tr",
}


async def get_or_create_company_info(session: AsyncSession) -> models.CompanyInfo:
    info = await session.get(models.CompanyInfo, COMPANY_INFO_ID)
    if info is None:
        info = await crud.create_row(
            session, models.CompanyInfo, {"id": COMPANY_INFO_ID, **DEFAULT_COMPANY_INFO}
        )
    return info


@router.get("", response_model=CompanyInfoOut)
async def get_company_info(session: AsyncSession = Depends(get_session)):
    return await get_or_create_company_info(session)


@router.put("", response_model=CompanyInfoOut)
async def update_company_info(request: CompanyInfoIn, session: AsyncSession = Depends(get_session)):
    info = await get_or_create_company_info(session)
    return await crud.update_row(session, info, request.model_dump(exclude_unset=True))
