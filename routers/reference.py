# routers/reference.py
from fastapi import APIRouter, Depends

from models.reference import ReferenceData
from .deps import get_reference_data

router = APIRouter(prefix="/api", tags=["reference"])


@router.get("/social-media-links")
async def social_media_links(reference: ReferenceData = Depends(get_reference_data)):
    return reference.social_media_links


@router.get("/site-icons")
async def site_icons(reference: ReferenceData = Depends(get_reference_data)):
    return reference.site_icons
