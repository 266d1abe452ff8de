# /app/routers/public_router.py

"""
Unauthenticated, read-only endpoints for the public website plus the
registration form. Text fields are resolved for the `lang` query parameter
(`uz`, `ru` or `en`; anything else falls back to Uzbek).
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..models.content_model import RegistrationRequest
from ..models.dashboard_model import SiteStats
from ..services import content_service, dashboard_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()

_PUBLIC_LISTS = ("courses", "events", "achievements", "testimonials", "categories", "schedule")


@router.get("/teachers", response_model=List[Dict[str, Any]], summary="Get Active Teachers")
def get_public_teachers(lang: str = Query(default="uz"), db: DatabaseService = Depends(get_db_service)):
    return content_service.public_teachers(db, locale=lang)


@router.get("/content", response_model=Dict[str, str], summary="Get Content Blocks by Key")
def get_content_blocks(lang: str = Query(default="uz"), db: DatabaseService = Depends(get_db_service)):
    return content_service.content_blocks(db, locale=lang)


@router.get("/stats", response_model=SiteStats, summary="Get Headline Counts")
async def get_public_stats(db: DatabaseService = Depends(get_db_service)):
    return await dashboard_service.get_site_stats(db)


@router.post("/register", status_code=status.HTTP_201_CREATED, summary="Submit a Registration")
def register(request: RegistrationRequest, db: DatabaseService = Depends(get_db_service)):
    try:
        row = content_service.register_application(request, db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return {"id": row["id"], "status": row["status"]}


@router.get("/{resource}", response_model=List[Dict[str, Any]], summary="Get Published Content")
def get_public_list(resource: str, lang: str = Query(default="uz"), db: DatabaseService = Depends(get_db_service)):
    if resource not in _PUBLIC_LISTS:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown resource '{resource}'")
    return content_service.public_list(resource, db, locale=lang)
