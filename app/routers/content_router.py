# /app/routers/content_router.py

"""
One set of CRUD routes for every public-site content resource, e.g.
`/api/content/courses`, `/api/content/events/{record_id}`. The resource name is
resolved against the content service registry; unknown names are a 404.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status

from ..services import content_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


def _resource(resource: str) -> str:
    if resource not in content_service.RESOURCES:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown resource '{resource}'")
    return resource


def _not_found(resource: str, record_id: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{resource} record {record_id} not found")


@router.get("/{resource}", response_model=List[Dict[str, Any]], summary="List a Content Resource")
def list_records(resource: str = Depends(_resource), db: DatabaseService = Depends(get_db_service)):
    return content_service.list_records(resource, db)


@router.post("/{resource}", status_code=status.HTTP_201_CREATED, summary="Create a Content Record")
def create_record(
    resource: str = Depends(_resource),
    data: Dict[str, Any] = Body(...),
    db: DatabaseService = Depends(get_db_service),
):
    try:
        return content_service.create_record(resource, data, db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/{resource}/{record_id}", summary="Get a Content Record")
def get_record(record_id: str, resource: str = Depends(_resource), db: DatabaseService = Depends(get_db_service)):
    record = content_service.get_record(resource, record_id, db)
    if record is None:
        raise _not_found(resource, record_id)
    return record


@router.put("/{resource}/{record_id}", summary="Update a Content Record")
def update_record(
    record_id: str,
    resource: str = Depends(_resource),
    data: Dict[str, Any] = Body(...),
    db: DatabaseService = Depends(get_db_service),
):
    try:
        record = content_service.update_record(resource, record_id, data, db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if record is None:
        raise _not_found(resource, record_id)
    return record


@router.delete("/{resource}/{record_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Content Record")
def delete_record(record_id: str, resource: str = Depends(_resource), db: DatabaseService = Depends(get_db_service)):
    if not content_service.delete_record(resource, record_id, db):
        raise _not_found(resource, record_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
