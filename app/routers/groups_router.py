# /app/routers/groups_router.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..models.group_model import GroupPayload, GroupProfile, GroupSummary, GroupUpdate
from ..models.student_model import StudentProfile
from ..services import group_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


def _not_found(group_id: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Group with ID {group_id} not found")


@router.get("", response_model=List[GroupProfile], summary="Get All Groups")
def get_all_groups(db: DatabaseService = Depends(get_db_service)):
    return group_service.list_groups(db)


@router.get("/summary", response_model=GroupSummary, summary="Get Group Totals")
def get_group_summary(db: DatabaseService = Depends(get_db_service)):
    return group_service.get_group_summary(db)


@router.post("", response_model=GroupProfile, status_code=status.HTTP_201_CREATED, summary="Create a Group")
def create_group(payload: GroupPayload, db: DatabaseService = Depends(get_db_service)):
    try:
        return group_service.create_group(payload, db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/{group_id}", response_model=GroupProfile, summary="Get a Single Group")
def get_group(group_id: str, db: DatabaseService = Depends(get_db_service)):
    group = group_service.get_group(group_id, db)
    if group is None:
        raise _not_found(group_id)
    return group


@router.get("/{group_id}/students", response_model=List[StudentProfile], summary="Get the Members of a Group")
def get_group_students(group_id: str, db: DatabaseService = Depends(get_db_service)):
    students = group_service.list_group_students(group_id, db)
    if students is None:
        raise _not_found(group_id)
    return students


@router.put("/{group_id}", response_model=GroupProfile, summary="Update a Group")
def update_group(group_id: str, payload: GroupUpdate, db: DatabaseService = Depends(get_db_service)):
    try:
        group = group_service.update_group(group_id, payload, db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if group is None:
        raise _not_found(group_id)
    return group


@router.delete("/{group_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Group")
def delete_group(group_id: str, db: DatabaseService = Depends(get_db_service)):
    if not group_service.delete_group(group_id, db):
        raise _not_found(group_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
