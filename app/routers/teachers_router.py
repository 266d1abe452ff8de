# /app/routers/teachers_router.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..models.finance_model import SalarySummary
from ..models.teacher_model import TeacherPayload, TeacherProfile, TeacherUpdate
from ..services import teacher_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get("", response_model=List[TeacherProfile], summary="Get All Teachers with Their Groups")
def get_all_teachers(db: DatabaseService = Depends(get_db_service)):
    return teacher_service.list_teachers(db)


@router.get("/salaries", response_model=SalarySummary, summary="Get Payroll Totals")
def get_salary_summary(db: DatabaseService = Depends(get_db_service)):
    return teacher_service.get_salary_summary(db)


@router.post("", response_model=TeacherProfile, status_code=status.HTTP_201_CREATED, summary="Create a Teacher")
def create_teacher(payload: TeacherPayload, db: DatabaseService = Depends(get_db_service)):
    return teacher_service.create_teacher(payload, db)


@router.get("/{teacher_id}", response_model=TeacherProfile, summary="Get a Single Teacher")
def get_teacher(teacher_id: str, db: DatabaseService = Depends(get_db_service)):
    teacher = teacher_service.get_teacher(teacher_id, db)
    if teacher is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Teacher with ID {teacher_id} not found")
    return teacher


@router.put("/{teacher_id}", response_model=TeacherProfile, summary="Update a Teacher")
def update_teacher(teacher_id: str, payload: TeacherUpdate, db: DatabaseService = Depends(get_db_service)):
    try:
        teacher = teacher_service.update_teacher(teacher_id, payload, db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if teacher is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Teacher with ID {teacher_id} not found")
    return teacher


@router.delete("/{teacher_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Teacher")
def delete_teacher(teacher_id: str, db: DatabaseService = Depends(get_db_service)):
    if not teacher_service.delete_teacher(teacher_id, db):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Teacher with ID {teacher_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
