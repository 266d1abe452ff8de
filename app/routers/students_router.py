# /app/routers/students_router.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..models.student_model import PaymentCreate, StudentPayload, StudentProfile, StudentSummary, StudentUpdate
from ..services import student_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


def _not_found(student_id: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Student with ID {student_id} not found")


@router.get("", response_model=List[StudentProfile], summary="Get All Students")
def get_all_students(db: DatabaseService = Depends(get_db_service)):
    return student_service.list_students(db)


@router.get("/summary", response_model=StudentSummary, summary="Get Payment Totals and Free Seats")
def get_student_summary(db: DatabaseService = Depends(get_db_service)):
    return student_service.get_student_summary(db)


@router.post("", response_model=StudentProfile, status_code=status.HTTP_201_CREATED, summary="Create a Student")
def create_student(payload: StudentPayload, db: DatabaseService = Depends(get_db_service)):
    try:
        return student_service.create_student(payload, db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/{student_id}", response_model=StudentProfile, summary="Get a Single Student")
def get_student(student_id: str, db: DatabaseService = Depends(get_db_service)):
    student = student_service.get_student(student_id, db)
    if student is None:
        raise _not_found(student_id)
    return student


@router.put("/{student_id}", response_model=StudentProfile, summary="Update a Student")
def update_student(student_id: str, payload: StudentUpdate, db: DatabaseService = Depends(get_db_service)):
    try:
        student = student_service.update_student(student_id, payload, db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if student is None:
        raise _not_found(student_id)
    return student


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a Student")
def delete_student(student_id: str, db: DatabaseService = Depends(get_db_service)):
    if not student_service.delete_student(student_id, db):
        raise _not_found(student_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{student_id}/payments", response_model=StudentProfile, status_code=status.HTTP_201_CREATED,
             summary="Record a Payment")
def record_payment(student_id: str, payment: PaymentCreate, db: DatabaseService = Depends(get_db_service)):
    student = student_service.record_payment(student_id, payment, db)
    if student is None:
        raise _not_found(student_id)
    return student
