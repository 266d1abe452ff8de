# /app/routers/finance_router.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..models.finance_model import (
    ExpenseCreate,
    ExpenseRecord,
    FinanceBreakdown,
    LedgerSummary,
    RevenueCreate,
    RevenueRecord,
)
from ..services import finance_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get("/breakdown", response_model=FinanceBreakdown, summary="Get Payroll and Expense Totals")
def get_finance_breakdown(db: DatabaseService = Depends(get_db_service)):
    return finance_service.get_finance_breakdown(db)


# --- Revenue ---

@router.get("/revenue", response_model=List[RevenueRecord], summary="Get All Revenue Records")
def get_revenue(db: DatabaseService = Depends(get_db_service)):
    return finance_service.list_revenue(db)


@router.get("/revenue/summary", response_model=LedgerSummary, summary="Get Revenue Totals")
def get_revenue_summary(db: DatabaseService = Depends(get_db_service)):
    return finance_service.get_revenue_summary(db)


@router.post("/revenue", response_model=RevenueRecord, status_code=status.HTTP_201_CREATED, summary="Add Revenue")
def add_revenue(payload: RevenueCreate, db: DatabaseService = Depends(get_db_service)):
    return finance_service.add_revenue(payload, db)


@router.delete("/revenue/{record_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Revenue")
def delete_revenue(record_id: str, db: DatabaseService = Depends(get_db_service)):
    if not finance_service.delete_revenue(record_id, db):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Revenue record {record_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --- Expenses ---

@router.get("/expenses", response_model=List[ExpenseRecord], summary="Get All Expenses")
def get_expenses(db: DatabaseService = Depends(get_db_service)):
    return finance_service.list_expenses(db)


@router.get("/expenses/summary", response_model=LedgerSummary, summary="Get Expense Totals")
def get_expense_summary(db: DatabaseService = Depends(get_db_service)):
    return finance_service.get_expense_summary(db)


@router.post("/expenses", response_model=ExpenseRecord, status_code=status.HTTP_201_CREATED, summary="Add an Expense")
def add_expense(payload: ExpenseCreate, db: DatabaseService = Depends(get_db_service)):
    return finance_service.add_expense(payload, db)


@router.delete("/expenses/{record_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete an Expense")
def delete_expense(record_id: str, db: DatabaseService = Depends(get_db_service)):
    if not finance_service.delete_expense(record_id, db):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Expense {record_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
