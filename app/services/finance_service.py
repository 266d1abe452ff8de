# /app/services/finance_service.py

"""
Revenue and expense ledgers plus the all-time finance breakdown.

The ledger tables were added to the schema after the rest of it, so every read
here treats a missing table as an empty ledger instead of an error.
"""

from datetime import datetime, timezone
from typing import List, Optional

from ..core.logging_config import get_logger
from ..models.finance_model import (
    ExpenseCreate,
    ExpenseRecord,
    FinanceBreakdown,
    LedgerSummary,
    RevenueCreate,
    RevenueRecord,
)
from .admin_helpers import mappers, metrics
from .database_service import DatabaseService

logger = get_logger("finance")


def _current_month(now: Optional[datetime]) -> str:
    return metrics.month_key(now or datetime.now(timezone.utc))


# --- Revenue ---

def list_revenue(db: DatabaseService) -> List[RevenueRecord]:
    rows = db.select_or_empty("revenue", order_by="month", descending=True)
    return [mappers.revenue_from_db(row) for row in rows]


def add_revenue(payload: RevenueCreate, db: DatabaseService) -> RevenueRecord:
    row = db.insert("revenue", mappers.revenue_to_db(payload))
    logger.info("Added revenue %s (%s, %s)", row["id"], payload.source, payload.month)
    return mappers.revenue_from_db(row)


def delete_revenue(record_id: str, db: DatabaseService) -> bool:
    return db.delete("revenue", {"id": record_id}) > 0


def get_revenue_summary(db: DatabaseService, now: Optional[datetime] = None) -> LedgerSummary:
    return metrics.summarize_ledger(list_revenue(db), _current_month(now))


# --- Expenses ---

def list_expenses(db: DatabaseService) -> List[ExpenseRecord]:
    rows = db.select_or_empty("expenses", order_by="month", descending=True)
    return [mappers.expense_from_db(row) for row in rows]


def add_expense(payload: ExpenseCreate, db: DatabaseService) -> ExpenseRecord:
    row = db.insert("expenses", mappers.expense_to_db(payload))
    logger.info("Added expense %s (%s, %s)", row["id"], payload.category, payload.month)
    return mappers.expense_from_db(row)


def delete_expense(record_id: str, db: DatabaseService) -> bool:
    return db.delete("expenses", {"id": record_id}) > 0


def get_expense_summary(db: DatabaseService, now: Optional[datetime] = None) -> LedgerSummary:
    return metrics.summarize_ledger(list_expenses(db), _current_month(now))


# --- Breakdown ---

def get_finance_breakdown(db: DatabaseService) -> FinanceBreakdown:
    """Active payroll plus every recorded expense. Complete even when a table is missing."""
    teachers = db.safe_select("teachers", columns=["monthly_salary", "status"])
    expenses = db.safe_select("expenses", order_by="month", descending=True)
    return metrics.compute_finance_breakdown(teachers, expenses)
