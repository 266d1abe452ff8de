# /app/db/models/finance_models.py

"""
Manually entered ledger lines. Neither table is derived from student or group
data; both are combined with it only at aggregation time.
"""

from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func

from ..base_class import Base, new_id
from .academy_models import MONEY


class Revenue(Base):
    __tablename__ = "revenue"

    id = Column(String, primary_key=True, index=True, default=new_id)
    source = Column(String, nullable=False)
    amount = Column(MONEY, nullable=False, default=0)
    month = Column(String(7), nullable=False, index=True)  # YYYY-MM
    note = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(String, primary_key=True, index=True, default=new_id)
    category = Column(String, nullable=False)
    amount = Column(MONEY, nullable=False, default=0)
    month = Column(String(7), nullable=False, index=True)  # YYYY-MM
    description = Column(String, nullable=True)
    type = Column(String, nullable=False, default="variable")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
