# /app/db/base.py

# This file acts as a central registry for all our SQLAlchemy models.
# By importing them all here, we ensure that `Base.metadata` knows about every
# table before `create_all` runs or the record store resolves a table by name.

from .base_class import Base

from .models.academy_models import Teacher, Group, Student, PaymentHistory
from .models.finance_models import Revenue, Expense
from .models.content_models import (
    Course,
    Application,
    Event,
    Achievement,
    Testimonial,
    Category,
    ScheduleEntry,
    ContentBlock,
    Admin,
)
