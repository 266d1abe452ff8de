# /app/db/base_class.py

import re
import uuid

from sqlalchemy.orm import DeclarativeBase, declared_attr


def new_id() -> str:
    """Primary keys are opaque hex strings, generated client-side."""
    return uuid.uuid4().hex


class Base(DeclarativeBase):
    """
    Declarative base for every table in the academy schema.

    Models that do not declare `__tablename__` get a snake_case, pluralised
    name derived from the class name (`Teacher` -> `teachers`).
    """

    @declared_attr.directive
    def __tablename__(cls) -> str:
        snake = re.sub(r"(?<!^)(?=[A-Z])", "_", cls.__name__).lower()
        return f"{snake}s"
