from sqlalchemy import Column, DateTime
from sqlalchemy.sql import func


class TimestampMixin:
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(),
                        onupdate=func.now(), nullable=False)


class CreatedAtMixin:
    """Mixin for append-only rows that are never updated"""
    created_at = Column(DateTime, default=func.now(), nullable=False, index=True)
