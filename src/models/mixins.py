"""Mixins for SQLAlchemy models."""

from sqlalchemy import Column, DateTime, func


class CreationDateMixin:
    """Mixin to add a date_creation column set by the database."""

    date_creation = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class ModificationDateMixin(CreationDateMixin):
    """Mixin to add date_creation and date_modification columns."""

    date_modification = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
