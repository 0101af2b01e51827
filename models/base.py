from sqlalchemy.orm import DeclarativeBase
from sqlalchemy import Column, String, DateTime, func


class Base(DeclarativeBase):
     """
     Base class for all SQLAlchemy models.
     Provides common configuration and mixins.
     """


class LandlordOwnedMixin:
     """
     Every row belongs to exactly one landlord (the auth provider's user id).
     """
     landlord_id = Column(String(36), nullable=False, index=True)


class TimestampMixin:
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)


class SoftDeleteMixin:
     """Rows are marked with deleted_at instead of being removed."""
     deleted_at = Column(DateTime, nullable=True, index=True)

     @property
     def is_deleted(self) -> bool:
          return self.deleted_at is not None

     def soft_delete(self) -> None:
          self.deleted_at = func.now()
