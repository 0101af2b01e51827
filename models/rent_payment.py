import builtins
import enum
from datetime import date
from decimal import Decimal
from typing import Optional
from sqlalchemy import Column, Integer, String, Numeric, Date, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base, LandlordOwnedMixin, TimestampMixin


class RentPaymentStatus(str, enum.Enum):
     """Enumeration for rent payment status."""
     PENDING = "pending"
     PAID = "paid"
     LATE = "late"
     MISSED = "missed"


class RentPayment(LandlordOwnedMixin, TimestampMixin, Base):
     """
     RentPayment model - one rent obligation of a tenancy for a calendar month.

     billing_period is the first day of the month the payment belongs to;
     a tenancy has at most one payment per billing period.
     """
     __tablename__ = "rent_payments"
     __table_args__ = (
          UniqueConstraint("tenancy_id", "billing_period", name="uq_rent_payments_tenancy_period"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)

     # Foreign keys
     tenancy_id = Column(
          Integer,
          ForeignKey("tenancies.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )
     property_id = Column(Integer, ForeignKey("properties.id"), nullable=False, index=True)

     # Obligation
     billing_period = Column(Date, nullable=False, index=True)
     due_date = Column(Date, nullable=False, index=True)
     amount_due = Column(Numeric(12, 2), nullable=False)
     amount_paid = Column(Numeric(12, 2), default=0, nullable=False)
     status = Column(String(20), default=RentPaymentStatus.PENDING.value, nullable=False, index=True)

     # Settlement
     paid_date = Column(Date, nullable=True)
     payment_method = Column(String(50), nullable=True)
     payment_reference = Column(String(255), nullable=True)
     notes = Column(Text, nullable=True)

     # Relationships
     tenancy = relationship("Tenancy", back_populates="rent_payments")
     property = relationship("Property")

     def __repr__(self):
          return f"<RentPayment(id={self.id}, tenancy_id={self.tenancy_id}, due_date={self.due_date}, status='{self.status}')>"

     @builtins.property
     def outstanding(self) -> Decimal:
          return Decimal(self.amount_due or 0) - Decimal(self.amount_paid or 0)

     def mark_as_paid(self, amount: Decimal, paid_on: Optional[date] = None) -> None:
          """Record a settlement of this obligation."""
          self.amount_paid = amount
          self.paid_date = paid_on or date.today()
          self.status = RentPaymentStatus.PAID.value
