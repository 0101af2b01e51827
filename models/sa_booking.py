import builtins
import enum
from datetime import date
from typing import Optional
from sqlalchemy import Column, Integer, String, Numeric, Date, Text, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base, LandlordOwnedMixin, TimestampMixin


class BookingStatus(str, enum.Enum):
     CONFIRMED = "confirmed"
     COMPLETED = "completed"
     CANCELLED = "cancelled"


class BookingPaymentStatus(str, enum.Enum):
     """Whether the platform payout has arrived."""
     PENDING = "pending"
     RECEIVED = "received"


class PMPaymentStatus(str, enum.Enum):
     """Whether the property manager's share has been paid."""
     PENDING = "pending"
     PAID = "paid"


class SABooking(LandlordOwnedMixin, TimestampMixin, Base):
     """
     SABooking model - a short-stay booking of a serviced-accommodation property.
     """
     __tablename__ = "sa_bookings"

     id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(
          Integer,
          ForeignKey("properties.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )

     # Reservation
     reservation_id = Column(String(100), nullable=True)
     platform = Column(String(50), default="airbnb", nullable=False)
     guest_name = Column(String(255), nullable=True)
     guest_email = Column(String(255), nullable=True)
     guest_phone = Column(String(50), nullable=True)
     booking_date = Column(Date, nullable=True)
     check_in = Column(Date, nullable=False, index=True)
     check_out = Column(Date, nullable=False)
     status = Column(String(20), default=BookingStatus.CONFIRMED.value, nullable=False)

     # Revenue
     currency = Column(String(3), default="GBP", nullable=False)
     nightly_rate = Column(Numeric(10, 2), nullable=True)
     total_nights = Column(Integer, default=0, nullable=False)
     gross_booking_value = Column(Numeric(12, 2), default=0, nullable=False)
     platform_fee = Column(Numeric(12, 2), default=0, nullable=False)
     net_revenue = Column(Numeric(12, 2), default=0, nullable=False)
     payment_status = Column(String(20), default=BookingPaymentStatus.PENDING.value, nullable=False)
     received_date = Column(Date, nullable=True)

     # Property manager deductions
     cleaning_fee = Column(Numeric(10, 2), default=0, nullable=False)
     pm_fee_amount = Column(Numeric(12, 2), default=0, nullable=False)
     total_pm_deduction = Column(Numeric(12, 2), default=0, nullable=False)
     pm_payment_status = Column(String(20), default=PMPaymentStatus.PENDING.value, nullable=False)
     pm_paid_date = Column(Date, nullable=True)

     notes = Column(Text, nullable=True)

     # Relationships
     property = relationship("Property", back_populates="bookings")

     def __repr__(self):
          return f"<SABooking(id={self.id}, property_id={self.property_id}, check_in={self.check_in}, status='{self.status}')>"

     @builtins.property
     def is_cancelled(self) -> bool:
          return self.status == BookingStatus.CANCELLED.value

     def mark_received(self, received_on: Optional[date] = None) -> None:
          """Mark the platform payout as received."""
          self.payment_status = BookingPaymentStatus.RECEIVED.value
          self.received_date = received_on or date.today()

     def mark_pm_paid(self, paid_on: Optional[date] = None) -> None:
          """Mark the property manager's share as paid."""
          self.pm_payment_status = PMPaymentStatus.PAID.value
          self.pm_paid_date = paid_on or date.today()
