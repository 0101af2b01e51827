import builtins
import enum
from sqlalchemy import Column, Integer, String, Numeric, Date, Boolean, Text, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from .base import Base, LandlordOwnedMixin, TimestampMixin, SoftDeleteMixin


class TenancyStatus(str, enum.Enum):
     """Lifecycle state of a tenancy, derived from its date range."""
     PENDING = "pending"
     ACTIVE = "active"
     ENDED = "ended"


class Tenancy(LandlordOwnedMixin, TimestampMixin, SoftDeleteMixin, Base):
     """
     Tenancy model - a lease of a property (or room) to one or more tenants.

     `status` is a stored cache of the value derived from start_date/end_date;
     it is brought up to date by the recompute pass before landlord reads.
     """
     __tablename__ = "tenancies"
     __table_args__ = (
          CheckConstraint("rent_due_day BETWEEN 1 AND 31", name="ck_tenancies_rent_due_day"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(Integer, ForeignKey("properties.id"), nullable=False, index=True)

     tenancy_type = Column(String(50), nullable=True)  # ast, room, company_let
     status = Column(String(20), default=TenancyStatus.PENDING.value, nullable=False, index=True)

     # Lease period
     start_date = Column(Date, nullable=False)
     end_date = Column(Date, nullable=True)  # NULL = open-ended / periodic
     is_periodic = Column(Boolean, default=False, nullable=False)

     # Rent
     rent_amount = Column(Numeric(12, 2), nullable=False)
     rent_frequency = Column(String(20), default="monthly", nullable=False)
     rent_due_day = Column(Integer, default=1, nullable=False)
     deposit_amount = Column(Numeric(12, 2), nullable=True)

     room_number = Column(String(20), nullable=True)
     notes = Column(Text, nullable=True)
     notice_given_date = Column(Date, nullable=True)
     notice_expiry_date = Column(Date, nullable=True)

     # Relationships
     property = relationship("Property", back_populates="tenancies")
     tenant_links = relationship("TenancyTenant", back_populates="tenancy", cascade="all, delete-orphan")
     rent_payments = relationship("RentPayment", back_populates="tenancy", order_by="RentPayment.due_date")

     def __repr__(self):
          return f"<Tenancy(id={self.id}, property_id={self.property_id}, status='{self.status}')>"

     @builtins.property
     def computed_status(self) -> TenancyStatus:
          """Status derived from the date range as of today."""
          from datetime import date
          from services.tenancy_service import derive_tenancy_status
          return derive_tenancy_status(self.start_date, self.end_date, date.today())
