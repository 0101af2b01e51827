"""
PMPaymentTerms model - how and when a property manager is paid.

One optional record per property. Used to describe the payment timing on
the PM summary; the fee arithmetic itself always comes from the property.
"""
from sqlalchemy import Column, Integer, String, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base, LandlordOwnedMixin, TimestampMixin


class PMPaymentTerms(LandlordOwnedMixin, TimestampMixin, Base):
     __tablename__ = "pm_payment_terms"

     id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(
          Integer,
          ForeignKey("properties.id", ondelete="CASCADE"),
          nullable=False,
          unique=True,  # One terms record per property
          index=True
     )
     description = Column(String(255), nullable=False)  # e.g. "15% of net + cleaning fee, paid following month"
     timing = Column(String(100), nullable=False)  # e.g. "Following month", "Last day of month"
     currency = Column(String(3), nullable=True)
     percentage = Column(Numeric(5, 2), nullable=True)  # Overrides property.management_fee_percent when set
     cleaning_fee = Column(Numeric(10, 2), nullable=True)  # Overrides property.fixed_cleaning_fee when set

     # Relationships
     property = relationship("Property", back_populates="payment_terms")

     def __repr__(self):
          return f"<PMPaymentTerms(property_id={self.property_id}, timing='{self.timing}')>"
