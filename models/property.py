import enum
from sqlalchemy import Column, Integer, String, Numeric, Boolean, Text, Date
from sqlalchemy.orm import relationship
from .base import Base, LandlordOwnedMixin, TimestampMixin, SoftDeleteMixin


class PropertyCategory(str, enum.Enum):
     """Letting model of a property."""
     BTR = "btr"
     HMO = "hmo"
     SA = "sa"
     COMMERCIAL = "commercial"


class Property(LandlordOwnedMixin, TimestampMixin, SoftDeleteMixin, Base):
     """
     Property model - a building or unit let out by a landlord.
     """
     __tablename__ = "properties"

     id = Column(Integer, primary_key=True, autoincrement=True)
     name = Column(String(255), nullable=False)

     # Address
     address_line_1 = Column(String(255), nullable=True)
     address_line_2 = Column(String(255), nullable=True)
     city = Column(String(100), nullable=True)
     postcode = Column(String(20), nullable=True)

     property_category = Column(String(20), default=PropertyCategory.BTR.value, nullable=False)
     property_type = Column(String(50), nullable=True)  # house, flat, bungalow, commercial
     status = Column(String(20), default="active", nullable=False)  # active, void, maintenance
     bedrooms = Column(Integer, nullable=True)
     bathrooms = Column(Integer, nullable=True)
     is_hmo = Column(Boolean, default=False, nullable=False)
     hmo_license_number = Column(String(100), nullable=True)
     hmo_license_expiry = Column(Date, nullable=True)
     currency = Column(String(3), default="GBP", nullable=False)

     # Third-party management
     is_managed = Column(Boolean, default=False, nullable=False)
     management_fee_percent = Column(Numeric(5, 2), default=0, nullable=False)
     fixed_cleaning_fee = Column(Numeric(10, 2), default=0, nullable=False)
     property_manager_name = Column(String(255), nullable=True)

     # Finance
     purchase_price = Column(Numeric(14, 2), nullable=True)
     current_value = Column(Numeric(14, 2), nullable=True)
     monthly_mortgage = Column(Numeric(12, 2), nullable=True)
     notes = Column(Text, nullable=True)

     # Relationships
     tenancies = relationship("Tenancy", back_populates="property")
     expenses = relationship("Expense", back_populates="property", cascade="all, delete-orphan")
     bookings = relationship("SABooking", back_populates="property", cascade="all, delete-orphan")
     payment_terms = relationship(
          "PMPaymentTerms",
          back_populates="property",
          uselist=False,
          cascade="all, delete-orphan"
     )

     def __repr__(self):
          return f"<Property(id={self.id}, name='{self.name}', category='{self.property_category}')>"

     @property
     def is_managed_sa(self) -> bool:
          """Whether booking revenue is shared with a property manager."""
          return bool(self.is_managed) and self.property_category == PropertyCategory.SA.value
