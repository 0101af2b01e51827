from sqlalchemy import Column, Integer, String, Numeric, Date, Text, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base, LandlordOwnedMixin, TimestampMixin, SoftDeleteMixin


class Tenant(LandlordOwnedMixin, TimestampMixin, SoftDeleteMixin, Base):
     """
     Tenant model - a person renting from the landlord.
     Linked to tenancies through the tenancy_tenants join table.
     """
     __tablename__ = "tenants"

     id = Column(Integer, primary_key=True, autoincrement=True)

     # Personal info
     first_name = Column(String(100), nullable=False)
     last_name = Column(String(100), nullable=False)
     email = Column(String(255), nullable=True)
     phone = Column(String(50), nullable=True)
     phone_secondary = Column(String(50), nullable=True)
     date_of_birth = Column(Date, nullable=True)

     # Emergency contact
     emergency_contact_name = Column(String(200), nullable=True)
     emergency_contact_phone = Column(String(50), nullable=True)
     emergency_contact_relationship = Column(String(100), nullable=True)

     # Employment
     employment_status = Column(String(100), nullable=True)
     employer_name = Column(String(255), nullable=True)
     annual_income = Column(Numeric(12, 2), nullable=True)

     notes = Column(Text, nullable=True)

     # Relationships
     tenancy_links = relationship("TenancyTenant", back_populates="tenant", cascade="all, delete-orphan")

     def __repr__(self):
          return f"<Tenant(id={self.id}, name='{self.first_name} {self.last_name}')>"

     @property
     def full_name(self) -> str:
          return f"{self.first_name} {self.last_name}"


class TenancyTenant(Base):
     """
     Many-to-many link between tenancies and tenants.
     """
     __tablename__ = "tenancy_tenants"

     id = Column(Integer, primary_key=True, autoincrement=True)
     tenancy_id = Column(Integer, ForeignKey("tenancies.id", ondelete="CASCADE"), nullable=False, index=True)
     tenant_id = Column(Integer, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
     is_primary = Column(Boolean, default=False, nullable=False)

     # Relationships
     tenancy = relationship("Tenancy", back_populates="tenant_links")
     tenant = relationship("Tenant", back_populates="tenancy_links")

     def __repr__(self):
          return f"<TenancyTenant(tenancy_id={self.tenancy_id}, tenant_id={self.tenant_id}, primary={self.is_primary})>"
