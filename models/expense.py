import builtins
import enum
from sqlalchemy import Column, Integer, String, Numeric, Date, Boolean, Text, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base, LandlordOwnedMixin, TimestampMixin


class ExpenseFrequency(str, enum.Enum):
     """How often an expense recurs."""
     ONE_OFF = "one-off"
     MONTHLY = "monthly"
     QUARTERLY = "quarterly"
     YEARLY = "yearly"


EXPENSE_CATEGORIES = (
     "mortgage",
     "council_tax",
     "utilities",
     "insurance",
     "finance",
     "maintenance",
     "repairs",
     "cleaning",
     "agency_fees",
     "legal",
     "other",
)


class Expense(LandlordOwnedMixin, TimestampMixin, Base):
     """
     Expense model - a cost incurred on a property.

     One-off expenses belong to the month of expense_date; recurring ones
     apply from expense_date until end_date (or indefinitely).
     """
     __tablename__ = "property_expenses"

     id = Column(Integer, primary_key=True, autoincrement=True)
     property_id = Column(
          Integer,
          ForeignKey("properties.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )

     category = Column(String(50), nullable=False, index=True)
     description = Column(Text, nullable=True)
     amount = Column(Numeric(12, 2), nullable=False)
     frequency = Column(String(20), default=ExpenseFrequency.ONE_OFF.value, nullable=False)
     expense_date = Column(Date, nullable=False, index=True)
     end_date = Column(Date, nullable=True)
     receipt_url = Column(String(500), nullable=True)
     is_tax_deductible = Column(Boolean, default=True, nullable=False)

     # Relationships
     property = relationship("Property", back_populates="expenses")

     def __repr__(self):
          return f"<Expense(id={self.id}, category='{self.category}', amount={self.amount}, frequency='{self.frequency}')>"

     @builtins.property
     def is_recurring(self) -> bool:
          return self.frequency != ExpenseFrequency.ONE_OFF.value
