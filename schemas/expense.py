"""
Pydantic schemas for Expense API request/response validation.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List, Dict
from pydantic import BaseModel, Field, ConfigDict, model_validator

from models.expense import ExpenseFrequency
from .common import PartialUpdate, ServiceResult


class ExpenseCreate(BaseModel):
     """Schema for creating a new expense."""
     property_id: int = Field(..., gt=0, description="Property ID (must belong to the landlord)")
     category: str = Field(..., min_length=1, max_length=50)
     amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
     frequency: ExpenseFrequency = ExpenseFrequency.ONE_OFF
     expense_date: date = Field(..., description="Date of a one-off expense, or first month of a recurring one")
     end_date: Optional[date] = Field(None, description="Last month a recurring expense applies")
     description: Optional[str] = None
     receipt_url: Optional[str] = None
     is_tax_deductible: bool = True

     model_config = ConfigDict(
          use_enum_values=True,
          json_schema_extra={
               "example": {
                    "property_id": 1,
                    "category": "mortgage",
                    "amount": 100.00,
                    "frequency": "monthly",
                    "expense_date": "2025-01-01"
               }
          }
     )

     @model_validator(mode="after")
     def _check_dates(self):
          if self.end_date is not None and self.end_date < self.expense_date:
               raise ValueError("end_date must not be before expense_date")
          return self


class ExpenseUpdate(PartialUpdate):
     """Schema for updating an expense; only provided fields change."""
     non_nullable = ("category", "amount", "frequency", "expense_date", "is_tax_deductible")

     category: Optional[str] = Field(None, min_length=1, max_length=50)
     amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
     frequency: Optional[ExpenseFrequency] = None
     expense_date: Optional[date] = None
     end_date: Optional[date] = None
     description: Optional[str] = None
     receipt_url: Optional[str] = None
     is_tax_deductible: Optional[bool] = None

     model_config = ConfigDict(use_enum_values=True)


class ExpenseResponse(BaseModel):
     id: int
     property_id: int
     category: str
     amount: Decimal
     frequency: str
     expense_date: date
     end_date: Optional[date] = None
     description: Optional[str] = None
     receipt_url: Optional[str] = None
     is_tax_deductible: bool
     created_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class ExpenseSummary(ServiceResult):
     """Expense totals of one property for a target month."""
     year: Optional[int] = None
     month: Optional[int] = None
     one_off: Decimal = Field(Decimal("0"), serialization_alias="oneOff")
     monthly_recurring: Decimal = Field(Decimal("0"), serialization_alias="monthlyRecurring")
     total_this_month: Decimal = Field(Decimal("0"), serialization_alias="totalThisMonth")
     by_category: Dict[str, Decimal] = Field(default_factory=dict, serialization_alias="byCategory")


class MonthlyTransaction(BaseModel):
     expense_id: int
     property_id: int
     category: str
     description: Optional[str] = None
     amount: Decimal
     frequency: str
     expense_date: date
     is_recurring: bool


class MonthlyTransactions(ServiceResult):
     """Landlord-wide expense transactions falling in a month."""
     year: Optional[int] = None
     month: Optional[int] = None
     transactions: List[MonthlyTransaction] = []
     total_recurring: Decimal = Decimal("0")
     total_one_off: Decimal = Decimal("0")
     total: Decimal = Decimal("0")
