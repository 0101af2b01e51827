# routers/expenses.py
"""
Property expense API routes.
"""
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_landlord_id, raise_for_result
from models import Expense, Property
from schemas.expense import ExpenseCreate, ExpenseUpdate, ExpenseResponse, ExpenseSummary
from services.summary_service import summarize_expenses

router = APIRouter(prefix="/api/expenses", tags=["expenses"])


def _get_expense_or_404(db: Session, expense_id: int, landlord_id: str) -> Expense:
     expense = (
          db.query(Expense)
          .filter(Expense.id == expense_id, Expense.landlord_id == landlord_id)
          .first()
     )
     if not expense:
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail="Expense not found"
          )
     return expense


@router.get("/property/{property_id}", response_model=List[ExpenseResponse], summary="List property expenses")
def get_property_expenses(
     property_id: int,
     start_date: Optional[date] = Query(None, alias="startDate"),
     end_date: Optional[date] = Query(None, alias="endDate"),
     category: Optional[str] = Query(None),
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     query = db.query(Expense).filter(
          Expense.property_id == property_id,
          Expense.landlord_id == landlord_id,
     )
     if start_date:
          query = query.filter(Expense.expense_date >= start_date)
     if end_date:
          query = query.filter(Expense.expense_date <= end_date)
     if category:
          query = query.filter(Expense.category == category)
     return query.order_by(Expense.expense_date.desc()).all()


@router.get(
     "/property/{property_id}/summary",
     response_model=ExpenseSummary,
     response_model_by_alias=True,
     summary="Property expense summary"
)
def get_expense_summary(
     property_id: int,
     year: Optional[int] = Query(None, ge=2000, le=2100),
     month: Optional[int] = Query(None, ge=1, le=12),
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     """
     One-off total, recurring monthly total, this month's total and the
     month's spend per category.
     """
     return raise_for_result(summarize_expenses(db, property_id, landlord_id, year, month))


@router.post(
     "",
     response_model=ExpenseResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create an expense"
)
def create_expense(
     expense_data: ExpenseCreate,
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     prop = (
          db.query(Property)
          .filter(
               Property.id == expense_data.property_id,
               Property.landlord_id == landlord_id,
               Property.deleted_at.is_(None),
          )
          .first()
     )
     if not prop:
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail="Property not found"
          )

     expense = Expense(landlord_id=landlord_id, **expense_data.model_dump())
     db.add(expense)
     db.commit()
     db.refresh(expense)
     return expense


@router.put("/{expense_id}", response_model=ExpenseResponse, summary="Update an expense")
def update_expense(
     expense_id: int,
     expense_data: ExpenseUpdate,
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     expense = _get_expense_or_404(db, expense_id, landlord_id)

     update_data = expense_data.model_dump(exclude_unset=True)
     if not update_data:
          raise HTTPException(
               status_code=status.HTTP_400_BAD_REQUEST,
               detail="No fields to update"
          )
     for field, value in update_data.items():
          setattr(expense, field, value)

     if expense.end_date is not None and expense.end_date < expense.expense_date:
          raise HTTPException(
               status_code=status.HTTP_400_BAD_REQUEST,
               detail="end_date must not be before expense_date"
          )

     db.commit()
     db.refresh(expense)
     return expense


@router.delete("/{expense_id}", summary="Delete an expense")
def delete_expense(
     expense_id: int,
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     expense = _get_expense_or_404(db, expense_id, landlord_id)
     db.delete(expense)
     db.commit()
     return {"success": True}
