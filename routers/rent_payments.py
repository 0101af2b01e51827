# routers/rent_payments.py
"""
Rent payment API routes.

Covers the rent ledger (list, create, update, record payment, delete), the
monthly materialization run and the landlord dashboard figures.
"""
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_landlord_id, raise_for_result
from models import RentPayment, RentPaymentStatus, Tenancy
from schemas.rent_payment import (
     RentPaymentCreate,
     RentPaymentUpdate,
     RentPaymentResponse,
     RecordPaymentRequest,
     GenerateRentPaymentsRequest,
     MaterializeResult,
     RentCollectionSummary,
)
from schemas.expense import MonthlyTransactions
from services.rent_payment_service import RentPaymentService
from services.summary_service import monthly_transactions, summarize_rent_collection

router = APIRouter(prefix="/api/rent-payments", tags=["rent-payments"])


def _get_payment_or_404(db: Session, payment_id: int, landlord_id: str) -> RentPayment:
     payment = (
          db.query(RentPayment)
          .filter(RentPayment.id == payment_id, RentPayment.landlord_id == landlord_id)
          .first()
     )
     if not payment:
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail="Payment not found"
          )
     return payment


@router.get("", response_model=List[RentPaymentResponse], summary="List rent payments")
def get_rent_payments(
     property_id: Optional[int] = Query(None, description="Filter by property"),
     status_filter: Optional[RentPaymentStatus] = Query(None, alias="status", description="Filter by status"),
     limit: int = Query(100, ge=1, le=1000),
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     """List payments newest due date first."""
     query = db.query(RentPayment).filter(RentPayment.landlord_id == landlord_id)
     if property_id:
          query = query.filter(RentPayment.property_id == property_id)
     if status_filter:
          query = query.filter(RentPayment.status == status_filter.value)
     return query.order_by(RentPayment.due_date.desc()).limit(limit).all()


@router.get("/dashboard/stats", response_model=RentCollectionSummary, summary="Rent collection stats")
def get_dashboard_stats(
     year: Optional[int] = Query(None, ge=2000, le=2100),
     month: Optional[int] = Query(None, ge=1, le=12),
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     """
     Received, pending, late and missed totals for the payments due in a
     month (defaults to the current month), with the collection rate.
     """
     return raise_for_result(summarize_rent_collection(db, landlord_id, year, month))


@router.get("/transactions/monthly", response_model=MonthlyTransactions, summary="Monthly expense transactions")
def get_monthly_transactions(
     year: Optional[int] = Query(None, ge=2000, le=2100),
     month: Optional[int] = Query(None, ge=1, le=12),
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     """Every expense falling in a month across all of the landlord's properties."""
     return raise_for_result(monthly_transactions(db, landlord_id, year, month))


@router.post("/generate", response_model=MaterializeResult, summary="Generate rent payments for a month")
def generate_rent_payments(
     request: Optional[GenerateRentPaymentsRequest] = None,
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     """
     Create the month's payment for every active tenancy that does not have
     one yet. Safe to run repeatedly.
     """
     request = request or GenerateRentPaymentsRequest()
     result = RentPaymentService.materialize_for_month(db, landlord_id, request.year, request.month)
     return raise_for_result(result)


@router.get("/{payment_id}", response_model=RentPaymentResponse, summary="Get a rent payment")
def get_rent_payment(
     payment_id: int,
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     return _get_payment_or_404(db, payment_id, landlord_id)


@router.post(
     "",
     response_model=RentPaymentResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a rent payment"
)
def create_rent_payment(
     payment_data: RentPaymentCreate,
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     """
     Add a one-off payment record to a tenancy.

     A tenancy can hold only one payment per billing month; a second one
     for the same month is rejected with 409.
     """
     tenancy = (
          db.query(Tenancy)
          .filter(
               Tenancy.id == payment_data.tenancy_id,
               Tenancy.landlord_id == landlord_id,
               Tenancy.deleted_at.is_(None),
          )
          .first()
     )
     if not tenancy:
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail="Tenancy not found"
          )

     payment = RentPayment(
          landlord_id=landlord_id,
          property_id=tenancy.property_id,
          billing_period=date(payment_data.due_date.year, payment_data.due_date.month, 1),
          **payment_data.model_dump(),
     )
     db.add(payment)
     try:
          db.commit()
     except IntegrityError:
          db.rollback()
          raise HTTPException(
               status_code=status.HTTP_409_CONFLICT,
               detail="A payment for this tenancy and month already exists"
          )
     db.refresh(payment)
     return payment


@router.put("/{payment_id}", response_model=RentPaymentResponse, summary="Update a rent payment")
def update_rent_payment(
     payment_id: int,
     payment_data: RentPaymentUpdate,
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     payment = _get_payment_or_404(db, payment_id, landlord_id)

     update_data = payment_data.model_dump(exclude_unset=True)
     if not update_data:
          raise HTTPException(
               status_code=status.HTTP_400_BAD_REQUEST,
               detail="No fields to update"
          )
     for field, value in update_data.items():
          setattr(payment, field, value)

     db.commit()
     db.refresh(payment)
     return payment


@router.post("/{payment_id}/record", response_model=RentPaymentResponse, summary="Record a payment")
def record_rent_payment(
     payment_id: int,
     request: RecordPaymentRequest,
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     """
     Mark a payment as paid.

     - **amount_paid**: required, not negative
     - **paid_date**: defaults to today
     """
     result = RentPaymentService.record_payment(
          db,
          payment_id,
          landlord_id,
          request.amount_paid,
          paid_date=request.paid_date,
          payment_method=request.payment_method,
          payment_reference=request.payment_reference,
          notes=request.notes,
     )
     return raise_for_result(result).payment


@router.delete("/{payment_id}", summary="Delete a rent payment")
def delete_rent_payment(
     payment_id: int,
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     payment = _get_payment_or_404(db, payment_id, landlord_id)
     db.delete(payment)
     db.commit()
     return {"message": "Payment deleted successfully"}
