# routers/sa_bookings.py
"""
Serviced-accommodation booking API routes.

Booking financials (nights, gross, net and the property manager's cut) are
derived server-side from the booking and its property.
"""
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_landlord_id, raise_for_result
from models import SABooking, BookingStatus
from schemas.sa_booking import (
     BookingCreate,
     BookingUpdate,
     BookingResponse,
     BookingForecast,
     MarkReceivedRequest,
     MarkPMPaidRequest,
     PMSummary,
)
from services.booking_service import (
     booking_forecast,
     derive_booking_financials,
     get_landlord_property,
     refresh_booking_financials,
     summarize_pm_payments,
)

router = APIRouter(prefix="/api/sa-bookings", tags=["sa-bookings"])


def _get_booking_or_404(db: Session, booking_id: int, landlord_id: str) -> SABooking:
     booking = (
          db.query(SABooking)
          .filter(SABooking.id == booking_id, SABooking.landlord_id == landlord_id)
          .first()
     )
     if not booking:
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail="Booking not found"
          )
     return booking


def _get_property_or_404(db: Session, property_id: int, landlord_id: str):
     prop = get_landlord_property(db, property_id, landlord_id)
     if not prop:
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail="Property not found"
          )
     return prop


@router.get("/property/{property_id}", response_model=List[BookingResponse], summary="List bookings")
def get_property_bookings(
     property_id: int,
     start_date: Optional[date] = Query(None, alias="startDate", description="Check-in on or after"),
     end_date: Optional[date] = Query(None, alias="endDate", description="Check-out on or before"),
     status_filter: Optional[BookingStatus] = Query(None, alias="status"),
     platform: Optional[str] = Query(None),
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     query = db.query(SABooking).filter(
          SABooking.property_id == property_id,
          SABooking.landlord_id == landlord_id,
     )
     if start_date:
          query = query.filter(SABooking.check_in >= start_date)
     if end_date:
          query = query.filter(SABooking.check_out <= end_date)
     if status_filter:
          query = query.filter(SABooking.status == status_filter.value)
     if platform:
          query = query.filter(SABooking.platform == platform)
     return query.order_by(SABooking.check_in.desc()).all()


@router.get("/property/{property_id}/forecast", response_model=BookingForecast, summary="Monthly revenue forecast")
def get_forecast(
     property_id: int,
     year: Optional[int] = Query(None, ge=2000, le=2100),
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     return raise_for_result(booking_forecast(db, property_id, landlord_id, year))


@router.get("/property/{property_id}/pm-summary", response_model=PMSummary, summary="Property manager summary")
def get_pm_summary(
     property_id: int,
     month: Optional[int] = Query(None, ge=1, le=12),
     year: Optional[int] = Query(None, ge=2000, le=2100),
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     """
     What the property manager is owed for bookings checking in during a
     month, what has been settled already and how they are paid.
     """
     return raise_for_result(summarize_pm_payments(db, property_id, landlord_id, month, year))


@router.post(
     "",
     response_model=BookingResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a booking"
)
def create_booking(
     booking_data: BookingCreate,
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     """
     Create a booking on one of the landlord's properties.

     Missing nights, gross and net figures are derived; for a managed SA
     property the cleaning fee defaults to the property's fixed fee and the
     PM fee is taken on net revenue after cleaning.
     """
     prop = _get_property_or_404(db, booking_data.property_id, landlord_id)
     fields = derive_booking_financials(booking_data.model_dump(), prop)

     booking = SABooking(landlord_id=landlord_id, **fields)
     db.add(booking)
     db.commit()
     db.refresh(booking)
     return booking


@router.put("/{booking_id}", response_model=BookingResponse, summary="Update a booking")
def update_booking(
     booking_id: int,
     booking_data: BookingUpdate,
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     booking = _get_booking_or_404(db, booking_id, landlord_id)

     update_data = booking_data.model_dump(exclude_unset=True)
     if not update_data:
          raise HTTPException(
               status_code=status.HTTP_400_BAD_REQUEST,
               detail="No fields to update"
          )
     refresh_booking_financials(booking, booking.property, update_data)

     db.commit()
     db.refresh(booking)
     return booking


@router.delete("/{booking_id}", summary="Delete a booking")
def delete_booking(
     booking_id: int,
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     booking = _get_booking_or_404(db, booking_id, landlord_id)
     db.delete(booking)
     db.commit()
     return {"success": True}


@router.post("/{booking_id}/mark-received", response_model=BookingResponse, summary="Mark payout received")
def mark_received(
     booking_id: int,
     request: Optional[MarkReceivedRequest] = None,
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     booking = _get_booking_or_404(db, booking_id, landlord_id)
     booking.mark_received(request.received_date if request else None)
     db.commit()
     db.refresh(booking)
     return booking


@router.post("/{booking_id}/mark-pm-paid", response_model=BookingResponse, summary="Mark property manager paid")
def mark_pm_paid(
     booking_id: int,
     request: Optional[MarkPMPaidRequest] = None,
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     booking = _get_booking_or_404(db, booking_id, landlord_id)
     booking.mark_pm_paid(request.paid_date if request else None)
     db.commit()
     db.refresh(booking)
     return booking
