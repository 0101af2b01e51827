# routers/properties.py
"""
Property API routes.

Every read runs the tenancy status recompute for the landlord first so
occupancy and income figures reflect today's date.
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_landlord_id
from models import Property, PMPaymentTerms
from schemas.property import (
     PropertyCreate,
     PropertyUpdate,
     PropertyResponse,
     PropertyListItem,
     PropertyDetail,
     PropertySummary,
     PaymentTermsUpsert,
     PaymentTermsResponse,
)
from services.property_service import (
     get_landlord_property,
     list_properties,
     property_detail,
     property_summary,
)
from services.tenancy_service import refresh_statuses_before_read

router = APIRouter(prefix="/api/properties", tags=["properties"])


def _get_property_or_404(db: Session, property_id: int, landlord_id: str) -> Property:
     prop = get_landlord_property(db, property_id, landlord_id)
     if not prop:
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail="Property not found"
          )
     return prop


@router.get("", response_model=List[PropertyListItem], summary="List properties")
def get_properties(
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     """List the landlord's properties with occupancy and this month's income."""
     refresh_statuses_before_read(db, landlord_id)
     return list_properties(db, landlord_id)


@router.get("/{property_id}", response_model=PropertyDetail, summary="Get property details")
def get_property(
     property_id: int,
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     """
     Property with its active tenancies (tenants included), the 12 most
     recent rent payments and this month's income.
     """
     refresh_statuses_before_read(db, landlord_id)
     prop = _get_property_or_404(db, property_id, landlord_id)
     return property_detail(db, prop)


@router.get("/{property_id}/summary", response_model=PropertySummary, summary="Property dashboard summary")
def get_property_summary(
     property_id: int,
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     refresh_statuses_before_read(db, landlord_id)
     prop = _get_property_or_404(db, property_id, landlord_id)
     return property_summary(prop)


@router.post(
     "",
     response_model=PropertyResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a property"
)
def create_property(
     property_data: PropertyCreate,
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     prop = Property(landlord_id=landlord_id, **property_data.model_dump())
     db.add(prop)
     db.commit()
     db.refresh(prop)
     return prop


@router.put("/{property_id}", response_model=PropertyResponse, summary="Update a property")
def update_property(
     property_id: int,
     property_data: PropertyUpdate,
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     """Update a property. Only fields present in the body change."""
     prop = _get_property_or_404(db, property_id, landlord_id)

     update_data = property_data.model_dump(exclude_unset=True)
     if not update_data:
          raise HTTPException(
               status_code=status.HTTP_400_BAD_REQUEST,
               detail="No fields to update"
          )
     for field, value in update_data.items():
          setattr(prop, field, value)

     db.commit()
     db.refresh(prop)
     return prop


@router.delete("/{property_id}", summary="Delete a property")
def delete_property(
     property_id: int,
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     """Soft delete: the property is hidden but its history is kept."""
     prop = _get_property_or_404(db, property_id, landlord_id)
     prop.soft_delete()
     db.commit()
     return {"message": "Property deleted successfully"}


@router.get(
     "/{property_id}/payment-terms",
     response_model=PaymentTermsResponse,
     summary="Get property manager payment terms"
)
def get_payment_terms(
     property_id: int,
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     prop = _get_property_or_404(db, property_id, landlord_id)
     if prop.payment_terms is None:
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail="Payment terms not found"
          )
     return prop.payment_terms


@router.put(
     "/{property_id}/payment-terms",
     response_model=PaymentTermsResponse,
     summary="Set property manager payment terms"
)
def upsert_payment_terms(
     property_id: int,
     terms_data: PaymentTermsUpsert,
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     """Create or replace how the property manager of this property is paid."""
     prop = _get_property_or_404(db, property_id, landlord_id)

     terms = prop.payment_terms
     if terms is None:
          terms = PMPaymentTerms(landlord_id=landlord_id, property_id=prop.id)
          db.add(terms)
     for field, value in terms_data.model_dump().items():
          setattr(terms, field, value)

     db.commit()
     db.refresh(terms)
     return terms
