# routers/tenancies.py
"""
Tenancy API routes.

Tenancy status is never written by clients: it is derived from the dates
and refreshed before every read. Creating a tenancy also creates its rent
obligations for the current and next two months.
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session, selectinload

from database import get_session
from dependencies import get_landlord_id
from models import Property, Tenancy, TenancyTenant, Tenant
from schemas.tenancy import (
     TenancyCreate,
     TenancyUpdate,
     TenancyResponse,
     TenancyDetail,
     TenancyTenantLink,
     TenancyTenantResponse,
)
from schemas.rent_payment import RentPaymentResponse
from services.property_service import tenancy_response
from services.rent_payment_service import RentPaymentService
from services.tenancy_service import refresh_statuses_before_read

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tenancies", tags=["tenancies"])


def _get_tenancy_or_404(db: Session, tenancy_id: int, landlord_id: str) -> Tenancy:
     tenancy = (
          db.query(Tenancy)
          .options(selectinload(Tenancy.tenant_links).selectinload(TenancyTenant.tenant))
          .filter(
               Tenancy.id == tenancy_id,
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
     return tenancy


@router.get("", response_model=List[TenancyResponse], summary="List tenancies")
def get_tenancies(
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     refresh_statuses_before_read(db, landlord_id)
     tenancies = (
          db.query(Tenancy)
          .options(
               selectinload(Tenancy.property),
               selectinload(Tenancy.tenant_links).selectinload(TenancyTenant.tenant),
          )
          .filter(Tenancy.landlord_id == landlord_id, Tenancy.deleted_at.is_(None))
          .order_by(Tenancy.created_at.desc(), Tenancy.id.desc())
          .all()
     )
     return [tenancy_response(t) for t in tenancies]


@router.get("/{tenancy_id}", response_model=TenancyDetail, summary="Get tenancy details")
def get_tenancy(
     tenancy_id: int,
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     """Tenancy with its tenants and every rent payment raised against it."""
     refresh_statuses_before_read(db, landlord_id)
     tenancy = _get_tenancy_or_404(db, tenancy_id, landlord_id)
     return TenancyDetail(
          **tenancy_response(tenancy).model_dump(),
          rent_payments=[RentPaymentResponse.model_validate(p) for p in tenancy.rent_payments],
     )


@router.post(
     "",
     response_model=TenancyResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a tenancy"
)
def create_tenancy(
     tenancy_data: TenancyCreate,
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     """
     Create a tenancy on one of the landlord's properties.

     - **property_id**: must belong to the landlord
     - **start_date** / **end_date**: the status is derived from these
     - **rent_due_day**: 1-31, clamped to short months when billing

     Rent obligations for this month and the next two are generated
     straight away.
     """
     prop = (
          db.query(Property)
          .filter(
               Property.id == tenancy_data.property_id,
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

     tenancy = Tenancy(landlord_id=landlord_id, **tenancy_data.model_dump())
     tenancy.status = tenancy.computed_status.value
     db.add(tenancy)
     db.commit()
     db.refresh(tenancy)

     result = RentPaymentService.generate_for_tenancy(db, tenancy.id, landlord_id)
     if not result.success:
          # The tenancy stands; obligations are picked up by the monthly run
          logger.warning("Rent generation failed for new tenancy %s: %s", tenancy.id, result.error)
     else:
          logger.info("Generated %d rent payment(s) for tenancy %s", result.created_count, tenancy.id)

     return tenancy_response(tenancy)


@router.put("/{tenancy_id}", response_model=TenancyResponse, summary="Update a tenancy")
def update_tenancy(
     tenancy_id: int,
     tenancy_data: TenancyUpdate,
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     tenancy = _get_tenancy_or_404(db, tenancy_id, landlord_id)

     update_data = tenancy_data.model_dump(exclude_unset=True)
     if not update_data:
          raise HTTPException(
               status_code=status.HTTP_400_BAD_REQUEST,
               detail="No fields to update"
          )
     for field, value in update_data.items():
          setattr(tenancy, field, value)

     if tenancy.end_date is not None and tenancy.end_date < tenancy.start_date:
          raise HTTPException(
               status_code=status.HTTP_400_BAD_REQUEST,
               detail="end_date must not be before start_date"
          )
     tenancy.status = tenancy.computed_status.value

     db.commit()
     db.refresh(tenancy)
     return tenancy_response(tenancy)


@router.delete("/{tenancy_id}", summary="Delete a tenancy")
def delete_tenancy(
     tenancy_id: int,
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     tenancy = _get_tenancy_or_404(db, tenancy_id, landlord_id)
     tenancy.soft_delete()
     db.commit()
     return {"message": "Tenancy deleted successfully"}


@router.post(
     "/{tenancy_id}/tenants",
     response_model=TenancyTenantResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Link a tenant to a tenancy"
)
def link_tenant(
     tenancy_id: int,
     link_data: TenancyTenantLink,
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     tenancy = _get_tenancy_or_404(db, tenancy_id, landlord_id)
     tenant = (
          db.query(Tenant)
          .filter(
               Tenant.id == link_data.tenant_id,
               Tenant.landlord_id == landlord_id,
               Tenant.deleted_at.is_(None),
          )
          .first()
     )
     if not tenant:
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail="Tenant not found"
          )
     if any(link.tenant_id == tenant.id for link in tenancy.tenant_links):
          raise HTTPException(
               status_code=status.HTTP_409_CONFLICT,
               detail="Tenant is already linked to this tenancy"
          )

     link = TenancyTenant(tenancy_id=tenancy.id, tenant_id=tenant.id, is_primary=link_data.is_primary)
     db.add(link)
     db.commit()
     db.refresh(link)
     return link


@router.delete("/{tenancy_id}/tenants/{tenant_id}", summary="Remove a tenant from a tenancy")
def unlink_tenant(
     tenancy_id: int,
     tenant_id: int,
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     tenancy = _get_tenancy_or_404(db, tenancy_id, landlord_id)
     link = next((l for l in tenancy.tenant_links if l.tenant_id == tenant_id), None)
     if link is None:
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail="Tenant is not linked to this tenancy"
          )
     db.delete(link)
     db.commit()
     return {"message": "Tenant removed from tenancy"}
