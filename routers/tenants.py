# routers/tenants.py
"""
Tenant API routes: people renting from the landlord.
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_landlord_id
from models import Tenant
from schemas.tenant import TenantCreate, TenantUpdate, TenantResponse

router = APIRouter(prefix="/api/tenants", tags=["tenants"])


def _get_tenant_or_404(db: Session, tenant_id: int, landlord_id: str) -> Tenant:
     tenant = (
          db.query(Tenant)
          .filter(
               Tenant.id == tenant_id,
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
     return tenant


@router.get("", response_model=List[TenantResponse], summary="List tenants")
def get_tenants(
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     return (
          db.query(Tenant)
          .filter(Tenant.landlord_id == landlord_id, Tenant.deleted_at.is_(None))
          .order_by(Tenant.last_name.asc(), Tenant.first_name.asc())
          .all()
     )


@router.get("/{tenant_id}", response_model=TenantResponse, summary="Get a tenant")
def get_tenant(
     tenant_id: int,
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     return _get_tenant_or_404(db, tenant_id, landlord_id)


@router.post(
     "",
     response_model=TenantResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Create a tenant"
)
def create_tenant(
     tenant_data: TenantCreate,
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     tenant = Tenant(landlord_id=landlord_id, **tenant_data.model_dump())
     db.add(tenant)
     db.commit()
     db.refresh(tenant)
     return tenant


@router.put("/{tenant_id}", response_model=TenantResponse, summary="Update a tenant")
def update_tenant(
     tenant_id: int,
     tenant_data: TenantUpdate,
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     tenant = _get_tenant_or_404(db, tenant_id, landlord_id)

     update_data = tenant_data.model_dump(exclude_unset=True)
     if not update_data:
          raise HTTPException(
               status_code=status.HTTP_400_BAD_REQUEST,
               detail="No fields to update"
          )
     for field, value in update_data.items():
          setattr(tenant, field, value)

     db.commit()
     db.refresh(tenant)
     return tenant


@router.delete("/{tenant_id}", summary="Delete a tenant")
def delete_tenant(
     tenant_id: int,
     db: Session = Depends(get_session),
     landlord_id: str = Depends(get_landlord_id)
):
     tenant = _get_tenant_or_404(db, tenant_id, landlord_id)
     tenant.soft_delete()
     db.commit()
     return {"message": "Tenant deleted successfully"}
