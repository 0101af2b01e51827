# services/property_service.py
"""
Property read models: occupancy and income figures for the landlord's
property list, detail page and dashboard summary.

Callers must run the tenancy status recompute first; these helpers trust
the stored tenancy status.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session, selectinload

from config import FX_RATES_TO_GBP
from models import (
     BookingPaymentStatus,
     Property,
     PropertyCategory,
     RentPayment,
     Tenancy,
     TenancyStatus,
     TenancyTenant,
)
from schemas.property import PropertyDetail, PropertyListItem, PropertySummary
from schemas.rent_payment import RentPaymentResponse
from schemas.tenancy import TenancyResponse, TenantInTenancy
from services.booking_service import round_money
from services.summary_service import as_money
from utils.dates import in_month

logger = logging.getLogger(__name__)

RECENT_PAYMENTS_LIMIT = 12


def to_gbp(amount, currency: Optional[str] = "GBP") -> Decimal:
     """Convert an amount to GBP; unknown currencies are taken at par."""
     rate = FX_RATES_TO_GBP.get((currency or "GBP").upper(), 1.0)
     return as_money(amount) * Decimal(str(rate))


def booking_counts_toward_month(booking, year: int, month: int) -> bool:
     """
     Whether a booking's revenue is income of the given month: either the
     payout was received that month, or the guest checks in that month and
     the payout is still pending.
     """
     if booking.is_cancelled:
          return False
     if booking.received_date is not None and in_month(booking.received_date, year, month):
          return True
     return (
          in_month(booking.check_in, year, month)
          and booking.payment_status == BookingPaymentStatus.PENDING.value
     )


def sa_revenue_for_month(bookings: Iterable, year: int, month: int) -> Decimal:
     """Net booking revenue of a month, in GBP."""
     total = sum(
          (to_gbp(b.net_revenue, b.currency) for b in bookings if booking_counts_toward_month(b, year, month)),
          Decimal("0"),
     )
     return round_money(total)


def active_tenancies_of(prop: Property) -> List[Tenancy]:
     return [
          t for t in prop.tenancies
          if t.deleted_at is None and t.status == TenancyStatus.ACTIVE.value
     ]


def tenancy_response(tenancy: Tenancy) -> TenancyResponse:
     """Tenancy with its property name and tenants flattened in."""
     response = TenancyResponse.model_validate(tenancy)
     response.property_name = tenancy.property.name if tenancy.property else None
     response.tenants = [
          TenantInTenancy.model_validate(link.tenant).model_copy(update={"is_primary": link.is_primary})
          for link in tenancy.tenant_links
          if link.tenant is not None and link.tenant.deleted_at is None
     ]
     return response


def property_list_item(prop: Property, today: Optional[date] = None) -> PropertyListItem:
     """Property with this month's occupancy and income."""
     today = today or date.today()
     active = active_tenancies_of(prop)
     rent_income = sum((as_money(t.rent_amount) for t in active), Decimal("0"))

     sa_revenue = None
     monthly_income = rent_income
     if prop.property_category == PropertyCategory.SA.value:
          sa_revenue = sa_revenue_for_month(prop.bookings, today.year, today.month)
          monthly_income += sa_revenue

     item = PropertyListItem.model_validate(prop)
     item.active_tenancies = len(active)
     item.active_tenants = sum(len(t.tenant_links) for t in active)
     item.monthly_income = round_money(monthly_income)
     item.sa_booking_revenue = sa_revenue
     return item


def _with_relations(query):
     return query.options(
          selectinload(Property.tenancies)
          .selectinload(Tenancy.tenant_links)
          .selectinload(TenancyTenant.tenant),
          selectinload(Property.bookings),
     )


def get_landlord_property(db: Session, property_id: int, landlord_id: str) -> Optional[Property]:
     return (
          _with_relations(db.query(Property))
          .filter(
               Property.id == property_id,
               Property.landlord_id == landlord_id,
               Property.deleted_at.is_(None),
          )
          .first()
     )


def list_properties(db: Session, landlord_id: str, today: Optional[date] = None) -> List[PropertyListItem]:
     properties = (
          _with_relations(db.query(Property))
          .filter(Property.landlord_id == landlord_id, Property.deleted_at.is_(None))
          .order_by(Property.name.asc())
          .all()
     )
     logger.debug("Found %d properties for landlord %s", len(properties), landlord_id)
     return [property_list_item(p, today) for p in properties]


def property_detail(db: Session, prop: Property, today: Optional[date] = None) -> PropertyDetail:
     """Property with its active tenancies and the latest rent payments."""
     item = property_list_item(prop, today)
     payments = (
          db.query(RentPayment)
          .filter(RentPayment.property_id == prop.id, RentPayment.landlord_id == prop.landlord_id)
          .order_by(RentPayment.due_date.desc())
          .limit(RECENT_PAYMENTS_LIMIT)
          .all()
     )
     return PropertyDetail(
          **item.model_dump(),
          tenancies=[tenancy_response(t) for t in active_tenancies_of(prop)],
          recent_payments=[RentPaymentResponse.model_validate(p) for p in payments],
     )


def property_summary(prop: Property) -> PropertySummary:
     active = active_tenancies_of(prop)
     return PropertySummary(
          id=prop.id,
          name=prop.name,
          status=prop.status,
          address_line_1=prop.address_line_1,
          active_tenancies=len(active),
          active_tenants=sum(len(t.tenant_links) for t in active),
          total_monthly_rent=sum((as_money(t.rent_amount) for t in active), Decimal("0")),
     )
