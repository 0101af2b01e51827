# services/tenancy_service.py
"""
Tenancy lifecycle service.

A tenancy's status follows from its dates and today's date:
- pending: start_date is after today
- ended:   end_date is set and is before today
- active:  otherwise (start and end are both inclusive)

The `status` column stores this value so it can be filtered on.
`recompute_tenancy_statuses` brings a landlord's tenancies up to date in a
single UPDATE statement and must run before any landlord-scoped read of
tenancies or properties.
"""
import logging
from datetime import date
from typing import Optional

from sqlalchemy import and_, case, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models import Tenancy, TenancyStatus
from schemas.tenancy import RecomputeResult

logger = logging.getLogger(__name__)


def derive_tenancy_status(
     start_date: date,
     end_date: Optional[date],
     today: date
) -> TenancyStatus:
     """
     Compute the canonical status of a tenancy.

     Pure function of its three inputs.
     """
     if start_date > today:
          return TenancyStatus.PENDING
     if end_date is not None and end_date < today:
          return TenancyStatus.ENDED
     return TenancyStatus.ACTIVE


def derived_status_expression(today: date):
     """SQL counterpart of derive_tenancy_status for the tenancies table."""
     return case(
          (Tenancy.start_date > today, TenancyStatus.PENDING.value),
          (
               and_(Tenancy.end_date.is_not(None), Tenancy.end_date < today),
               TenancyStatus.ENDED.value,
          ),
          else_=TenancyStatus.ACTIVE.value,
     )


def recompute_tenancy_statuses(
     db: Session,
     landlord_id: str,
     today: Optional[date] = None
) -> RecomputeResult:
     """
     Bring the stored status of a landlord's tenancies in line with their dates.

     Only rows whose stored status differs are written, so a second pass on
     the same day updates nothing. The whole pass is one statement in one
     transaction.

     Failures are logged and reported in the result; callers on read paths
     carry on with the stored values.
     """
     today = today or date.today()
     derived = derived_status_expression(today)

     stmt = (
          update(Tenancy)
          .where(
               Tenancy.landlord_id == landlord_id,
               Tenancy.deleted_at.is_(None),
               Tenancy.status != derived,
          )
          .values(status=derived)
          .execution_options(synchronize_session=False)
     )

     try:
          result = db.execute(stmt)
          db.commit()
     except SQLAlchemyError as e:
          db.rollback()
          logger.warning("Tenancy status recompute failed for landlord %s: %s", landlord_id, e)
          return RecomputeResult.upstream("Failed to update tenancy statuses")

     # Loaded instances still hold the old values
     db.expire_all()

     updated = result.rowcount or 0
     if updated:
          logger.info("Recomputed %d tenancy status(es) for landlord %s", updated, landlord_id)
     return RecomputeResult(updated_count=updated)


def refresh_statuses_before_read(db: Session, landlord_id: str) -> None:
     """
     Recompute statuses ahead of a read. A failed pass never blocks the read;
     stale statuses are served instead.
     """
     result = recompute_tenancy_statuses(db, landlord_id)
     if not result.success:
          logger.warning("Serving stored tenancy statuses for landlord %s: %s", landlord_id, result.error)
