"""
Re-apply the property manager fee formula to stored bookings.

PM fee = (net_revenue - cleaning_fee) x management_fee_percent / 100, and
total deduction = cleaning_fee + PM fee. Run after changing a property's
fee percentage, or to repair bookings saved with an older formula:

    python -m scripts.recalculate_pm_fees --landlord <landlord-id> [--property 3]

Without --property every managed SA property of the landlord is processed.
Safe to re-run: bookings already in line are left untouched.
"""
import argparse
import logging
import sys

from database import get_session_context
from models import Property, PropertyCategory
from services.booking_service import recalculate_pm_fees

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger("recalculate_pm_fees")


def managed_sa_property_ids(db, landlord_id: str) -> list[int]:
    rows = (
        db.query(Property.id)
        .filter(
            Property.landlord_id == landlord_id,
            Property.deleted_at.is_(None),
            Property.is_managed.is_(True),
            Property.property_category == PropertyCategory.SA.value,
        )
        .order_by(Property.id)
        .all()
    )
    return [row[0] for row in rows]


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--landlord", required=True, help="Landlord id (token subject)")
    parser.add_argument("--property", type=int, dest="property_id", help="Only this property")
    args = parser.parse_args(argv)

    failures = 0
    with get_session_context() as db:
        property_ids = [args.property_id] if args.property_id else managed_sa_property_ids(db, args.landlord)
        if not property_ids:
            logger.info("No managed SA properties for landlord %s", args.landlord)
            return 0

        for property_id in property_ids:
            result = recalculate_pm_fees(db, property_id, args.landlord)
            if result.success:
                logger.info("  property %s: %d booking(s) updated", property_id, result.updated_count)
            else:
                failures += 1
                logger.error("  property %s: %s", property_id, result.error)

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
