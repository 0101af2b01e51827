"""
Tenancy lifecycle: status derivation (pure) and the recompute pass (SQLite).
"""
from datetime import date, timedelta

import pytest
from sqlalchemy import Update
from sqlalchemy.exc import OperationalError

from models import Tenancy, TenancyStatus
from schemas import ErrorKind
from services.tenancy_service import (
    derive_tenancy_status,
    recompute_tenancy_statuses,
    refresh_statuses_before_read,
)
from tests.conftest import LANDLORD_ID, OTHER_LANDLORD_ID

TODAY = date(2025, 6, 15)


@pytest.fixture
def failing_status_update(db, monkeypatch):
    """Make the status UPDATE fail while plain reads keep working."""
    execute = db.execute

    def _execute(statement, *args, **kwargs):
        if isinstance(statement, Update):
            raise OperationalError("UPDATE tenancies", {}, Exception("database is locked"))
        return execute(statement, *args, **kwargs)

    monkeypatch.setattr(db, "execute", _execute)


# ── derive_tenancy_status ────────────────────────────────────────────────────

class TestDeriveTenancyStatus:
    def test_starts_today_is_active(self):
        assert derive_tenancy_status(TODAY, None, TODAY) == TenancyStatus.ACTIVE

    def test_starts_tomorrow_is_pending(self):
        assert derive_tenancy_status(TODAY + timedelta(days=1), None, TODAY) == TenancyStatus.PENDING

    def test_ends_today_is_active(self):
        assert derive_tenancy_status(date(2024, 1, 1), TODAY, TODAY) == TenancyStatus.ACTIVE

    def test_ended_yesterday_is_ended(self):
        assert derive_tenancy_status(date(2024, 1, 1), TODAY - timedelta(days=1), TODAY) == TenancyStatus.ENDED

    def test_open_ended_is_active(self):
        assert derive_tenancy_status(date(2020, 1, 1), None, TODAY) == TenancyStatus.ACTIVE

    def test_future_start_wins_over_end(self):
        start = TODAY + timedelta(days=10)
        assert derive_tenancy_status(start, start + timedelta(days=365), TODAY) == TenancyStatus.PENDING

    def test_same_inputs_same_result(self):
        results = {derive_tenancy_status(date(2025, 1, 1), date(2025, 12, 31), TODAY) for _ in range(5)}
        assert results == {TenancyStatus.ACTIVE}


# ── recompute_tenancy_statuses ───────────────────────────────────────────────

class TestRecomputeTenancyStatuses:
    def test_brings_stale_statuses_in_line(self, db, make_property, make_tenancy):
        prop = make_property()
        started = make_tenancy(prop, date(2025, 1, 1), status="pending")
        ended = make_tenancy(prop, date(2024, 1, 1), end_date=date(2025, 5, 31), status="active")
        upcoming = make_tenancy(prop, date(2025, 7, 1), status="active")

        result = recompute_tenancy_statuses(db, LANDLORD_ID, today=TODAY)

        assert result.success
        assert result.updated_count == 3
        assert db.get(Tenancy, started.id).status == "active"
        assert db.get(Tenancy, ended.id).status == "ended"
        assert db.get(Tenancy, upcoming.id).status == "pending"

    def test_second_run_writes_nothing(self, db, make_property, make_tenancy):
        prop = make_property()
        make_tenancy(prop, date(2025, 1, 1), status="pending")
        make_tenancy(prop, date(2024, 1, 1), end_date=date(2024, 12, 31), status="active")

        first = recompute_tenancy_statuses(db, LANDLORD_ID, today=TODAY)
        second = recompute_tenancy_statuses(db, LANDLORD_ID, today=TODAY)

        assert first.updated_count == 2
        assert second.success
        assert second.updated_count == 0

    def test_correct_rows_are_not_counted(self, db, make_property, make_tenancy):
        prop = make_property()
        make_tenancy(prop, date(2025, 1, 1), status="active")

        result = recompute_tenancy_statuses(db, LANDLORD_ID, today=TODAY)

        assert result.updated_count == 0

    def test_other_landlords_untouched(self, db, make_property, make_tenancy):
        other = make_property(landlord_id=OTHER_LANDLORD_ID)
        theirs = make_tenancy(other, date(2025, 1, 1), status="pending")

        recompute_tenancy_statuses(db, LANDLORD_ID, today=TODAY)

        assert db.get(Tenancy, theirs.id).status == "pending"

    def test_soft_deleted_untouched(self, db, make_property, make_tenancy):
        prop = make_property()
        deleted = make_tenancy(prop, date(2025, 1, 1), status="pending")
        deleted.soft_delete()
        db.commit()

        result = recompute_tenancy_statuses(db, LANDLORD_ID, today=TODAY)

        assert result.updated_count == 0
        assert db.get(Tenancy, deleted.id).status == "pending"


class TestRecomputeFailure:
    def test_failure_is_reported_as_upstream(self, db, make_property, make_tenancy, failing_status_update):
        prop = make_property()
        make_tenancy(prop, date(2025, 1, 1), status="pending")

        result = recompute_tenancy_statuses(db, LANDLORD_ID, today=TODAY)

        assert not result.success
        assert result.error_kind == ErrorKind.UPSTREAM
        assert result.updated_count == 0

    def test_read_path_keeps_stored_status(self, db, make_property, make_tenancy, failing_status_update):
        prop = make_property()
        tenancy = make_tenancy(prop, date(2025, 1, 1), status="pending")

        refresh_statuses_before_read(db, LANDLORD_ID)

        assert db.get(Tenancy, tenancy.id).status == "pending"

    def test_listing_still_served(self, client, auth_headers, make_property, make_tenancy, failing_status_update):
        prop = make_property()
        make_tenancy(prop, date.today() - timedelta(days=5), status="pending")

        response = client.get("/api/tenancies", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()[0]["status"] == "pending"
