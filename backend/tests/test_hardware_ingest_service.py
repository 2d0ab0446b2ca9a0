"""Service-level tests for fill-level ingestion and alert issuing."""
from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import OperationalError

from app.core.errors import ApiError
from app.models.dustbin import Dustbin
from app.models.notification import Notification
from app.services.hardware_ingest_service import (
    _insert_alert_if_absent,
    alert_message,
    report_fill_level,
    verify_hardware_key,
)
from tests.conftest import USER_ID


@pytest.mark.parametrize("credential", [None, "", "wrong-key", "test-hardware-key "])
def test_verify_hardware_key_rejects_bad_credential(credential):
    with pytest.raises(ApiError) as exc:
        verify_hardware_key(credential, "test-hardware-key")
    assert exc.value.status_code == 401
    assert exc.value.code == "INVALID_API_KEY"


def test_verify_hardware_key_rejects_everything_when_unconfigured():
    with pytest.raises(ApiError) as exc:
        verify_hardware_key("", "")
    assert exc.value.status_code == 401


def test_verify_hardware_key_accepts_match():
    verify_hardware_key("test-hardware-key", "test-hardware-key")


@pytest.mark.parametrize("dustbin_id", [None, 0, -1, "1", 1.5, True, [1], 2**63])
def test_invalid_dustbin_id_rejected_before_lookup(session_factory, make_dustbin, load_dustbin, dustbin_id):
    bin_id = make_dustbin(fill_level=40)
    with session_factory() as db:
        with pytest.raises(ApiError) as exc:
            report_fill_level(db, dustbin_id, 80)
    assert exc.value.status_code == 400
    assert exc.value.code == "MISSING_DUSTBIN_ID"
    assert load_dustbin(bin_id).fill_level == 40


@pytest.mark.parametrize("fill_level", [None, -1, 101, 150, "80", 50.5, False, True])
def test_invalid_fill_level_rejected_without_mutation(session_factory, make_dustbin, load_dustbin, fill_level):
    bin_id = make_dustbin(fill_level=40)
    with session_factory() as db:
        with pytest.raises(ApiError) as exc:
            report_fill_level(db, bin_id, fill_level)
    assert exc.value.status_code == 400
    assert exc.value.code == "INVALID_FILL_LEVEL"
    assert load_dustbin(bin_id).fill_level == 40


def test_integral_float_fill_level_is_accepted(session_factory, make_dustbin, load_dustbin):
    bin_id = make_dustbin()
    with session_factory() as db:
        data = report_fill_level(db, bin_id, 60.0)
    assert data["fillLevel"] == 60
    assert load_dustbin(bin_id).fill_level == 60


def test_unknown_dustbin_is_not_found(session_factory):
    with session_factory() as db:
        with pytest.raises(ApiError) as exc:
            report_fill_level(db, 9999, 50)
        assert db.query(Notification).count() == 0
    assert exc.value.status_code == 404
    assert exc.value.code == "DUSTBIN_NOT_FOUND"


def test_report_updates_level_status_and_timestamp(session_factory, make_dustbin, load_dustbin):
    bin_id = make_dustbin(fill_level=10)
    with session_factory() as db:
        data = report_fill_level(db, bin_id, 55)
    row = load_dustbin(bin_id)
    assert data["id"] == bin_id
    assert data["fillLevel"] == 55
    assert data["status"] == "three-quarter"
    assert data["updatedAt"]
    assert row.fill_level == 55
    assert row.status == "three-quarter"


def test_alert_raised_once_for_full_bin(session_factory, make_dustbin, alerts_for):
    bin_id = make_dustbin(name="Cafeteria Bin", fill_level=40)
    with session_factory() as db:
        report_fill_level(db, bin_id, 80)
        report_fill_level(db, bin_id, 95)
    alerts = alerts_for(bin_id)
    assert len(alerts) == 1
    assert alerts[0].user_id == USER_ID
    assert alerts[0].is_read is False
    assert alerts[0].message == alert_message("Cafeteria Bin", 80)


def test_below_threshold_creates_no_alert(session_factory, make_dustbin, alerts_for):
    bin_id = make_dustbin()
    with session_factory() as db:
        report_fill_level(db, bin_id, 74)
    assert alerts_for(bin_id) == []


def test_low_reading_does_not_clear_existing_alert(session_factory, make_dustbin, alerts_for):
    bin_id = make_dustbin()
    with session_factory() as db:
        report_fill_level(db, bin_id, 90)
        report_fill_level(db, bin_id, 10)
    assert len(alerts_for(bin_id)) == 1


def test_bin_without_owner_gets_no_alert(session_factory, make_dustbin, alerts_for):
    bin_id = make_dustbin(user_id="")
    with session_factory() as db:
        data = report_fill_level(db, bin_id, 90)
    assert data["status"] == "full"
    assert alerts_for(bin_id) == []


def test_conditional_insert_skips_when_alert_already_present(session_factory, make_dustbin, alerts_for):
    """A report that missed the existing alert (concurrent request) still cannot add a second one."""
    bin_id = make_dustbin()
    with session_factory() as db:
        db.add(Notification(user_id=USER_ID, dustbin_id=bin_id, message="earlier", type="alert", is_read=False))
        db.commit()
        dustbin = db.query(Dustbin).filter(Dustbin.id == bin_id).one()
        inserted = _insert_alert_if_absent(db, dustbin, 85, datetime.now(timezone.utc))
        db.commit()
    assert inserted is False
    alerts = alerts_for(bin_id)
    assert len(alerts) == 1
    assert alerts[0].message == "earlier"


def test_persistence_failure_is_internal_and_rolled_back(session_factory, make_dustbin, load_dustbin, alerts_for):
    bin_id = make_dustbin(fill_level=40)
    with session_factory() as db:
        def failing_commit():
            raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

        db.commit = failing_commit
        with pytest.raises(ApiError) as exc:
            report_fill_level(db, bin_id, 90)
    assert exc.value.status_code == 500
    assert exc.value.code == "INTERNAL_ERROR"
    assert load_dustbin(bin_id).fill_level == 40
    assert alerts_for(bin_id) == []
