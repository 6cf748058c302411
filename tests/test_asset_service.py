"""Tests for asset updates and service-level database failures."""

# pylint: disable=redefined-outer-name

import pytest
from sqlalchemy.exc import OperationalError

from pmtracker.core.exceptions import AssetNotFoundError, DatabaseError, ErrorCode
from pmtracker.models import Asset
from pmtracker.schemas.asset import AssetUpdate
from pmtracker.services.facility import AssetService


@pytest.fixture
def service(db_session):
    return AssetService(db_session)


# ============================================================================
# Updates
# ============================================================================


class TestUpdateAsset:
    def test_first_cal_due_fixes_anchor(self, service, enterprise, make_asset):
        asset = make_asset(enterprise, aid="EN-7")

        result = service.update_asset(asset.id, AssetUpdate(cal_due="2025-05-01", cal_freq="Annual"))

        assert result.is_success
        assert result.data.calibration_anchor == "2025-05-01"
        assert result.data.calibration_rule is not None
        assert result.data.aid == "EN-7"

    def test_only_sent_fields_change(self, service, enterprise, make_asset):
        asset = make_asset(enterprise, aid="EN-8", owner="Facilities", cal_due="2025-02-01")

        result = service.update_asset(asset.id, AssetUpdate.model_validate({"owner": "Lab"}))

        assert result.data.owner == "Lab"
        assert result.data.aid == "EN-8"
        assert result.data.cal_due == "2025-02-01"
        assert result.data.calibration_anchor == "2025-02-01"

    def test_empty_cal_due_clears_due_date(self, service, enterprise, make_asset):
        asset = make_asset(enterprise, cal_due="2025-02-01")

        result = service.update_asset(asset.id, AssetUpdate.model_validate({"calDue": ""}))

        assert result.data.cal_due is None
        assert result.data.calibration_anchor == "2025-02-01"

    def test_unknown_asset(self, service):
        result = service.update_asset(999, AssetUpdate(notes="x"))

        assert result.is_failure
        with pytest.raises(AssetNotFoundError):
            result.unwrap()


class TestDeleteAsset:
    def test_delete(self, service, db_session, bristol, make_asset):
        asset = make_asset(bristol)

        assert service.delete_asset(asset.id).is_success
        assert db_session.get(Asset, asset.id) is None
        assert service.delete_asset(asset.id).error.code == ErrorCode.ASSET_NOT_FOUND


# ============================================================================
# Database failures
# ============================================================================


class TestDatabaseFailure:
    def test_failure_unwraps_to_database_error(self, service):
        failure = OperationalError("SELECT 1", {}, Exception("database is locked"))

        result = service._handle_exception(failure, "list assets")

        assert result.is_failure
        assert result.error.code == ErrorCode.DATABASE_ERROR
        with pytest.raises(DatabaseError) as exc_info:
            result.unwrap()
        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Failed to list assets"
