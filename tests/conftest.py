"""Shared fixtures: in-memory database, seeded locations, record factories, API client."""

# pylint: disable=redefined-outer-name

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")

from datetime import date  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from pmtracker.db.base import Base  # noqa: E402
from pmtracker.db.init_db import seed_default_locations  # noqa: E402
from pmtracker.db.session import enable_sqlite_foreign_keys, get_db  # noqa: E402
from pmtracker.main import create_app  # noqa: E402
from pmtracker.models import Asset, Location, PreventativeMaintenance  # noqa: E402

TODAY = date(2025, 6, 15)


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Session with the two test locations seeded."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    seed_default_locations(session, ["Enterprise", "Bristol"])
    yield session
    session.close()


@pytest.fixture
def enterprise(db_session) -> Location:
    return db_session.query(Location).filter_by(name="Enterprise").one()


@pytest.fixture
def bristol(db_session) -> Location:
    return db_session.query(Location).filter_by(name="Bristol").one()


@pytest.fixture
def make_asset(db_session):
    """Factory creating an asset; calibration_anchor follows cal_due unless given."""

    def _make_asset(location: Location, **fields) -> Asset:
        fields.setdefault("calibration_anchor", fields.get("cal_due"))
        asset = Asset(location_id=location.id, **fields)
        db_session.add(asset)
        db_session.commit()
        db_session.refresh(asset)
        return asset

    return _make_asset


@pytest.fixture
def make_pm(db_session):
    """Factory creating a PM task anchored on its first due date."""

    def _make_pm(
        location: Location,
        title: str = "Filter change",
        recurrence: str = "monthly",
        next_due: str = "2025-01-15",
        asset: Asset = None,
        **fields,
    ) -> PreventativeMaintenance:
        fields.setdefault("schedule_anchor", next_due)
        pm = PreventativeMaintenance(
            location_id=location.id,
            asset_id=asset.id if asset else None,
            title=title,
            recurrence=recurrence,
            next_due=next_due,
            **fields,
        )
        db_session.add(pm)
        db_session.commit()
        db_session.refresh(pm)
        return pm

    return _make_pm


@pytest.fixture
def client(db_session):
    """API client bound to the test session."""
    app = create_app()

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)
