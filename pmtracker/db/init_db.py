# pmtracker/db/init_db.py
"""Database initialization utilities."""
import logging
from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from pmtracker.config.settings import settings
from pmtracker.db.base import Base, import_models
from pmtracker.models import Location

logger = logging.getLogger(__name__)


def seed_default_locations(db: Session, names: Optional[Iterable[str]] = None) -> int:
    """
    Insert any missing default locations.

    Args:
        db: Database session
        names: Location names; defaults to ``settings.DEFAULT_LOCATIONS``

    Returns:
        Number of locations created
    """
    names = list(settings.DEFAULT_LOCATIONS if names is None else names)
    existing = set(db.execute(select(Location.name)).scalars())

    created = 0
    for name in names:
        if name not in existing:
            db.add(Location(name=name))
            existing.add(name)
            created += 1

    if created:
        db.commit()
        logger.info(f"Seeded {created} default locations")
    return created


def init_db(bind: Optional[Engine] = None, seed: bool = True) -> None:
    """
    Initialize the database by creating all tables and seeding locations.

    Note: This is suitable for development/testing only.
    """
    if bind is None:
        from pmtracker.db.session import engine as bind

    try:
        import_models()
        Base.metadata.create_all(bind=bind)
        logger.info("Database tables ensured")

        if seed:
            with Session(bind=bind) as db:
                seed_default_locations(db)
    except Exception as e:
        logger.error(f"Error initializing database: {e}")
        raise


def drop_db(bind: Optional[Engine] = None) -> None:
    """
    Drop all database tables.

    WARNING: This will delete all data! Only for development/testing purposes.
    """
    if bind is None:
        from pmtracker.db.session import engine as bind

    Base.metadata.drop_all(bind=bind)
    logger.warning("All database tables dropped")


def reset_db(bind: Optional[Engine] = None) -> None:
    """Drop and recreate all tables."""
    logger.warning("Resetting database...")
    drop_db(bind)
    init_db(bind)
    logger.info("Database reset complete")
