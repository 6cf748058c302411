from pmtracker.db.base import Base
from pmtracker.db.session import SessionLocal, engine, get_db

__all__ = ["Base", "SessionLocal", "engine", "get_db"]
