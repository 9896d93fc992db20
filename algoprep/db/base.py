"""
Shared DB base and session factory.
engine, SessionLocal and Base all live in algoprep.db.session.
"""
from algoprep.db.session import engine, SessionLocal, Base

__all__ = ["engine", "SessionLocal", "Base", "init_db"]


def init_db():
    """Create all tables (local/dev and tests; Supabase is migrated separately)."""
    from algoprep import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
