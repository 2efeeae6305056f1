from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker
from contextlib import contextmanager
import logging

from .config import DATABASE_URL

logger = logging.getLogger(__name__)


def build_engine(database_url: str, **kwargs):
    """Create an engine with the connection settings used across the app"""
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Writers queue on the sqlite file lock instead of failing immediately
        connect_args = {"check_same_thread": False, "timeout": 30}
    else:
        kwargs.setdefault("pool_pre_ping", True)
        kwargs.setdefault("pool_recycle", 300)

    return create_engine(database_url, connect_args=connect_args, **kwargs)


engine = build_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope():
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db(bind=None):
    """Initialize database tables"""
    # Register every model on the metadata before creating tables
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def check_db_connection() -> dict:
    """Check database connectivity"""
    status = {"database": False}

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        status["database"] = True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")

    return status
