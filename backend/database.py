# backend/database.py
import logging
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()

# Bound to an engine by init_engine() during application startup
SessionLocal = sessionmaker(autocommit=False, autoflush=False)

engine: Optional[Engine] = None


def normalize_url(url: str) -> str:
    # Heroku/Azure style URLs use postgres://, SQLAlchemy requires postgresql://
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


def build_engine(url: str) -> Engine:
    url = normalize_url(url)
    kwargs = {}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        # In-memory databases live as long as their single connection
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
    return create_engine(url, **kwargs)


def init_engine(url: str) -> Engine:
    """Create the process-wide engine, bind the session factory and create tables."""
    global engine
    if engine is not None:
        engine.dispose()
    engine = build_engine(url)
    SessionLocal.configure(bind=engine)
    init_db()
    logger.info("Database engine initialised (%s)", engine.url.get_backend_name())
    return engine


def dispose_engine() -> None:
    global engine
    if engine is not None:
        engine.dispose()
        logger.info("Database engine disposed")
    engine = None


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    # Import models so they are registered on Base.metadata
    import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
