import logging

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from fittrack.config import settings

logger = logging.getLogger(__name__)

REQUIRED_TABLES = ("users", "calorie_logs", "weight_logs", "activity_logs")

_connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True, connect_args=_connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    pass


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_database() -> None:
    """Create missing tables and make sure every table the API needs is present."""
    # Register models on the metadata before create_all.
    from fittrack.models import activity, calorie, user, weight  # noqa: F401

    logger.info("Initializing database...")
    Base.metadata.create_all(bind=engine)

    existing = set(inspect(engine).get_table_names())
    missing = [table for table in REQUIRED_TABLES if table not in existing]
    if missing:
        logger.error("Database tables missing after bootstrap: %s", ", ".join(missing))
        raise RuntimeError(f"Database tables incomplete: {', '.join(missing)}")
    logger.info("Database initialization complete")


def check_database_health() -> dict:
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return {"status": "healthy", "connected": True}
    except Exception as exc:
        logger.warning("Database health check failed: %s", exc)
        return {"status": "unhealthy", "connected": False}
