"""Database setup and session management."""

from collections.abc import Generator
from typing import Any

from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from todo_api.config import Settings, get_settings


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


# Global engine and session factory
engine: Any = None
SessionLocal: Any = None


def enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(settings: Settings) -> Engine:
    """Create an engine for the configured database URL."""
    engine_kwargs: dict[str, Any] = {"pool_pre_ping": True, "echo": settings.db_echo}

    if settings.is_sqlite:
        engine_kwargs["connect_args"] = {"check_same_thread": False}
    else:
        engine_kwargs["pool_size"] = settings.db_pool_size
        engine_kwargs["max_overflow"] = settings.db_max_overflow

    new_engine = create_engine(settings.database_url, **engine_kwargs)

    if settings.is_sqlite:
        event.listen(new_engine, "connect", enable_sqlite_foreign_keys)

    return new_engine


def init_db(settings: Settings | None = None) -> None:
    """Initialize database engine and session factory."""
    global engine, SessionLocal

    if settings is None:
        settings = get_settings()

    engine = build_engine(settings)

    # Instrument SQLAlchemy with OpenTelemetry
    if settings.otel_enabled:
        SQLAlchemyInstrumentor().instrument(
            engine=engine,
            service=settings.otel_service_name,
        )

    # Create session factory
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    if settings.db_create_tables:
        create_tables()


def get_db() -> Generator[Session]:
    """Dependency to get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """Create all tables in the database."""
    # Models must be imported so their tables are registered on Base.metadata
    import todo_api.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
