"""Database engine, session time zone pinning and the client handle."""
from collections.abc import Generator
from contextlib import contextmanager
import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from ccard_db.config import Settings, get_settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def session_timezone_statement(zone: str) -> str:
    """Build the SET TIME ZONE directive.

    The zone is interpolated, not bound; it must come from trusted configuration.
    """
    return f"SET TIME ZONE '{zone}'"


def _make_timezone_listener(zone: str):
    statement = session_timezone_statement(zone)

    def set_session_timezone(dbapi_connection, connection_record) -> None:
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute(statement)
            cursor.close()
            # A SET inside a transaction is reverted by the pool's reset-on-return rollback.
            dbapi_connection.commit()
        except Exception:
            logger.error(f"Failed to set session time zone to {zone!r}; discarding connection")
            dbapi_connection.close()
            raise
        logger.debug(f"Session time zone set to {zone} on new connection")

    return set_session_timezone


def pin_session_timezone(engine: Engine, zone: str) -> None:
    """Run SET TIME ZONE once on every new physical connection of ``engine``.

    The directive runs on the pool ``connect`` event, so it happens before the
    connection is handed out and is not repeated on later checkouts. If it fails
    the connection is closed and the error propagates to whoever asked for it.
    """
    event.listen(engine, "connect", _make_timezone_listener(zone))


def create_db_engine(settings: Settings) -> Engine:
    """Create the engine described by ``settings``.

    PostgreSQL engines get a sized pool and the session time zone listener.
    SQLite has no session time zone and is only used for tests and scratch work.
    """
    url = make_url(settings.database_url)
    if url.drivername == "postgresql":
        # Bare postgresql:// resolves to psycopg 3 on newer SQLAlchemy; the package ships psycopg2
        url = url.set(drivername="postgresql+psycopg2")

    if url.get_backend_name() == "sqlite":
        # SQLite requires check_same_thread=False when sessions cross threads
        engine = create_engine(
            url,
            connect_args={"check_same_thread": False},
            echo=settings.debug,
        )
    else:
        engine = create_engine(
            url,
            pool_size=settings.pool_size,
            max_overflow=settings.max_overflow,
            pool_timeout=settings.pool_timeout,
            pool_pre_ping=True,
            echo=settings.debug,
        )

    if engine.dialect.name == "postgresql":
        pin_session_timezone(engine, settings.timezone)

    logger.debug(f"Created engine for {url.render_as_string(hide_password=True)}")
    return engine


class Database:
    """Owned database client: one engine, one session factory.

    Construct once at process start and dispose at shutdown, either explicitly
    or by using the instance as a context manager.
    """

    def __init__(self, settings: Settings | None = None, engine: Engine | None = None):
        self.settings = settings or get_settings()
        self.engine = engine if engine is not None else create_db_engine(self.settings)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Session scoped to one unit of work: commit on success, rollback on error."""
        db = self.SessionLocal()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def create_all(self) -> None:
        """Create all tables. Migrations are managed outside this package."""
        # Import all models so they're registered with Base
        from ccard_db import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        """Close every pooled connection."""
        self.engine.dispose()
        logger.debug("Database connection pool disposed")
