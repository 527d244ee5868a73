"""DB engine, session scope and table mapping for the Finance Visualizer."""

import datetime as dt
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import Date, DateTime, Float, String, TypeDecorator, create_engine
from sqlalchemy.engine import Dialect, Engine
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.settings import get_settings

_ENGINE: Engine | None = None
_SESSION_FACTORY: sessionmaker[Session] | None = None


class UTCDateTime(TypeDecorator):
    """Timezone-aware datetime stored as UTC; naive values read back (SQLite) are tagged as UTC."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: dt.datetime | None, dialect: Dialect) -> dt.datetime | None:
        """Normalize aware values to UTC before writing."""
        _ = dialect
        if value is not None and value.tzinfo is not None:
            return value.astimezone(dt.UTC)
        return value

    def process_result_value(self, value: dt.datetime | None, dialect: Dialect) -> dt.datetime | None:
        """Attach UTC to naive values coming back from the database."""
        _ = dialect
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=dt.UTC)
        return value


class Base(DeclarativeBase):
    """Declarative base for the application's tables."""


class TransactionRecord(Base):
    """A stored income or expense transaction."""

    __tablename__ = "transactions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    description: Mapped[str] = mapped_column(String(100), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    category: Mapped[str] = mapped_column(String, nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    created_at: Mapped[dt.datetime] = mapped_column(UTCDateTime, nullable=False)
    updated_at: Mapped[dt.datetime] = mapped_column(UTCDateTime, nullable=False)


def build_engine(database_url: str, *, echo: bool = False) -> Engine:
    """Create a SQLAlchemy engine, adjusting SQLite connections for use across request threads."""
    if database_url.startswith("sqlite"):
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url.rstrip("/") in ("sqlite:", "sqlite+pysqlite:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, echo=echo, **kwargs)
    return create_engine(database_url, echo=echo, pool_pre_ping=True)


def get_engine() -> Engine:
    """Return the shared engine, creating it from settings on first use."""
    global _ENGINE, _SESSION_FACTORY  # noqa: PLW0603
    if _ENGINE is None:
        settings = get_settings()
        _ENGINE = build_engine(settings.database_url, echo=settings.database_echo)
        _SESSION_FACTORY = sessionmaker(bind=_ENGINE, autoflush=False, expire_on_commit=False)
    return _ENGINE


def get_session_factory() -> sessionmaker[Session]:
    """Return the sessionmaker bound to the shared engine."""
    get_engine()
    if _SESSION_FACTORY is None:
        msg = "Session factory was not initialized"
        raise RuntimeError(msg)
    return _SESSION_FACTORY


def init_db(engine: Engine | None = None) -> None:
    """Create the transactions table if it does not exist."""
    Base.metadata.create_all(engine or get_engine())


def dispose_engine() -> None:
    """Close pooled connections and forget the shared engine."""
    global _ENGINE, _SESSION_FACTORY  # noqa: PLW0603
    if _ENGINE is not None:
        _ENGINE.dispose()
    _ENGINE = None
    _SESSION_FACTORY = None


@contextmanager
def session_scope(factory: sessionmaker[Session] | None = None) -> Iterator[Session]:
    """Provide a transactional scope: commit on success, rollback on error, always close."""
    session = (factory or get_session_factory())()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
