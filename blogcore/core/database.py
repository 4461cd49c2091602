from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator, Optional

from sqlalchemy import DateTime, event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlalchemy.types import TypeDecorator
from sqlmodel import Field, Session, SQLModel, create_engine

from blogcore.core.utils.logging import get_logger
from blogcore.core.utils.utils import to_storage_time, utc_now

logger = get_logger("database")

IN_MEMORY_URLS = {"sqlite://", "sqlite:///:memory:"}


class UTCTimestamp(TypeDecorator):
    """Timestamp column that always hands back aware UTC datetimes.

    Naive values are taken as UTC. Backends without time zone support
    (SQLite) store the UTC wall time.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect: Any) -> Optional[datetime]:
        return to_storage_time(value)

    def process_result_value(self, value: Optional[datetime], dialect: Any) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


def create_db_engine(url: str, echo: bool = False) -> Engine:
    """Create an engine; SQLite connections get foreign keys switched on."""
    kwargs: dict[str, Any] = {"echo": echo}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in IN_MEMORY_URLS:
            kwargs["poolclass"] = StaticPool

    db_engine = create_engine(url, **kwargs)

    if url.startswith("sqlite"):

        @event.listens_for(db_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return db_engine


class Database:
    def __init__(self, db_url: str, echo: bool = False):
        self.url = db_url
        self.engine = create_db_engine(db_url, echo=echo)

    def create_all(self) -> None:
        # Registers every table on SQLModel.metadata before creating them.
        import blogcore.apps.blog.models  # noqa: F401

        SQLModel.metadata.create_all(self.engine)
        logger.info("Schema ready on %s", self.engine.url.render_as_string())

    def disconnect(self) -> None:
        self.engine.dispose()

    @contextmanager
    def get_session(self) -> Iterator[Session]:
        with Session(self.engine) as session:
            yield session


class BaseModel(SQLModel):
    """Base model with common fields."""

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCTimestamp)
    updated_at: Optional[datetime] = Field(
        default=None,
        sa_type=UTCTimestamp,
        sa_column_kwargs={"onupdate": utc_now},
    )
