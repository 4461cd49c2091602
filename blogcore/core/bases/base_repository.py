from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, SQLModel, func, select

from blogcore.core.response import schemas
from blogcore.core.utils.logging import get_logger

T = TypeVar("T", bound=SQLModel)

logger = get_logger("repository")


class RepositoryError(Exception):
    """Custom exception for repository errors."""

    pass


class ConflictError(RepositoryError):
    """A storage-level constraint rejected the write."""

    pass


class BaseRepository(Generic[T]):
    """Data access bound to one request-scoped session.

    Repositories flush but never commit on their own; callers decide where
    the transaction ends through :meth:`commit`.
    """

    model: Type[T]

    def __init__(self, session: Session):
        self.session = session

    def _handle_db_error(self, error: SQLAlchemyError, operation: str) -> None:
        """Handle database errors and raise appropriate exceptions."""
        if isinstance(error, IntegrityError):
            logger.warning("Integrity error during %s: %s", operation, error.orig)
            raise ConflictError(
                f"Database integrity error during {operation}: {error.orig}"
            ) from error
        else:
            raise RepositoryError(
                f"Database error during {operation}: {error}"
            ) from error

    def _build_select_stmt(self, **filters) -> Any:
        """Build select statement with optional equality filters."""
        stmt = select(self.model)
        for field, value in filters.items():
            if not hasattr(self.model, field):
                raise RepositoryError(
                    f"{self.model.__name__} has no field named {field!r}"
                )
            stmt = stmt.where(getattr(self.model, field) == value)
        return stmt

    # ----------------- READ ----------------- #
    def get(self, item_id: Any) -> Optional[T]:
        """Get a single item by ID."""
        try:
            return self.session.get(self.model, item_id)
        except SQLAlchemyError as e:
            self._handle_db_error(e, "get")

    def exists(self, item_id: Any) -> bool:  # type:ignore
        """Check if an item exists."""
        try:
            stmt = select(self.model.id).where(self.model.id == item_id)  # type: ignore
            return self.session.exec(stmt).first() is not None
        except SQLAlchemyError as e:
            self._handle_db_error(e, "exists")

    def count_stmt(self, stmt: Any) -> int:  # type:ignore
        """Count the rows a select statement would return."""
        try:
            count_stmt = select(func.count()).select_from(stmt.subquery())
            return self.session.exec(count_stmt).one()
        except SQLAlchemyError as e:
            self._handle_db_error(e, "count")

    def count(self, **filters) -> int:
        """Count items matching optional filters."""
        return self.count_stmt(self._build_select_stmt(**filters))

    def paginate(
        self, stmt: Any, page: int = 1, per_page: int = 10
    ) -> schemas.PaginatedResponse:  # type:ignore
        """Run an ordered select statement one page at a time."""
        if page < 1:
            page = 1
        if per_page < 1 or per_page > 100:
            per_page = 10

        total = self.count_stmt(stmt)
        try:
            offset = (page - 1) * per_page
            items = list(self.session.exec(stmt.offset(offset).limit(per_page)).all())
        except SQLAlchemyError as e:
            self._handle_db_error(e, "paginate")

        pages = max((total + per_page - 1) // per_page, 1)  # Ceiling division

        return schemas.PaginatedResponse(
            success=True,
            data=items,
            total=total,
            page=page,
            per_page=per_page,
            pages=pages,
            message="Items retrieved successfully",
        )

    # ----------------- WRITE ----------------- #
    def add(self, obj: T) -> T:
        """Stage an object and flush it so it gets an id."""
        try:
            self.session.add(obj)
            self.session.flush()
            return obj
        except SQLAlchemyError as e:
            self.session.rollback()
            self._handle_db_error(e, "add")

    def delete(self, obj: T) -> None:
        """Delete an object; relationship cascades run in the same flush."""
        try:
            self.session.delete(obj)
            self.session.flush()
        except SQLAlchemyError as e:
            self.session.rollback()
            self._handle_db_error(e, "delete")

    def commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            self._handle_db_error(e, "commit")

    def rollback(self) -> None:
        self.session.rollback()
