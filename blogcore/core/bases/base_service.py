from typing import Any, Generic, List, Optional, TypeVar

from sqlmodel import SQLModel

from blogcore.core import exceptions
from blogcore.core.bases.base_repository import (
    BaseRepository,
    ConflictError,
    RepositoryError,
)
from blogcore.core.response.schemas import ErrorDetail
from blogcore.core.utils.logging import get_logger

T = TypeVar("T", bound=SQLModel)

logger = get_logger("service")


def field_error(
    field: str, code: str, message: str, target: Optional[str] = None
) -> ErrorDetail:
    return ErrorDetail(field=field, code=code, message=message, target=target)


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class BaseService(Generic[T]):
    """Validation and transaction boundary around one repository."""

    entity_name = "Item"

    def __init__(self, repository: BaseRepository[T]):
        self.repository = repository

    def _validate_delete(self, item_id: Any, existing_item: T) -> None:
        """Validate before delete."""
        pass

    def _raise_if_invalid(self, errors: List[ErrorDetail]) -> None:
        if errors:
            logger.info(
                "%s rejected: %s",
                self.entity_name,
                ", ".join(f"{e.field}:{e.code}" for e in errors),
            )
            raise exceptions.ValidationException(
                f"{self.entity_name} is invalid", errors
            )

    def _get_or_404(self, item_id: Any) -> T:
        item = self.repository.get(item_id)
        if item is None:
            raise exceptions.NotFoundException(
                f"{self.entity_name} with id {item_id} not found"
            )
        return item

    def _storage_error(
        self, error: RepositoryError, operation: str
    ) -> exceptions.ServiceException:
        """Map a repository failure onto the service exception it stands for."""
        if isinstance(error, ConflictError):
            return exceptions.ConflictException(
                f"{self.entity_name} {operation} conflicts with stored data",
                [field_error("", "CONFLICT", str(error))],
            )
        return exceptions.ServiceException(
            f"{self.entity_name} {operation} failed: {error}"
        )

    def _commit(self, operation: str) -> None:
        try:
            self.repository.commit()
        except RepositoryError as e:
            raise self._storage_error(e, operation) from e

    def _abort(self) -> None:
        self.repository.rollback()

    def count(self) -> int:
        return self.repository.count()

    def delete(self, item_id: Any) -> bool:
        existing = self._get_or_404(item_id)
        self._validate_delete(item_id, existing)
        try:
            self.repository.delete(existing)
        except RepositoryError as e:
            raise self._storage_error(e, "delete") from e
        self._commit("delete")
        logger.info("Deleted %s %s", self.entity_name, item_id)
        return True
