from typing import Iterable, List, Optional

from blogcore.core.response.schemas import ErrorDetail, ErrorResponse


class ServiceException(Exception):
    """Base error raised by the service layer."""

    error_code = "SERVICE_ERROR"

    def __init__(
        self, detail: str, error_details: Optional[Iterable[ErrorDetail]] = None
    ):
        super().__init__(detail)
        self.detail = detail
        self.error_details: List[ErrorDetail] = list(error_details or [])

    def fields(self) -> List[str]:
        return [item.field for item in self.error_details]

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            message=self.detail,
            error_code=self.error_code,
            error_details=self.error_details,
        )


class ValidationException(ServiceException):
    error_code = "VALIDATION_ERROR"


class NotFoundException(ServiceException):
    error_code = "NOT_FOUND"


class ConflictException(ServiceException):
    error_code = "CONFLICT"
