"""
Success/failure values returned by the report services.

Services never raise application errors to the API layer. A failed
operation comes back as a `ServiceResult` carrying a `ServiceError`, whose
`status_code` the router uses for the HTTP response.
"""

from dataclasses import dataclass, field as dataclass_field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar

from hostel_ledger.core.exceptions import BaseAppException, ErrorCode


class ErrorSeverity(str, Enum):
    """How loudly a failure should be reported."""

    WARNING = "WARNING"
    ERROR = "ERROR"


@dataclass
class ServiceError:
    """Error payload of a failed result."""

    code: ErrorCode
    message: str
    severity: ErrorSeverity = ErrorSeverity.ERROR
    details: Optional[Dict[str, Any]] = None
    field: Optional[str] = None
    status_code: int = 500
    timestamp: datetime = dataclass_field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code.value,
            "message": self.message,
            "severity": self.severity.value,
            "details": self.details,
            "field": self.field,
            "timestamp": self.timestamp.isoformat(),
        }


TData = TypeVar("TData")


@dataclass
class ServiceResult(Generic[TData]):
    """
    Outcome of a service call.

    Attributes:
        is_success: True when `data` holds the result
        data: Report, summary or other payload (success only)
        error: What went wrong (failure only)
        metadata: Run context such as owner id and floor count
    """

    is_success: bool
    data: Optional[TData] = None
    error: Optional[ServiceError] = None
    metadata: Dict[str, Any] = dataclass_field(default_factory=dict)

    @classmethod
    def success(
        cls,
        data: TData,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "ServiceResult[TData]":
        return cls(is_success=True, data=data, metadata=metadata or {})

    @classmethod
    def failure(cls, error: ServiceError) -> "ServiceResult[TData]":
        return cls(is_success=False, error=error)

    @classmethod
    def from_app_exception(cls, exception: BaseAppException) -> "ServiceResult[TData]":
        """Carry an application exception's code, details and HTTP status."""
        return cls.failure(
            ServiceError(
                code=exception.error_code,
                message=exception.message,
                details=exception.details,
                status_code=exception.status_code,
            )
        )

    @classmethod
    def validation_failure(
        cls,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
    ) -> "ServiceResult[TData]":
        """Rejected input; reported as 422."""
        return cls.failure(
            ServiceError(
                code=code,
                message=message,
                field=field,
                details=details,
                severity=ErrorSeverity.WARNING,
                status_code=422,
            )
        )

    def unwrap(self) -> TData:
        """
        Return the data of a successful result.

        Raises:
            ValueError: the result is a failure
        """
        if not self.is_success:
            raise ValueError(f"Cannot unwrap failed result: {self.error.message}")
        return self.data

    def __bool__(self) -> bool:
        return self.is_success


__all__ = [
    "ErrorCode",
    "ErrorSeverity",
    "ServiceError",
    "ServiceResult",
]
