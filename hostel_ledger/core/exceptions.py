"""
Custom Exceptions for the Hostel Income Ledger

This module defines custom exception classes used throughout the application
for better error handling and debugging.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"

    # External service errors
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    SUPERSEDED = "SUPERSEDED"

    # Configuration errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    MISSING_CONFIGURATION = "MISSING_CONFIGURATION"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format"""
        return {
            "error": {
                "message": self.message,
                "code": self.error_code.value,
                "details": self.details,
                "type": self.__class__.__name__
            }
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# Validation Exceptions
# ========================================

class ValidationError(BaseAppException):
    """Exception raised when request data fails validation"""

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[Dict[str, Any]] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        status_code: int = 422
    ):
        super().__init__(message, error_code, details, status_code)


class InvalidDateRangeError(ValidationError):
    """Exception raised when a report date range is unusable"""

    def __init__(
        self,
        message: str = "Invalid date range. Make sure start <= end.",
        start: Optional[str] = None,
        end: Optional[str] = None
    ):
        details = {
            "start": start,
            "end": end
        }
        super().__init__(message, details, ErrorCode.INVALID_DATE_RANGE)


# ========================================
# External Service Exceptions
# ========================================

class ExternalServiceError(BaseAppException):
    """Exception raised when the hostel backend fails"""

    def __init__(
        self,
        message: str = "External service error",
        service_name: Optional[str] = None,
        status: Optional[int] = None,
        error_code: ErrorCode = ErrorCode.EXTERNAL_SERVICE_ERROR,
    ):
        details = {
            "service_name": service_name,
            "status": status
        }
        super().__init__(message, error_code, details, 502)
        self.status = status


class TimeoutError(ExternalServiceError):
    """Exception raised when a backend request times out"""

    def __init__(
        self,
        message: str = "Operation timed out",
        timeout_seconds: Optional[float] = None,
        service_name: Optional[str] = None
    ):
        super().__init__(message, service_name=service_name, error_code=ErrorCode.TIMEOUT_ERROR)
        self.status_code = 504
        self.details["timeout_seconds"] = timeout_seconds


class SupersededLoadError(BaseAppException):
    """Exception raised when a newer load replaced an in-flight one"""

    def __init__(
        self,
        message: str = "Load superseded by a newer request",
        generation: Optional[int] = None,
        current_generation: Optional[int] = None
    ):
        details = {
            "generation": generation,
            "current_generation": current_generation
        }
        super().__init__(message, ErrorCode.SUPERSEDED, details, 409)


# ========================================
# Configuration Exceptions
# ========================================

class ConfigurationError(BaseAppException):
    """Exception raised when configuration is invalid"""

    def __init__(
        self,
        message: str = "Configuration error",
        config_key: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.CONFIGURATION_ERROR
    ):
        details = {
            "config_key": config_key
        }
        super().__init__(message, error_code, details, 500)


class MissingConfigurationError(ConfigurationError):
    """Exception raised when required configuration is missing"""

    def __init__(
        self,
        message: str = "Missing required configuration",
        config_key: Optional[str] = None
    ):
        super().__init__(
            message,
            config_key=config_key,
            error_code=ErrorCode.MISSING_CONFIGURATION
        )


__all__ = [
    'ErrorCode',
    'BaseAppException',
    'ValidationError',
    'InvalidDateRangeError',
    'ExternalServiceError',
    'TimeoutError',
    'SupersededLoadError',
    'ConfigurationError',
    'MissingConfigurationError',
]
