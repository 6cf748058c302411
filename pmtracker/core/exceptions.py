"""
Custom Exceptions for the Maintenance Tracker

This module defines custom exception classes used throughout the application
for better error handling and debugging.
"""

from typing import Any, Dict, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    OPERATION_FAILED = "OPERATION_FAILED"

    # Database errors
    DATABASE_ERROR = "DATABASE_ERROR"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"

    # Scheduling errors
    INVALID_DATE = "INVALID_DATE"
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"

    # Entity specific errors
    LOCATION_NOT_FOUND = "LOCATION_NOT_FOUND"
    ASSET_NOT_FOUND = "ASSET_NOT_FOUND"
    PREVENTATIVE_MAINTENANCE_NOT_FOUND = "PREVENTATIVE_MAINTENANCE_NOT_FOUND"


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
# General Application Exceptions
# ========================================

class OperationError(BaseAppException):
    """Exception raised when an operation fails"""

    def __init__(
        self,
        message: str = "Operation failed",
        error_code: ErrorCode = ErrorCode.OPERATION_FAILED,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        super().__init__(message, error_code, details, status_code)


class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str,
        resource_id: Optional[Any] = None,
        message: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.RESOURCE_NOT_FOUND,
    ):
        if message is None:
            message = f"{resource_type} not found"
            if resource_id is not None:
                message += f" (ID: {resource_id})"
        details = {"resource_type": resource_type}
        if resource_id is not None:
            details["resource_id"] = str(resource_id)
        super().__init__(message, error_code, details, 404)
        self.resource_type = resource_type
        self.resource_id = resource_id


# ========================================
# Entity Not Found Exceptions
# ========================================

class LocationNotFoundError(ResourceNotFoundError):
    """Exception raised when a location is not found"""

    def __init__(self, location_id: Optional[Any] = None):
        super().__init__("Location", location_id, error_code=ErrorCode.LOCATION_NOT_FOUND)


class AssetNotFoundError(ResourceNotFoundError):
    """Exception raised when an asset is not found"""

    def __init__(self, asset_id: Optional[Any] = None, message: Optional[str] = None):
        super().__init__("Asset", asset_id, message=message, error_code=ErrorCode.ASSET_NOT_FOUND)


class PreventativeMaintenanceNotFoundError(ResourceNotFoundError):
    """Exception raised when a preventative maintenance record is not found"""

    def __init__(self, pm_id: Optional[Any] = None):
        super().__init__(
            "Preventative maintenance",
            pm_id,
            error_code=ErrorCode.PREVENTATIVE_MAINTENANCE_NOT_FOUND,
        )


# ========================================
# Scheduling Exceptions
# ========================================

class InvalidDateError(BaseAppException):
    """Exception raised when a date value is not a valid YYYY-MM-DD date"""

    def __init__(self, field: str, value: Any):
        super().__init__(
            message=f"Invalid {field.replace('_', ' ')}",
            error_code=ErrorCode.INVALID_DATE,
            details={"field": field, "value": value},
            status_code=400
        )


class InvalidDateRangeError(BaseAppException):
    """Exception raised when a query window is malformed or inverted"""

    def __init__(
        self,
        message: str = "Invalid date range",
        start: Optional[str] = None,
        end: Optional[str] = None
    ):
        super().__init__(
            message=message,
            error_code=ErrorCode.INVALID_DATE_RANGE,
            details={"start": start, "end": end},
            status_code=400
        )


# ========================================
# Database Exceptions
# ========================================

class DatabaseError(BaseAppException):
    """Exception raised for database-related errors"""

    def __init__(
        self,
        message: str = "Database error occurred",
        error_code: ErrorCode = ErrorCode.DATABASE_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        super().__init__(message, error_code, details, status_code)


class RepositoryError(DatabaseError):
    """Exception raised when a repository operation fails"""


class DuplicateEntryError(DatabaseError):
    """Exception raised when a unique constraint is violated"""

    def __init__(self, message: str = "Entry already exists", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.DUPLICATE_ENTRY, details, 409)


__all__ = [
    'ErrorCode',
    'BaseAppException',
    'OperationError',
    'ResourceNotFoundError',
    'LocationNotFoundError',
    'AssetNotFoundError',
    'PreventativeMaintenanceNotFoundError',
    'InvalidDateError',
    'InvalidDateRangeError',
    'DatabaseError',
    'RepositoryError',
    'DuplicateEntryError',
]
