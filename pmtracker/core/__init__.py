"""
Core application infrastructure: exceptions, their HTTP handlers and middleware.
"""

from pmtracker.core.exceptions import BaseAppException, ErrorCode
from pmtracker.core.error_handlers import register_exception_handlers
from pmtracker.core.middleware import register_middlewares

__all__ = ["BaseAppException", "ErrorCode", "register_exception_handlers", "register_middlewares"]
