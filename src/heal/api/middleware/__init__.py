"""
API middleware components.
"""

from heal.api.middleware.error_handler import ErrorHandlerMiddleware

__all__ = ["ErrorHandlerMiddleware"]
