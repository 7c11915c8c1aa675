"""Errors raised by the Supabase data layer"""
from typing import Optional


class StoreError(Exception):
    """A store operation failed after all retries.

    Network failures and validation failures are not distinguished; callers
    surface both the same way.
    """

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        self.operation = operation
        self.cause = cause
        message = f"Failed to {operation}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
