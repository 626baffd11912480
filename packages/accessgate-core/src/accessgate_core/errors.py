"""Exceptions raised across the decision engine."""

from __future__ import annotations


class ProviderUnavailableError(Exception):
    """Wraps a failed call to an external provider with context."""

    def __init__(
        self, provider: str, operation: str, cause: Exception, retryable: bool = False
    ) -> None:
        self.provider = provider
        self.operation = operation
        self.retryable = retryable
        super().__init__(f"{provider} {operation} failed: {cause}")
        self.__cause__ = cause
