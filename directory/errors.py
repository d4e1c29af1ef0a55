"""Exceptions raised by the directory core and its store/remote collaborators."""

from __future__ import annotations


class DirectoryError(Exception):
    """Base class for failures the HTTP layer converts into JSON responses."""


class ValidationError(DirectoryError):
    """The request was rejected before any store mutation."""

    def __init__(self, message: str, status: int = 400) -> None:
        super().__init__(message)
        self.status = status


class StoreError(DirectoryError):
    """The document store was unreachable or rejected the operation."""


class RemoteServiceError(DirectoryError):
    """The membership platform call failed."""
