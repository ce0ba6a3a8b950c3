"""Exceptions raised by the data access layer."""

from typing import Optional


class EshopError(Exception):
    """Base class for eshop data access errors."""


class RecordMappingError(EshopError):
    """A persisted value could not be mapped onto the domain model.

    Raised, for example, when a stored status string is not a member of its enum.
    """

    def __init__(self, message: str, *, column: Optional[str] = None, value=None):
        super().__init__(message)
        self.column = column
        self.value = value


class UnsupportedDialectError(EshopError):
    """The connected database cannot build a required aggregate."""
