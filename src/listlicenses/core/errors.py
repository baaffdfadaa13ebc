# errors.py
# SPDX-License-Identifier: MIT
"""Exception types raised by the license listing core."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from .interfaces import LicenseRecord

__all__ = [
    "ListLicensesError",
    "EnumerationError",
    "MissingPackageError",
    "LicenseSearchError",
    "GroupingError",
    "TemplateError",
]


class ListLicensesError(RuntimeError):
    """Base class for every fatal error raised by listlicenses."""


class EnumerationError(ListLicensesError):
    """The package enumerator failed to produce package metadata."""


class MissingPackageError(EnumerationError):
    """A requested package could not be found at all."""


class LicenseSearchError(ListLicensesError):
    """A directory listing or license file read failed during the search."""

    def __init__(self, message: str, *, path: str | None = None):
        super().__init__(message)
        self.path = path


class GroupingError(ListLicensesError):
    """Packages share one license file but have no common import prefix."""

    def __init__(self, message: str, records: Sequence["LicenseRecord"] = ()):
        super().__init__(message)
        self.records = tuple(records)


class TemplateError(ListLicensesError):
    """The embedded license template catalog could not be read."""
