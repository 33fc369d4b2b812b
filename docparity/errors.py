"""Error types and the load/save error container."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Literal

from pydantic import BaseModel, ConfigDict


class ParityError(Exception):
    """Base class for all docparity errors."""


class ArchiveError(ParityError):
    """An archive could not be read or holds duplicate entry names."""


class LoadError(ParityError):
    """A document failed to load (or save) with at least one fatal issue."""


class FormatNotSupportedError(LoadError):
    """The package is not in a format the document model can read."""


class StructuralMismatchError(ParityError):
    """Two entries differ and at least one of them is not structured text."""

    def __init__(self, entry: str, message: str | None = None) -> None:
        self.entry = entry
        super().__init__(message or f"Mismatch detected in non-JSON content: {entry}")


class EntropyError(ParityError):
    """The unpacked source tree has no entropy directory to strip."""


class MismatchFault(BaseModel):
    """A fatal, non-text mismatch captured in a comparison result."""

    model_config = ConfigDict(frozen=True)

    entry: str
    message: str


class Issue(BaseModel):
    """A single warning or error reported while loading or saving."""

    model_config = ConfigDict(frozen=True)

    severity: Literal["warning", "error"]
    code: str
    message: str

    def __str__(self) -> str:
        return f"{self.severity.upper()} [{self.code}] {self.message}"


# Well-known warning codes
CHECKSUM_MISMATCH = "checksum-mismatch"
NAME_COLLISION = "name-collision"
FORMAT_NOT_SUPPORTED = "format-not-supported"


class ErrorContainer:
    """Collects issues raised by the document model.

    Warnings are informational. Any error makes :meth:`raise_on_errors`
    raise, which is how callers abort a load or save.
    """

    def __init__(self) -> None:
        self._issues: list[Issue] = []

    def __iter__(self) -> Iterator[Issue]:
        return iter(self._issues)

    def __len__(self) -> int:
        return len(self._issues)

    def warn(self, code: str, message: str) -> None:
        self._issues.append(Issue(severity="warning", code=code, message=message))

    def error(self, code: str, message: str) -> None:
        self._issues.append(Issue(severity="error", code=code, message=message))

    def format_not_supported(self, message: str) -> None:
        self.error(FORMAT_NOT_SUPPORTED, message)

    def extend(self, other: ErrorContainer) -> None:
        self._issues.extend(other)

    @property
    def warnings(self) -> list[Issue]:
        return [i for i in self._issues if i.severity == "warning"]

    @property
    def errors(self) -> list[Issue]:
        return [i for i in self._issues if i.severity == "error"]

    @property
    def has_errors(self) -> bool:
        return any(i.severity == "error" for i in self._issues)

    def write(self, log: logging.Logger) -> None:
        """Emit every collected issue to *log* at a matching level."""
        for issue in self._issues:
            level = logging.ERROR if issue.severity == "error" else logging.WARNING
            log.log(level, "%s", issue)

    def raise_on_errors(self) -> None:
        if not self.has_errors:
            return
        lines = "; ".join(str(i) for i in self.errors)
        if any(i.code == FORMAT_NOT_SUPPORTED for i in self.errors):
            raise FormatNotSupportedError(lines)
        raise LoadError(lines)
