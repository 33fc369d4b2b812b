"""Document model interface: load/save between archive, tree and memory."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from docparity.errors import ErrorContainer


@runtime_checkable
class DocumentModel(Protocol):
    """Converts a document between its packed, in-memory and editable forms.

    Loads return the document together with the issues collected on the way;
    callers decide whether warnings matter. A load that cannot produce a
    document at all raises :class:`~docparity.errors.LoadError`.
    """

    def load_from_archive(self, path: Path) -> tuple[Any, ErrorContainer]: ...

    def load_from_tree(self, path: Path) -> tuple[Any, ErrorContainer]: ...

    def save_to_archive(self, doc: Any, path: Path) -> ErrorContainer: ...

    def save_to_tree(
        self, doc: Any, path: Path, verify_original: Path | None = None
    ) -> ErrorContainer: ...

    def clone(self, doc: Any) -> Any: ...
