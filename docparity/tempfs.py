"""Scoped temporary files and directories, released on every exit path."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path


@contextmanager
def temp_file(suffix: str = ".zip") -> Iterator[Path]:
    """Yield a path to a fresh (empty) temp file; remove it on exit."""
    fd, name = tempfile.mkstemp(prefix="docparity-", suffix=suffix)
    os.close(fd)
    path = Path(name)
    try:
        yield path
    finally:
        path.unlink(missing_ok=True)


@contextmanager
def temp_dir() -> Iterator[Path]:
    """Yield a fresh temp directory; remove it and its contents on exit."""
    with tempfile.TemporaryDirectory(prefix="docparity-") as name:
        yield Path(name)
