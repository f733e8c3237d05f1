"""
Reading and atomic writing of schemafu artifacts.

Writes go to a temporary file in the target directory which then replaces
the target, so an interrupted run never leaves a half-written artifact.
"""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path
from typing import Any

from .errors import WriteError

log = logging.getLogger(__name__)

PRETTY_INDENT = 2


def read_json_file(path: str | Path) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


class AtomicWriter:
    """Two-phase file writer.

    1. Write to a temporary file in the same directory
    2. Atomically replace the target file
    """

    def write(self, path: str | Path, content: str) -> None:
        """Write content to path, creating parent directories.

        Raises:
            WriteError: If any file operation fails
        """
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            temp_fd, temp_path_str = tempfile.mkstemp(
                dir=path.parent,
                prefix=f".{path.name}.",
                suffix=".tmp",
                text=True,
            )
        except OSError as e:
            raise WriteError(f"Failed to write {path}: {e}") from e

        temp_path = Path(temp_path_str)
        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)
            # rename() is atomic on POSIX when source and target share a filesystem
            temp_path.replace(path)
        except OSError as e:
            temp_path.unlink(missing_ok=True)
            raise WriteError(f"Failed to write {path}: {e}") from e

        log.debug("Wrote %d characters to %s", len(content), path)


def write_text_file(path: str | Path, content: str) -> None:
    AtomicWriter().write(path, content)


def write_json_file(path: str | Path, data: Any, pretty: bool = False) -> None:
    """Serialize data as JSON, indented by two spaces when pretty."""
    if pretty:
        content = json.dumps(data, indent=PRETTY_INDENT, ensure_ascii=False)
    else:
        content = json.dumps(data, separators=(",", ":"), ensure_ascii=False)
    write_text_file(path, content)
