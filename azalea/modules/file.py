"""Filesystem capability backed by :mod:`pathlib`."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

from ..runtime.modules import CapabilityModule
from ..runtime.values import Value

logger = logging.getLogger(__name__)


class FileModule(CapabilityModule):
    """
    Read and write text files.

    ``call file read "notes.txt"`` yields the file contents and
    ``call file write "notes.txt" "hi"`` yields ``true``.  Any failure,
    including a missing argument, yields ``false``.

    Relative paths resolve against ``root`` when one is given.
    """

    name = "file"

    def __init__(self, root: Optional[Path] = None, encoding: str = "utf-8"):
        self.root = Path(root) if root is not None else None
        self.encoding = encoding

    def resolve(self, raw: str) -> Path:
        path = Path(raw)
        if self.root is not None and not path.is_absolute():
            path = self.root / path
        return path

    def invoke(self, method: Optional[str], args: Sequence[Value]) -> Value:
        if method == "read" and args:
            path = self.resolve(args[0].to_string())
            try:
                return Value.text(path.read_text(encoding=self.encoding))
            except OSError as exc:
                logger.warning("Cannot read %s: %s", path, exc)
        elif method == "write" and len(args) >= 2:
            path = self.resolve(args[0].to_string())
            try:
                path.write_text(args[1].to_string(), encoding=self.encoding)
                return Value.boolean(True)
            except OSError as exc:
                logger.warning("Cannot write %s: %s", path, exc)
        return Value.boolean(False)
