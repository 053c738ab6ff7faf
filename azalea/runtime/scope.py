"""Variable storage: a global table plus a stack of block/call frames."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional

from .values import Value

__all__ = ["ScopeStack"]

Frame = Dict[str, Value]


class ScopeStack:
    """
    Globals and an ordered stack of frames searched innermost first.

    Frames are pushed on block and call entry and popped on exit, strictly
    in LIFO order.  Use :meth:`frame` so the pop happens even if evaluation
    of the block unwinds with an exception.
    """

    def __init__(self) -> None:
        self.globals: Frame = {}
        self.frames: List[Frame] = []

    @property
    def depth(self) -> int:
        return len(self.frames)

    def push(self) -> Frame:
        frame: Frame = {}
        self.frames.append(frame)
        return frame

    def pop(self) -> Frame:
        return self.frames.pop()

    @contextmanager
    def frame(self) -> Iterator[Frame]:
        depth = len(self.frames)
        frame = self.push()
        try:
            yield frame
        finally:
            del self.frames[depth:]

    def current(self) -> Frame:
        """The innermost frame, or the global table when no frame is active."""
        return self.frames[-1] if self.frames else self.globals

    def declare(self, name: str, value: Value) -> None:
        self.current()[name] = value

    def assign(self, name: str, value: Value) -> None:
        """Overwrite the nearest existing binding, else bind in the current frame."""
        table = self._find(name)
        if table is None:
            table = self.current()
        table[name] = value

    def lookup(self, name: str) -> Optional[Value]:
        table = self._find(name)
        return None if table is None else table[name]

    def __contains__(self, name: str) -> bool:
        return self._find(name) is not None

    def _find(self, name: str) -> Optional[Frame]:
        for frame in reversed(self.frames):
            if name in frame:
                return frame
        if name in self.globals:
            return self.globals
        return None

    def reset(self) -> None:
        self.globals.clear()
        self.frames.clear()
