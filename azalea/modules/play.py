"""Game capability stub."""

from __future__ import annotations

from typing import Optional, Sequence

from ..runtime.modules import CapabilityModule
from ..runtime.values import VOID, Value

PLAY_METHODS = frozenset({"game", "sprite", "render"})


class PlayModule(CapabilityModule):
    name = "play"

    def invoke(self, method: Optional[str], args: Sequence[Value]) -> Value:
        if method in PLAY_METHODS:
            return Value.text(f"Play: {method}")
        return VOID
