"""Placeholder virtual-machine capability."""

from __future__ import annotations

from typing import Optional, Sequence

from ..runtime.modules import CapabilityModule
from ..runtime.values import VOID, Value


class VMModule(CapabilityModule):
    name = "vm"

    def invoke(self, method: Optional[str], args: Sequence[Value]) -> Value:
        if method == "make":
            return Value.text("VM created")
        return VOID
