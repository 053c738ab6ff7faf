"""Network capability: describes HTTP requests without performing them."""

from __future__ import annotations

from typing import Optional, Sequence

from ..runtime.modules import CapabilityModule
from ..runtime.values import VOID, Value


class NetModule(CapabilityModule):
    """``call net get url`` and ``call net post url body``."""

    name = "net"

    def invoke(self, method: Optional[str], args: Sequence[Value]) -> Value:
        if method == "get" and args:
            return Value.text(f"GET {args[0].to_string()}")
        if method == "post" and len(args) >= 2:
            return Value.text(f"POST {args[0].to_string()}")
        return VOID
