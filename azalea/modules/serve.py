"""HTTP server capability that records routes instead of listening."""

from __future__ import annotations

import math
from typing import Dict, List, Optional, Sequence, Tuple

from ..errors import ModuleError
from ..runtime.modules import CapabilityModule
from ..runtime.values import VOID, Value

_ROUTE_METHODS: Dict[str, str] = {
    "get": "GET",
    "route": "GET",
    "post": "POST",
    "put": "PUT",
    "delete": "DELETE",
    "del": "DELETE",
}


class ServeModule(CapabilityModule):
    """
    Describe a web server.

    ``call serve on 8080`` records the port, ``call serve get "/" handler``
    records a route and ``call serve static "public"`` a static directory.
    Every method answers with a short description of what it recorded.
    """

    name = "serve"

    def __init__(self) -> None:
        self.port: Optional[int] = None
        self.routes: List[Tuple[str, str]] = []
        self.static_dirs: List[str] = []

    def invoke(self, method: Optional[str], args: Sequence[Value]) -> Value:
        if method in ("on", "start") and args:
            port = args[0].to_number()
            if not math.isfinite(port):
                raise ModuleError(f"Invalid port {args[0].to_string()!r}", code="AZ_SERVE_PORT")
            self.port = int(port)
            return Value.text(f"Server on port {self.port}")

        if method in _ROUTE_METHODS and len(args) >= 2:
            verb = _ROUTE_METHODS[method]
            path = args[0].to_string()
            self.routes.append((verb, path))
            return Value.text(f"Route {verb} {path}")

        if method in ("static", "files") and args:
            directory = args[0].to_string()
            self.static_dirs.append(directory)
            return Value.text(f"Serving static files from {directory}")

        if method in ("json", "send") and args:
            return Value.text("JSON response")

        return VOID
