"""Reference capability modules.

None of these are registered by default; pick them by name through
``InterpreterConfig.modules`` or pass instances to ``Interpreter``.
"""

from typing import Dict

from ..runtime.modules import CapabilityModule
from .file import FileModule
from .net import NetModule
from .play import PlayModule
from .serve import ServeModule
from .view import ViewModule, render_html
from .vm import VMModule

__all__ = [
    "FileModule",
    "NetModule",
    "PlayModule",
    "ServeModule",
    "VMModule",
    "ViewModule",
    "builtin_modules",
    "render_html",
]


def builtin_modules() -> Dict[str, CapabilityModule]:
    """Fresh instances of every reference module, keyed by name."""
    modules = (NetModule(), FileModule(), VMModule(), ServeModule(), ViewModule(), PlayModule())
    return {module.name: module for module in modules}
