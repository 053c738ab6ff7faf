"""
Azalea programming language core.

Azalea is a forgiving, English-like scripting language: every statement
form can be spelled several ways (``form``, ``let`` and ``declare`` all
declare a variable) and malformed input never stops a program.

The package is organised into:

* ``lang`` – keyword families and the tokenizer.
* ``ast`` – frozen dataclasses for the syntax tree.
* ``parser`` – a total recursive-descent parser.
* ``runtime`` – values, scopes, the capability-module seam and the
  tree-walking interpreter.
* ``modules`` – reference capability modules (net, file, vm, serve,
  view, play) a host may register.
* ``config`` – validated interpreter settings and logging setup.
"""

import re
from importlib import metadata as _metadata
from pathlib import Path


def _local_version() -> str | None:
    pyproject = Path(__file__).resolve().parents[1] / "pyproject.toml"
    if not pyproject.exists():
        return None
    try:
        text = pyproject.read_text(encoding="utf-8")
    except OSError:  # pragma: no cover - IO errors should not break imports
        return None
    match = re.search(r"^version\s*=\s*\"([^\"]+)\"", text, flags=re.MULTILINE)
    if match:
        return match.group(1)
    return None


try:  # pragma: no cover - metadata for installed copies
    __version__ = _metadata.version("azalea")
except _metadata.PackageNotFoundError:  # pragma: no cover - source tree
    __version__ = _local_version() or "1.0.0"

from .config import InterpreterConfig, configure_logging, load_config  # noqa: E402
from .errors import AzaleaError, ConfigError, ModuleError  # noqa: E402
from .runtime import CapabilityModule, Interpreter, Value, ValueKind, execute  # noqa: E402

__all__ = [
    "__version__",
    "AzaleaError",
    "CapabilityModule",
    "ConfigError",
    "Interpreter",
    "InterpreterConfig",
    "ModuleError",
    "Value",
    "ValueKind",
    "configure_logging",
    "execute",
    "load_config",
]
