"""Capability module interface and registry."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterator, List, Optional, Sequence

from .values import Value

__all__ = ["CapabilityModule", "ModuleRegistry"]

logger = logging.getLogger(__name__)


class CapabilityModule(ABC):
    """Host capability reachable from Azalea through ``call <name> <method>``.

    Implementations receive already evaluated arguments and must return a
    :class:`Value`.  They should not keep references to ``args`` after
    returning.
    """

    name: str = ""

    @abstractmethod
    def invoke(self, method: Optional[str], args: Sequence[Value]) -> Value:
        """Run ``method`` with ``args``."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class ModuleRegistry:
    """Name to module mapping owned by a single interpreter."""

    def __init__(self) -> None:
        self._modules: Dict[str, CapabilityModule] = {}

    def register(self, module: CapabilityModule, name: Optional[str] = None) -> None:
        key = name or module.name
        if not key:
            raise ValueError(f"Cannot register {module!r} without a name")
        if key in self._modules:
            logger.info("Replacing capability module %r", key)
        self._modules[key] = module

    def unregister(self, name: str) -> None:
        self._modules.pop(name, None)

    def get(self, name: str) -> Optional[CapabilityModule]:
        return self._modules.get(name)

    def names(self) -> List[str]:
        return list(self._modules)

    def __contains__(self, name: object) -> bool:
        return name in self._modules

    def __iter__(self) -> Iterator[str]:
        return iter(self._modules)

    def __len__(self) -> int:
        return len(self._modules)
