"""Error types for the edges of Azalea.

The language core (tokenizer, parser, evaluator) never raises: malformed
input degrades to skipped tokens and ``void`` values.  The exceptions here
belong to configuration loading and capability modules.
"""

from __future__ import annotations

from typing import Optional


class AzaleaError(Exception):
    """Base class for all errors Azalea reports to embedding code.

    ``path`` names the file involved, if any.  ``code`` is a short stable
    identifier (``AZ_CONFIG``, ``AZ_MODULE``) and ``hint`` a suggested fix.
    """

    code: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.hint = hint
        if code is not None:
            self.code = code

    def format(self) -> str:
        """Render as ``message (path; CODE) Hint: ...`` for the command line."""
        details = "; ".join(part for part in (self.path, self.code) if part)
        text = f"{self.message} ({details})" if details else self.message
        if self.hint:
            text = f"{text} Hint: {self.hint}"
        return text


class ConfigError(AzaleaError):
    """Raised when an interpreter configuration file or value is invalid."""

    code = "AZ_CONFIG"


class ModuleError(AzaleaError):
    """Raised by a capability module when a method cannot be carried out.

    The interpreter catches it at the module boundary, so it never reaches
    the program being executed.
    """

    code = "AZ_MODULE"


__all__ = ["AzaleaError", "ConfigError", "ModuleError"]
