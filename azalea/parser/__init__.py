"""Recursive-descent parser producing Azalea ASTs."""

from .main import Parser, parse

__all__ = ["Parser", "parse"]
