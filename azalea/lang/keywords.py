"""
Azalea keyword families and grammar constants.

Azalea deliberately accepts many spellings for the same construct
(``form``, ``let``, ``var`` and ``declare`` all introduce a variable).
This module is the single source of truth for those spellings: the lexer
uses :data:`VOCABULARY` to classify words as keywords, and the parser maps
each keyword to a canonical production with :func:`statement_kind` and
the family sets below.

**Usage:**
    from azalea.lang.keywords import StatementKind, statement_kind

    if statement_kind(token.value) is StatementKind.OUTPUT:
        ...
"""

from __future__ import annotations

import difflib
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Optional


class StatementKind(Enum):
    """Canonical statement productions reachable through keyword families."""

    DECLARATION = "declaration"
    FUNCTION = "function"
    CALL = "call"
    CONDITIONAL = "conditional"
    LOOP = "loop"
    RETURN = "return"
    OUTPUT = "output"
    ASSIGNMENT = "assignment"

    def __str__(self) -> str:
        return self.value


# ============================================================================
# Statement families
# ============================================================================

DECLARATION_KEYWORDS: FrozenSet[str] = frozenset({
    'form', 'let', 'var', 'const', 'set', 'create',
    'make', 'declare', 'define', 'init', 'new',
})

FUNCTION_KEYWORDS: FrozenSet[str] = frozenset({
    'act', 'def', 'fn', 'func', 'function', 'method', 'procedure',
})

CALL_KEYWORDS: FrozenSet[str] = frozenset({'call'})

CONDITIONAL_KEYWORDS: FrozenSet[str] = frozenset({
    'if', 'when', 'whenever', 'provided', 'assuming', 'given',
})

LOOP_KEYWORDS: FrozenSet[str] = frozenset({
    'loop', 'while', 'for', 'repeat', 'each', 'foreach', 'iterate',
})

RETURN_KEYWORDS: FrozenSet[str] = frozenset({'give', 'return', 'yield', 'send'})

OUTPUT_KEYWORDS: FrozenSet[str] = frozenset({
    'say', 'print', 'output', 'display', 'log', 'echo', 'show', 'write',
})

ASSIGNMENT_KEYWORDS: FrozenSet[str] = frozenset({'put', 'assign', 'update'})

STATEMENT_FAMILIES: Dict[StatementKind, FrozenSet[str]] = {
    StatementKind.DECLARATION: DECLARATION_KEYWORDS,
    StatementKind.FUNCTION: FUNCTION_KEYWORDS,
    StatementKind.CALL: CALL_KEYWORDS,
    StatementKind.CONDITIONAL: CONDITIONAL_KEYWORDS,
    StatementKind.LOOP: LOOP_KEYWORDS,
    StatementKind.RETURN: RETURN_KEYWORDS,
    StatementKind.OUTPUT: OUTPUT_KEYWORDS,
    StatementKind.ASSIGNMENT: ASSIGNMENT_KEYWORDS,
}

# Flattened lookup, built once.
STATEMENT_KEYWORDS: Dict[str, StatementKind] = {
    word: kind
    for kind, family in STATEMENT_FAMILIES.items()
    for word in family
}


# ============================================================================
# Clause and block keywords
# ============================================================================

BLOCK_START_KEYWORDS: FrozenSet[str] = frozenset({'do', 'then', 'begin', '{'})

# Function bodies also open with ``when`` ("act greet name when ...").
FUNCTION_BLOCK_START_KEYWORDS: FrozenSet[str] = BLOCK_START_KEYWORDS | {'when'}

BLOCK_END_KEYWORDS: FrozenSet[str] = frozenset({'end', 'finish', 'done', '}'})

ELSE_KEYWORDS: FrozenSet[str] = frozenset({'else', 'otherwise'})

ASSIGNMENT_INTRODUCERS: FrozenSet[str] = frozenset({
    'from', 'is', 'equals', 'to', 'as', 'becomes', '=',
})

# Words joining a call to its arguments ("call greet with name").
CONNECTIVE_KEYWORDS: FrozenSet[str] = frozenset({'with', 'to', 'on'})

TYPE_NAMES: FrozenSet[str] = frozenset({'num', 'text', 'bool', 'list', 'map', 'void'})

BOOLEAN_LITERALS: FrozenSet[str] = frozenset({'true', 'false'})

# Trailing label clause of an output statement: say x name 'greeting'
OUTPUT_LABEL_KEYWORD = 'name'

# Filler accepted between a loop count and its body: loop 3 times do ...
LOOP_COUNT_FILLER = 'times'

LOOP_VARIABLE = 'step'


# ============================================================================
# Operators
# ============================================================================

OPERATOR_PRECEDENCE: Dict[str, int] = {
    'or': 1,
    'and': 2,
    'same': 3, 'not': 3,
    'over': 4, 'under': 4,
    'plus': 5, 'minus': 5,
    'times': 6, 'div': 6,
}

# Lexically keywords, but not part of the expression grammar.
OPERATOR_SYNONYMS: FrozenSet[str] = frozenset({
    'add', 'subtract', 'multiply', 'divide', 'mod',
    'greater', 'less', 'equals',
})


# ============================================================================
# Implicit call targets
# ============================================================================

# Markup elements that desugar to ``call view <element> ...``.  Words that
# already belong to a statement family or the operator table (``form``,
# ``show``, ``div``) never reach the implicit-call check and are left out.
ELEMENT_NAMES: FrozenSet[str] = frozenset({
    'page', 'header', 'footer', 'section', 'box', 'big', 'text', 'button',
    'btn', 'link', 'textarea', 'code', 'emoji', 'grid', 'panel', 'pane',
    'input', 'field', 'image', 'img', 'label', 'ul',
})

# Capability modules that can be invoked without the ``call`` keyword.
MODULE_NAMES: FrozenSet[str] = frozenset({'net', 'file', 'vm', 'serve', 'view', 'play'})

VIEW_MODULE = 'view'


VOCABULARY: FrozenSet[str] = frozenset().union(
    STATEMENT_KEYWORDS,
    BLOCK_START_KEYWORDS,
    FUNCTION_BLOCK_START_KEYWORDS,
    BLOCK_END_KEYWORDS,
    ELSE_KEYWORDS,
    ASSIGNMENT_INTRODUCERS,
    CONNECTIVE_KEYWORDS,
    TYPE_NAMES,
    BOOLEAN_LITERALS,
    OPERATOR_PRECEDENCE,
    OPERATOR_SYNONYMS,
    ELEMENT_NAMES,
    MODULE_NAMES,
)


# ============================================================================
# Helpers
# ============================================================================

def statement_kind(word: str) -> Optional[StatementKind]:
    """Return the canonical statement production for ``word``, if any.

    Examples:
        >>> statement_kind('declare')
        <StatementKind.DECLARATION: 'declaration'>
        >>> statement_kind('plus') is None
        True
    """
    return STATEMENT_KEYWORDS.get(word)


def is_keyword(word: str) -> bool:
    return word in VOCABULARY


def is_operator(word: str) -> bool:
    return word in OPERATOR_PRECEDENCE


def suggest_name(unknown: str, candidates: Iterable[str]) -> Optional[str]:
    """Suggest the closest known name for ``unknown``.

    Used for diagnostics only; the language itself never rejects a name.

    Examples:
        >>> suggest_name('gret', ['greet', 'count'])
        'greet'
        >>> suggest_name('xyz123', ['greet']) is None
        True
    """
    matches = difflib.get_close_matches(unknown, list(candidates), n=1, cutoff=0.6)
    return matches[0] if matches else None


__all__ = [
    'StatementKind',
    'DECLARATION_KEYWORDS',
    'FUNCTION_KEYWORDS',
    'CALL_KEYWORDS',
    'CONDITIONAL_KEYWORDS',
    'LOOP_KEYWORDS',
    'RETURN_KEYWORDS',
    'OUTPUT_KEYWORDS',
    'ASSIGNMENT_KEYWORDS',
    'STATEMENT_FAMILIES',
    'STATEMENT_KEYWORDS',
    'BLOCK_START_KEYWORDS',
    'FUNCTION_BLOCK_START_KEYWORDS',
    'BLOCK_END_KEYWORDS',
    'ELSE_KEYWORDS',
    'ASSIGNMENT_INTRODUCERS',
    'CONNECTIVE_KEYWORDS',
    'TYPE_NAMES',
    'BOOLEAN_LITERALS',
    'OUTPUT_LABEL_KEYWORD',
    'LOOP_COUNT_FILLER',
    'LOOP_VARIABLE',
    'OPERATOR_PRECEDENCE',
    'OPERATOR_SYNONYMS',
    'ELEMENT_NAMES',
    'MODULE_NAMES',
    'VIEW_MODULE',
    'VOCABULARY',
    'statement_kind',
    'is_keyword',
    'is_operator',
    'suggest_name',
]
