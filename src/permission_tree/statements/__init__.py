"""Permission statement grammar and parsing."""
from __future__ import annotations

from permission_tree.statements.grammar import (
    WILDCARD,
    GrantState,
    InvalidStatementError,
    PermissionStatement,
    format_statement,
    parse_statement,
    validate_permission,
)

__all__ = [
    "WILDCARD",
    "GrantState",
    "InvalidStatementError",
    "PermissionStatement",
    "format_statement",
    "parse_statement",
    "validate_permission",
]
