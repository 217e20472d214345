"""Permission statement grammar.

A permission statement grants or denies one permission on a resource of an
app::

    [action]<permission>@<app>[:<resource-segment>]*

    action     = + | -          (optional, defaults to +)
    permission = alphanumeric token or ``*``
    app        = alphanumeric token
    segment    = alphanumerics, ``-``, ``_`` or ``/`` (may be empty)

Segments may be left empty to stand for "any value at this position"
(``access@projects::files``), but the last segment of a path must not be.

Example
-------
>>> validate_permission("-access@projects:projectid")
True
>>> parse_statement("access@projects:projectid").resource
'projectid'
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

_STATEMENT_PATTERN: re.Pattern[str] = re.compile(
    r"[+-]?(?:[A-Za-z0-9]+|\*)@[A-Za-z0-9]+"
    r"(?:(?::[A-Za-z0-9_/-]*)*:[A-Za-z0-9_/-]+)?"
)

WILDCARD: str = "*"


class GrantState(str, Enum):
    """Effective value of a permission in a tree."""

    GRANT = "+"
    DENY = "-"


class InvalidStatementError(ValueError):
    """Raised when a string does not follow the permission statement grammar.

    Attributes
    ----------
    statement:
        The offending statement.
    """

    def __init__(self, statement: object) -> None:
        self.statement = statement
        super().__init__(f"Invalid permission statement: {statement!r}")


@dataclass(frozen=True)
class PermissionStatement:
    """A statement split into its components.

    Attributes
    ----------
    state:
        Whether the statement grants or denies the permission.
    permission:
        Permission name, or ``*`` for any permission.
    app:
        The app namespace.
    segments:
        Resource path segments, general to specific. Empty for the
        app-level default resource.
    """

    state: GrantState
    permission: str
    app: str
    segments: tuple[str, ...] = ()

    @property
    def resource(self) -> str:
        """The colon-joined resource path (``""`` for the app itself)."""
        return ":".join(self.segments)

    def __str__(self) -> str:
        return format_statement(self.state, self.permission, self.app, self.resource)


def validate_permission(statement: object) -> bool:
    """Return True if *statement* is a well-formed permission statement."""
    if not isinstance(statement, str):
        return False
    return _STATEMENT_PATTERN.fullmatch(statement) is not None


def parse_statement(statement: str) -> PermissionStatement:
    """Split a statement into a :class:`PermissionStatement`.

    Raises
    ------
    InvalidStatementError
        If *statement* does not follow the grammar.
    """
    if not validate_permission(statement):
        raise InvalidStatementError(statement)

    state = GrantState.DENY if statement.startswith("-") else GrantState.GRANT
    permission, _, target = statement.partition("@")
    if permission[:1] in ("+", "-"):
        permission = permission[1:]

    app, *segments = target.split(":")
    return PermissionStatement(
        state=state,
        permission=permission,
        app=app,
        segments=tuple(segments),
    )


def format_statement(
    state: GrantState | str,
    permission: str,
    app: str,
    resource: str = "",
) -> str:
    """Build the canonical wire form of a statement."""
    action = state.value if isinstance(state, GrantState) else str(state)
    suffix = f":{resource}" if resource else ""
    return f"{action}{permission}@{app}{suffix}"
