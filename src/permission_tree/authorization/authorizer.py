"""Evaluate a requested permission against a permission tree.

The requested statement should describe the action as precisely as
possible, e.g. ``access@projects:projectid:prototype:123``. The authorizer
looks for the most specific resource path in the tree that mentions the
permission (or the ``*`` wildcard) and lets that entry decide:

- a more specific path always wins over a less specific one, so
  ``-access@projects:projectid`` blocks ``access@projects:projectid:x``
  even when ``+access@projects`` is granted;
- within one entry a deny beats a grant, and the exact permission name is
  checked before ``*``;
- empty segments in granted paths match any value at that position, so
  ``+access@projects::files`` applies to ``access@projects:42:files``.

Example
-------
>>> tree = parse_permissions([["access@projects", "-access@projects:projectid"]])
>>> authorize(tree, "access@projects:projectid")
False
>>> authorize(tree, "access@projects:other", verbose=True).message
'The permission +access@projects grants access'
"""
from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import asdict, dataclass

from permission_tree.statements.grammar import (
    WILDCARD,
    GrantState,
    format_statement,
    parse_statement,
    validate_permission,
)

logger = logging.getLogger(__name__)

INVALID_REQUEST_ERROR: str = "Invalid requested permission"
NO_AUTHORIZATION_MESSAGE: str = "No authorization was found for this resource"


@dataclass(frozen=True)
class AuthorizationResult:
    """Detailed outcome of :func:`authorize`.

    Attributes
    ----------
    ok:
        ``False`` only when the request itself could not be evaluated.
    authorized:
        Whether the requested permission is granted.
    message:
        Explanation of the decision, naming the deciding statement.
    error:
        Set when ``ok`` is ``False``.
    """

    ok: bool
    authorized: bool
    message: str | None = None
    error: str | None = None

    def __bool__(self) -> bool:
        """Return True if the request is authorized."""
        return self.authorized

    def to_dict(self) -> dict[str, object]:
        """Return the result as a plain dict, omitting unset fields."""
        return {k: v for k, v in asdict(self).items() if v is not None}


def candidate_paths(segments: Sequence[str]) -> Iterator[str]:
    """Yield the resource paths that may decide a request, most specific first.

    For every prefix of *segments*, from the full path down to the empty
    one, this yields the prefix, the prefix without its last segment, and
    then the prefix with a single position blanked (right to left). The
    blanked variants are how granted paths with empty segments get matched.
    Some paths are yielded more than once.

    >>> list(candidate_paths(["a", "b", "c"]))
    ['a:b:c', 'a:b', 'a::c', ':b:c', 'a:b', 'a', ':b', 'a', '', '']
    """
    for length in range(len(segments), -1, -1):
        prefix = list(segments[:length])
        yield ":".join(prefix)
        if not prefix:
            continue
        yield ":".join(prefix[:-1])
        for position in range(length - 2, -1, -1):
            masked = list(prefix)
            masked[position] = ""
            yield ":".join(masked)


def authorize(
    tree: Mapping[str, Mapping[str, Mapping[str, GrantState | str]]],
    requested: str,
    verbose: bool = False,
) -> bool | AuthorizationResult:
    """Decide whether *tree* allows the *requested* permission.

    Parameters
    ----------
    tree:
        A tree produced by :func:`~permission_tree.tree.parse_permissions`.
    requested:
        The permission statement required by the action. A leading ``+`` or
        ``-`` is accepted and ignored.
    verbose:
        When ``True`` return an :class:`AuthorizationResult` instead of a
        plain boolean.

    Returns
    -------
    bool | AuthorizationResult
        An invalid *requested* statement is never authorized; in verbose
        mode it is reported through ``error`` with ``ok=False``.
    """
    result = _evaluate(tree, requested)
    logger.debug(
        "Authorization %s for %r: %s",
        "GRANTED" if result.authorized else "DENIED",
        requested,
        result.error or result.message,
    )
    return result if verbose else result.authorized


def _evaluate(
    tree: Mapping[str, Mapping[str, Mapping[str, GrantState | str]]],
    requested: str,
) -> AuthorizationResult:
    if not validate_permission(requested):
        return AuthorizationResult(ok=False, authorized=False, error=INVALID_REQUEST_ERROR)

    statement = parse_statement(requested)
    permission, app = statement.permission, statement.app

    resources = tree.get(app)
    if resources is None:
        return AuthorizationResult(
            ok=True,
            authorized=False,
            message=f"The user does not have access to the '{app}' app",
        )

    for resource in candidate_paths(statement.segments):
        permissions = resources.get(resource)
        if permissions is None:
            continue

        for name, state, verb in (
            (permission, GrantState.DENY, "blocks"),
            (WILDCARD, GrantState.DENY, "blocks"),
            (permission, GrantState.GRANT, "grants"),
            (WILDCARD, GrantState.GRANT, "grants"),
        ):
            if permissions.get(name) == state:
                return AuthorizationResult(
                    ok=True,
                    authorized=state == GrantState.GRANT,
                    message=(
                        f"The permission {format_statement(state, name, app, resource)}"
                        f" {verb} access"
                    ),
                )

    return AuthorizationResult(ok=True, authorized=False, message=NO_AUTHORIZATION_MESSAGE)
