"""Build a permission tree from ordered blocks of statements.

Each block is one inheritance source (direct grants, a group, a role) and
blocks are ordered from least to most important. Two precedence rules
apply:

- a later block overrides every earlier block on the same
  ``(app, resource, permission)`` key;
- inside a single block, contradicting statements on the same key resolve
  to the most permissive one, and once granted the key is not flipped back
  by the rest of that block.

The first block has nothing to override, so it only applies the second
rule. Every later block is processed as an *overwrite* pass: the first
statement touching a key replaces whatever earlier blocks left there, and
the key is marked as set by this pass so that further statements in the
same block compete with it under the most-permissive rule instead of
overriding it again. The marks are dropped when the block ends.

Example
-------
>>> tree = parse_permissions([["+access@p"], ["-access@p"]])
>>> tree["p"][""]["access"]
<GrantState.DENY: '-'>
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from permission_tree.statements.grammar import (
    GrantState,
    PermissionStatement,
    parse_statement,
    validate_permission,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------

AppName = str
ResourcePath = str
PermissionName = str

PermissionTree = dict[AppName, dict[ResourcePath, dict[PermissionName, GrantState]]]
PermissionBlock = Sequence[str]
BlockSequence = Sequence[PermissionBlock]

_Key = tuple[AppName, ResourcePath, PermissionName]


class TreeBuilder:
    """Accumulates permission blocks into a :class:`PermissionTree`.

    A builder is single-use state for one build; :func:`parse_permissions`
    creates a fresh one on every call.

    In an overwrite pass every write marks its key as set by the pass,
    including a key on an app, resource or permission the tree did not
    hold yet. The JavaScript ``@xevolab/permissions`` library leaves new
    apps and new permissions unmarked, so there
    ``[["a@p"], ["+read@q", "-read@q"]]`` ends with ``-read@q``; here the
    grant wins, as it does for any other key touched twice in one block.

    Example
    -------
    ::

        builder = TreeBuilder()
        builder.add_block(["read@docs", "write@docs:drafts"])
        builder.add_block(["-write@docs:drafts"], overwrite=True)
        tree = builder.tree
    """

    def __init__(self) -> None:
        self._tree: PermissionTree = {}
        self._blocks_applied: int = 0

    @property
    def tree(self) -> PermissionTree:
        """The tree built so far."""
        return self._tree

    @property
    def blocks_applied(self) -> int:
        """Number of blocks processed so far."""
        return self._blocks_applied

    def build(self, blocks: BlockSequence | None) -> PermissionTree:
        """Apply every block in order and return the resulting tree.

        Block 0 is merged normally; every later block is an overwrite pass.
        """
        for block in blocks or []:
            self.add_block(block, overwrite=self._blocks_applied > 0)
        return self._tree

    def add_block(self, block: Iterable[object], overwrite: bool = False) -> None:
        """Merge one block of raw statements into the tree.

        Parameters
        ----------
        block:
            Raw statement strings. Entries failing the grammar are skipped.
        overwrite:
            When ``True`` the block takes priority over everything already
            in the tree.
        """
        set_this_pass: set[_Key] = set()
        skipped = 0

        for raw in block:
            if not validate_permission(raw):
                skipped += 1
                logger.debug("Skipping malformed permission statement %r", raw)
                continue
            self._apply(parse_statement(raw), overwrite, set_this_pass)  # type: ignore[arg-type]

        # Leaving the pass finalizes every key it set.
        set_this_pass.clear()
        self._blocks_applied += 1

        if skipped:
            logger.debug(
                "Block %d: skipped %d malformed statement(s)",
                self._blocks_applied - 1,
                skipped,
            )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _apply(
        self,
        statement: PermissionStatement,
        overwrite: bool,
        set_this_pass: set[_Key],
    ) -> None:
        app, resource, permission = statement.app, statement.resource, statement.permission
        key: _Key = (app, resource, permission)

        resources = self._tree.get(app)
        if resources is None:
            resources = {resource: {}}
            if resource:
                resources[""] = {}
            self._tree[app] = resources

        permissions = resources.get(resource)
        if permissions is None:
            permissions = resources[resource] = {}

        # An overwrite pass replaces keys it has not touched yet; otherwise
        # the most permissive value wins.
        overrides = overwrite and key not in set_this_pass
        if permissions.get(permission) is GrantState.GRANT and not overrides:
            return

        permissions[permission] = statement.state
        if overwrite:
            set_this_pass.add(key)


def parse_permissions(blocks: BlockSequence | None = None) -> PermissionTree:
    """Build a permission tree from a block sequence.

    Parameters
    ----------
    blocks:
        Lists of permission statements sorted from the least important to
        the most important source.

    Returns
    -------
    PermissionTree
        ``app -> resource path -> permission -> GrantState``.
    """
    return TreeBuilder().build(blocks)
