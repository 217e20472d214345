"""Convenience API for permission-tree — build once, check many times.

Example
-------
::

    from permission_tree import PermissionGuard
    guard = PermissionGuard([["read@docs"], ["-read@docs:secret"]])
    guard.allows("read@docs:secret")  # False

"""
from __future__ import annotations

from pathlib import Path

from permission_tree.authorization.authorizer import AuthorizationResult, authorize
from permission_tree.loader.block_loader import BlockLoader
from permission_tree.tree.builder import BlockSequence, PermissionTree, parse_permissions
from permission_tree.tree.serializer import stringify_permissions


class PermissionGuard:
    """Holds the tree built from one principal's permission blocks.

    The tree is built when the guard is created and never modified
    afterwards, so a guard can be shared between threads.

    Parameters
    ----------
    blocks:
        Block sequence ordered from least to most important. ``None`` gives
        a guard that authorizes nothing.
    """

    def __init__(self, blocks: BlockSequence | None = None) -> None:
        self._tree: PermissionTree = parse_permissions(blocks)

    @classmethod
    def from_yaml(cls, config_path: str | Path, strict: bool = False) -> PermissionGuard:
        """Build a guard from a YAML blocks file (see :class:`BlockLoader`)."""
        config = BlockLoader(strict=strict).load(config_path)
        return cls(config.statement_blocks())

    def allows(self, requested: str) -> bool:
        """Return True if *requested* is authorized."""
        return bool(authorize(self._tree, requested))

    def explain(self, requested: str) -> AuthorizationResult:
        """Return the detailed decision for *requested*."""
        return authorize(self._tree, requested, verbose=True)  # type: ignore[return-value]

    def statements(self) -> list[str]:
        """Return the effective statements held by this guard."""
        return stringify_permissions(self._tree)

    @property
    def tree(self) -> PermissionTree:
        """The underlying permission tree."""
        return self._tree

    def __repr__(self) -> str:
        return f"PermissionGuard(apps={sorted(self._tree)!r})"
