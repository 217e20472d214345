"""Permission tree construction and serialization."""
from __future__ import annotations

from permission_tree.tree.builder import (
    BlockSequence,
    PermissionBlock,
    PermissionTree,
    TreeBuilder,
    parse_permissions,
)
from permission_tree.tree.serializer import stringify_permissions

__all__ = [
    "BlockSequence",
    "PermissionBlock",
    "PermissionTree",
    "TreeBuilder",
    "parse_permissions",
    "stringify_permissions",
]
