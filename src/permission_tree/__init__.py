"""permission-tree — grant/deny permission statements merged into a tree.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import permission_tree as pt
>>> tree = pt.parse_permissions([
...     ["access@projects", "-access@projects:projectid"],
... ])
>>> pt.authorize(tree, "access@projects:projectid")
False
>>> pt.stringify_permissions(tree)
['+access@projects', '-access@projects:projectid']
"""
from __future__ import annotations

__version__: str = "1.1.1"

from permission_tree.convenience import PermissionGuard

# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------
from permission_tree.statements.grammar import (
    GrantState,
    InvalidStatementError,
    PermissionStatement,
    format_statement,
    parse_statement,
    validate_permission,
)

# ---------------------------------------------------------------------------
# Tree
# ---------------------------------------------------------------------------
from permission_tree.tree.builder import (
    BlockSequence,
    PermissionBlock,
    PermissionTree,
    TreeBuilder,
    parse_permissions,
)
from permission_tree.tree.serializer import stringify_permissions

# ---------------------------------------------------------------------------
# Authorization
# ---------------------------------------------------------------------------
from permission_tree.authorization.authorizer import (
    AuthorizationResult,
    authorize,
    candidate_paths,
)

# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------
from permission_tree.loader.block_loader import (
    BlockLoader,
    PermissionConfig,
    PermissionConfigError,
)

__all__ = [
    "__version__",
    "PermissionGuard",
    # Statements
    "GrantState",
    "InvalidStatementError",
    "PermissionStatement",
    "format_statement",
    "parse_statement",
    "validate_permission",
    # Tree
    "BlockSequence",
    "PermissionBlock",
    "PermissionTree",
    "TreeBuilder",
    "parse_permissions",
    "stringify_permissions",
    # Authorization
    "AuthorizationResult",
    "authorize",
    "candidate_paths",
    # Loader
    "BlockLoader",
    "PermissionConfig",
    "PermissionConfigError",
]
