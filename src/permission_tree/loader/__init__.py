"""Loading permission blocks from configuration."""
from __future__ import annotations

from permission_tree.loader.block_loader import (
    BlockConfig,
    BlockLoader,
    PermissionConfig,
    PermissionConfigError,
)

__all__ = [
    "BlockConfig",
    "BlockLoader",
    "PermissionConfig",
    "PermissionConfigError",
]
