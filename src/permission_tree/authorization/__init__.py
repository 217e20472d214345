"""Request-time authorization against a permission tree."""
from __future__ import annotations

from permission_tree.authorization.authorizer import (
    INVALID_REQUEST_ERROR,
    NO_AUTHORIZATION_MESSAGE,
    AuthorizationResult,
    authorize,
    candidate_paths,
)

__all__ = [
    "INVALID_REQUEST_ERROR",
    "NO_AUTHORIZATION_MESSAGE",
    "AuthorizationResult",
    "authorize",
    "candidate_paths",
]
