"""Flatten a permission tree back into statements.

The output follows the tree's insertion order (apps, then resource paths,
then permissions, each in first-seen order), so serializing the same tree
twice gives the same list. Re-parsing the output as a single block yields
an equivalent tree.
"""
from __future__ import annotations

from collections.abc import Mapping

from permission_tree.statements.grammar import GrantState, format_statement


def stringify_permissions(
    tree: Mapping[str, Mapping[str, Mapping[str, GrantState | str]]],
) -> list[str]:
    """Return one statement per ``(app, resource, permission)`` in *tree*.

    Example
    -------
    >>> stringify_permissions({"docs": {"": {"read": GrantState.GRANT}, "drafts": {"write": GrantState.DENY}}})
    ['+read@docs', '-write@docs:drafts']
    """
    return [
        format_statement(state, permission, app, resource)
        for app, resources in tree.items()
        for resource, permissions in resources.items()
        for permission, state in permissions.items()
    ]
