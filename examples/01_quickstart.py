#!/usr/bin/env python3
"""Example: Quickstart — permission-tree

Minimal working example: merge a role block with a user's direct grants,
inspect the effective statements and authorize a few requests.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install permission-tree
"""
from __future__ import annotations

import permission_tree as pt


def main() -> None:
    print(f"permission-tree version: {pt.__version__}")

    # Step 1: Blocks are ordered from the least to the most important source
    blocks = [
        # role: member
        ["access@projects", "read@reports", "-access@projects:projectid"],
        # direct grants
        ["+access@projects:projectid:prototype", "-read@reports:finance"],
    ]
    tree = pt.parse_permissions(blocks)

    # Step 2: Effective statements after merging
    print("\nEffective permissions:")
    for statement in pt.stringify_permissions(tree):
        print(f"  {statement}")

    # Step 3: Authorize requests
    requests = [
        "access@projects:projectid:prototype:123",
        "access@projects:projectid",
        "access@projects:projectid2",
        "read@reports:finance:q3",
        "access@billing",
        "not a permission",
    ]

    print("\nAuthorization:")
    for requested in requests:
        result = pt.authorize(tree, requested, verbose=True)
        icon = "ALLOW" if result else "DENY"
        print(f"  [{icon}] {requested}: {result.error or result.message}")


if __name__ == "__main__":
    main()
