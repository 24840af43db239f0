#!/usr/bin/env python3
"""Example: Quickstart — aumos-resource-permissions

Minimal working example: grant web resource permissions, then check
requested resources and methods against them.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install aumos-resource-permissions
"""
from __future__ import annotations

import aumos_resource_permissions as perms


def main() -> None:
    print(f"aumos-resource-permissions version: {perms.__version__}")

    # Step 1: Grant permissions
    grants = perms.ResourcePermissionSet(
        [
            perms.ResourcePermission("/admin/*:/admin/secrets/*", "GET,POST"),
            perms.ResourcePermission("*.jsp", "GET"),
        ]
    )
    print(f"Granted permissions: {len(grants)}")

    # Step 2: Check requests
    requests = [
        ("/admin/users", "POST"),
        ("/admin/secrets/key", "GET"),
        ("/pages/index.jsp", "GET"),
        ("/pages/index.jsp", "DELETE"),
    ]
    for name, method in requests:
        result = grants.check(name, method)
        verdict = "ALLOW" if result.allowed else "DENY"
        print(f"  {method:6} {name:22} -> {verdict}")

    # Step 3: Canonical actions
    permission = perms.ResourcePermission("/foo/*", "POST,GET,GET")
    print(f"Canonical actions: {permission.actions}")


if __name__ == "__main__":
    main()
