"""Web resource permission matching.

Provides URLPatternSpec (servlet URL pattern lists with carve-outs),
MethodSet (canonical HTTP method sets) and ResourcePermission, which
composes the two into a comparable permission value.

Example
-------
::

    from aumos_resource_permissions.permissions import ResourcePermission

    granted = ResourcePermission("/foo/*", "GET,POST")
    assert granted.implies(ResourcePermission("/foo/bar", "GET"))
"""
from __future__ import annotations

from aumos_resource_permissions.permissions.http_methods import (
    ALL_HTTP_METHODS,
    MethodSet,
    MethodSetKind,
)
from aumos_resource_permissions.permissions.permission_loader import (
    PermissionConfig,
    PermissionConfigError,
    PermissionEntry,
    PermissionLoader,
)
from aumos_resource_permissions.permissions.permission_set import (
    PermissionCheckResult,
    ResourcePermissionSet,
)
from aumos_resource_permissions.permissions.resource_permission import (
    RequestContext,
    ResourcePermission,
    request_permission_name,
)
from aumos_resource_permissions.permissions.url_pattern import (
    MalformedSpecError,
    PatternType,
    URLPatternSpec,
    pattern_matches,
    pattern_type,
)

__all__ = [
    # URL patterns
    "MalformedSpecError",
    "PatternType",
    "URLPatternSpec",
    "pattern_matches",
    "pattern_type",
    # HTTP methods
    "ALL_HTTP_METHODS",
    "MethodSet",
    "MethodSetKind",
    # Permissions
    "RequestContext",
    "ResourcePermission",
    "request_permission_name",
    "PermissionCheckResult",
    "ResourcePermissionSet",
    # Loader
    "PermissionConfig",
    "PermissionConfigError",
    "PermissionEntry",
    "PermissionLoader",
]
