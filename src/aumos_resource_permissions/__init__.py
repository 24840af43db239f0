"""aumos-resource-permissions — URL pattern and HTTP method permissions for web resources.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import aumos_resource_permissions as perms
>>> perms.__version__
'0.1.0'
>>> granted = perms.ResourcePermission("/foo/*", "GET,POST")
>>> granted.implies(perms.ResourcePermission("/foo/bar", "GET"))
True
"""
from __future__ import annotations

__version__: str = "0.1.0"

from aumos_resource_permissions.permissions.http_methods import (
    ALL_HTTP_METHODS,
    MethodSet,
    MethodSetKind,
)
from aumos_resource_permissions.permissions.permission_loader import (
    PermissionConfigError,
    PermissionLoader,
)
from aumos_resource_permissions.permissions.permission_set import (
    PermissionCheckResult,
    ResourcePermissionSet,
)
from aumos_resource_permissions.permissions.resource_permission import (
    RequestContext,
    ResourcePermission,
)
from aumos_resource_permissions.permissions.url_pattern import (
    MalformedSpecError,
    URLPatternSpec,
)

__all__ = [
    "__version__",
    "ALL_HTTP_METHODS",
    "MalformedSpecError",
    "MethodSet",
    "MethodSetKind",
    "PermissionCheckResult",
    "PermissionConfigError",
    "PermissionLoader",
    "RequestContext",
    "ResourcePermission",
    "ResourcePermissionSet",
    "URLPatternSpec",
]
