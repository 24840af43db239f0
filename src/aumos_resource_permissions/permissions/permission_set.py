"""Collections of granted web resource permissions.

ResourcePermissionSet holds the permissions granted to a principal and
answers whether a requested permission is covered by any of them.

Example
-------
::

    grants = ResourcePermissionSet([
        ResourcePermission("/admin/*:/admin/public/*", "GET,POST"),
        ResourcePermission("*.jsp", "GET"),
    ])
    result = grants.check("/admin/users", "POST")
    assert result.allowed is True
    assert result.matched_permission is not None
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from aumos_resource_permissions.permissions.resource_permission import (
    ResourcePermission,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PermissionCheckResult:
    """Immutable result of checking a request against a permission set.

    Attributes
    ----------
    allowed:
        Whether some granted permission implies the request.
    name:
        The requested resource name.
    method:
        The requested HTTP method, or ``None`` for all methods.
    matched_permission:
        The first granted permission that implied the request, or ``None``.
    """

    allowed: bool
    name: str
    method: str | None
    matched_permission: ResourcePermission | None = None

    def __bool__(self) -> bool:
        """Return True if the request is allowed."""
        return self.allowed


class ResourcePermissionSet:
    """Ordered collection of granted ResourcePermission instances.

    Parameters
    ----------
    permissions:
        Initial permissions, evaluated in the order given.
    """

    def __init__(self, permissions: Iterable[ResourcePermission] | None = None) -> None:
        self._permissions: list[ResourcePermission] = []
        for permission in permissions or []:
            self.add(permission)

    def add(self, permission: ResourcePermission) -> None:
        """Append *permission* to the set.

        Raises
        ------
        TypeError
            If *permission* is not a ResourcePermission.
        """
        if not isinstance(permission, ResourcePermission):
            raise TypeError(
                f"ResourcePermissionSet only holds ResourcePermission; "
                f"got {type(permission).__name__}."
            )
        self._permissions.append(permission)

    def implies(self, permission: object) -> bool:
        """Return True if any granted permission implies *permission*."""
        return self._find_implying(permission) is not None

    def check(self, name: str | None, method: str | None = None) -> PermissionCheckResult:
        """Check a request for *name* with *method* against the granted set.

        Parameters
        ----------
        name:
            Requested resource (a URL pattern or path).
        method:
            HTTP method of the request; ``None`` requests all methods.

        Returns
        -------
        PermissionCheckResult
        """
        requested = ResourcePermission(name, method)
        matched = self._find_implying(requested)
        logger.debug(
            "Permission %s: name=%s method=%s matched=%r",
            "ALLOW" if matched is not None else "DENY",
            requested.name,
            method,
            matched,
        )
        return PermissionCheckResult(
            allowed=matched is not None,
            name=requested.name,
            method=method,
            matched_permission=matched,
        )

    def _find_implying(self, permission: object) -> ResourcePermission | None:
        for granted in self._permissions:
            if granted.implies(permission):
                return granted
        return None

    def __iter__(self) -> Iterator[ResourcePermission]:
        return iter(self._permissions)

    def __len__(self) -> int:
        return len(self._permissions)

    def __contains__(self, permission: object) -> bool:
        return any(granted == permission for granted in self._permissions)

    def summary(self) -> dict[str, object]:
        """Return a plain dict summarising the granted permissions."""
        return {
            "permission_count": len(self._permissions),
            "names": [p.name for p in self._permissions],
            "all_methods": sum(1 for p in self._permissions if p.methods.is_all),
            "exception_lists": sum(
                1 for p in self._permissions if p.methods.is_exclude
            ),
        }
