"""Web resource permissions: URL pattern spec plus HTTP method set.

ResourcePermission answers whether a granted permission covers a requested
(resource, method) pair. Both components are parsed once at construction
and never change afterwards.

Implication rules
-----------------
``granted.implies(requested)`` is True when:

1. the granted URLPatternSpec implies the requested one, and
2. if the granted permission carries an exception list (``"!PUT,DELETE"``),
   the requested permission also carries one and names none of the
   granted exceptions, and
3. if the granted permission enumerates its methods, the requested methods
   are a subset of them. A request for ALL methods needs every standard
   method granted. A grant covering ALL methods is not checked against the
   requested methods.

Equality is mutual implication, so ``"GET,POST"`` and ``"POST,GET"`` are the
same permission.

Example
-------
::

    granted = ResourcePermission("/foo/*", "GET,POST")
    requested = ResourcePermission("/foo/bar", "GET")
    assert granted.implies(requested)
    assert not requested.implies(granted)
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from aumos_resource_permissions.permissions.http_methods import (
    ALL_HTTP_METHODS,
    MethodSet,
)
from aumos_resource_permissions.permissions.url_pattern import (
    DEFAULT_PATTERN,
    URLPatternSpec,
)

logger = logging.getLogger(__name__)


@runtime_checkable
class RequestContext(Protocol):
    """Minimal view of an incoming HTTP request."""

    def path(self) -> str | None:
        """Full request path, including the context path."""

    def context_path(self) -> str | None:
        """Path prefix under which the application is deployed."""

    def method(self) -> str | None:
        """HTTP method of the request."""


def request_permission_name(request: RequestContext) -> str:
    """Return the permission name for *request*.

    The name is the request path with the context path stripped. A
    remaining ``"/"`` and a missing path both become the empty string.
    """
    uri = request.path()
    if uri is None:
        return ""
    context_path = request.context_path() or ""
    if context_path:
        uri = uri[len(context_path):]
    if uri == "/":
        return ""
    return uri


class ResourcePermission:
    """Permission to access web resources with a set of HTTP methods.

    Parameters
    ----------
    name:
        A URLPatternSpec string such as ``"/admin/*:/admin/public/*"``.
        ``None`` means the default pattern ``"/"``.
    actions:
        Comma-separated HTTP methods (``"GET,POST"``), an exception list
        (``"!PUT,DELETE"``), a sequence of method names, or ``None`` / ``""``
        for all methods.

    Raises
    ------
    MalformedSpecError
        If *name* is not a valid URLPatternSpec.
    """

    __slots__ = ("_name", "_url_spec", "_methods")

    def __init__(
        self,
        name: str | None = None,
        actions: str | Iterable[str] | None = None,
    ) -> None:
        self._name = DEFAULT_PATTERN if name is None else name
        self._url_spec = URLPatternSpec(name)
        self._methods = MethodSet.parse(actions)

    @classmethod
    def from_request(cls, request: RequestContext) -> ResourcePermission:
        """Build the permission a request needs in order to be served."""
        return cls(request_permission_name(request), request.method())

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        """The URLPatternSpec string this permission was built from."""
        return self._name

    @property
    def url_spec(self) -> URLPatternSpec:
        """The parsed URL pattern spec."""
        return self._url_spec

    @property
    def methods(self) -> MethodSet:
        """The canonical HTTP method set."""
        return self._methods

    @property
    def actions(self) -> str | None:
        """Canonical comma-joined include list, or None.

        None is returned for the set of all methods and for exception
        lists; use ``methods.to_actions_string()`` to render the latter.
        """
        if self._methods.is_include:
            return self._methods.to_actions_string()
        return None

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def implies(self, permission: object) -> bool:
        """Return True if *permission* is covered by this permission.

        Anything that is not a ResourcePermission (including ``None``) is
        never implied.
        """
        if not isinstance(permission, ResourcePermission):
            return False

        if not self._url_spec.implies(permission._url_spec):
            return False

        if self._methods.is_exclude:
            return _exception_lists_compatible(self._methods, permission._methods)

        if self._methods.is_include:
            if permission._methods.is_include:
                return permission._methods.subset_of(self._methods)
            if permission._methods.is_all:
                return ALL_HTTP_METHODS <= set(self._methods.methods)

        return True

    def equals(self, permission: object) -> bool:
        """Return True if each permission implies the other."""
        if not isinstance(permission, ResourcePermission):
            return False
        return self.implies(permission) and permission.implies(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResourcePermission):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        value = self._url_spec.hash()
        if self._methods.is_include:
            value += hash(self._methods)
        return value

    def __reduce__(self) -> tuple[type[ResourcePermission], tuple[str, str | None]]:
        return (self.__class__, (self._name, self._methods.to_actions_string()))

    def __repr__(self) -> str:
        return (
            f"ResourcePermission(name={self._name!r}, "
            f"actions={self._methods.to_actions_string()!r})"
        )


def _exception_lists_compatible(granted: MethodSet, requested: MethodSet) -> bool:
    """Check a granted exception list against the requested permission's.

    The requested side must carry its own exception list, and none of the
    methods it excludes may also be excluded by the granted side.
    """
    if not requested.is_exclude:
        logger.debug(
            "Exception list %s does not imply non-exception methods %s",
            granted,
            requested,
        )
        return False
    return not set(requested.methods).intersection(granted.methods)
