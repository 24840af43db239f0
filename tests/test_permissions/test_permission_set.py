"""Tests for ResourcePermissionSet and PermissionCheckResult."""
from __future__ import annotations

import pytest

from aumos_resource_permissions.permissions.permission_set import (
    PermissionCheckResult,
    ResourcePermissionSet,
)
from aumos_resource_permissions.permissions.resource_permission import (
    ResourcePermission,
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def grants() -> ResourcePermissionSet:
    return ResourcePermissionSet(
        [
            ResourcePermission("/admin/*:/admin/secrets/*", "GET,POST"),
            ResourcePermission("*.jsp", "GET"),
            ResourcePermission("/api/*", "!DELETE"),
        ]
    )


# ---------------------------------------------------------------------------
# PermissionCheckResult
# ---------------------------------------------------------------------------

class TestPermissionCheckResult:
    def test_allowed_result_is_truthy(self) -> None:
        assert bool(PermissionCheckResult(allowed=True, name="/a", method="GET")) is True

    def test_denied_result_is_falsy(self) -> None:
        assert bool(PermissionCheckResult(allowed=False, name="/a", method="GET")) is False

    def test_frozen_dataclass(self) -> None:
        result = PermissionCheckResult(allowed=True, name="/a", method="GET")
        with pytest.raises((AttributeError, TypeError)):
            result.allowed = False  # type: ignore[misc]

    def test_matched_permission_defaults_none(self) -> None:
        assert PermissionCheckResult(allowed=False, name="/a", method=None).matched_permission is None


# ---------------------------------------------------------------------------
# ResourcePermissionSet
# ---------------------------------------------------------------------------

class TestResourcePermissionSet:
    def test_allowed_request(self, grants: ResourcePermissionSet) -> None:
        result = grants.check("/admin/users", "POST")
        assert result.allowed is True
        assert result.matched_permission is not None
        assert result.matched_permission.name == "/admin/*:/admin/secrets/*"

    def test_carve_out_denied(self, grants: ResourcePermissionSet) -> None:
        result = grants.check("/admin/secrets/key", "GET")
        assert result.allowed is False
        assert result.matched_permission is None

    def test_method_denied(self, grants: ResourcePermissionSet) -> None:
        assert grants.check("/admin/users", "DELETE").allowed is False

    def test_extension_grant(self, grants: ResourcePermissionSet) -> None:
        result = grants.check("/pages/index.jsp", "GET")
        assert result.allowed is True
        assert result.matched_permission is not None
        assert result.matched_permission.name == "*.jsp"

    def test_exception_list_grant_needs_exception_list_request(
        self, grants: ResourcePermissionSet
    ) -> None:
        assert grants.check("/api/orders", "GET").allowed is False
        assert grants.implies(ResourcePermission("/api/orders", "!PUT")) is True

    def test_implies_foreign_type(self, grants: ResourcePermissionSet) -> None:
        assert grants.implies("/admin/users") is False

    def test_empty_set_denies(self) -> None:
        assert ResourcePermissionSet().check("/a", "GET").allowed is False

    def test_add(self) -> None:
        grants = ResourcePermissionSet()
        grants.add(ResourcePermission("/a/*", None))
        assert len(grants) == 1
        assert grants.check("/a/b", "PUT").allowed is True

    def test_add_rejects_other_types(self) -> None:
        with pytest.raises(TypeError, match="ResourcePermission"):
            ResourcePermissionSet().add("/a/*")  # type: ignore[arg-type]

    def test_iteration_preserves_order(self, grants: ResourcePermissionSet) -> None:
        assert [p.name for p in grants] == [
            "/admin/*:/admin/secrets/*",
            "*.jsp",
            "/api/*",
        ]

    def test_contains_uses_equality(self, grants: ResourcePermissionSet) -> None:
        assert ResourcePermission("*.jsp", ["GET"]) in grants
        assert ResourcePermission("*.jsp", "POST") not in grants

    def test_summary(self, grants: ResourcePermissionSet) -> None:
        summary = grants.summary()
        assert summary["permission_count"] == 3
        assert summary["exception_lists"] == 1
        assert summary["all_methods"] == 0
