"""Tests for PermissionLoader."""
from __future__ import annotations

import pathlib
import textwrap

import pytest

from aumos_resource_permissions.permissions.permission_loader import (
    PermissionConfigError,
    PermissionEntry,
    PermissionLoader,
)
from aumos_resource_permissions.permissions.permission_set import (
    ResourcePermissionSet,
)
from aumos_resource_permissions.permissions.resource_permission import (
    ResourcePermission,
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

_VALID_CONFIG: dict[str, object] = {
    "version": "1.0",
    "permissions": [
        {"id": "admin", "name": "/admin/*:/admin/public/*", "actions": "GET,POST"},
        {"id": "jsp", "name": "*.jsp", "methods": ["HEAD", "GET"]},
        {"id": "api", "name": "/api/*", "actions": "!DELETE"},
    ],
}

_VALID_YAML = textwrap.dedent(
    """\
    version: "1.0"
    description: "Reporting service grants"
    permissions:
      - id: admin
        name: "/admin/*:/admin/public/*"
        actions: "GET,POST"
      - name: "*.jsp"
        methods:
          - GET
    """
)


@pytest.fixture()
def loader() -> PermissionLoader:
    return PermissionLoader()


@pytest.fixture()
def strict_loader() -> PermissionLoader:
    return PermissionLoader(strict=True)


# ---------------------------------------------------------------------------
# load_from_dict
# ---------------------------------------------------------------------------

class TestPermissionLoaderFromDict:
    def test_returns_permission_set(self, loader: PermissionLoader) -> None:
        grants = loader.load_from_dict(_VALID_CONFIG)
        assert isinstance(grants, ResourcePermissionSet)
        assert len(grants) == 3

    def test_actions_and_methods_parsed(self, loader: PermissionLoader) -> None:
        admin, jsp, api = list(loader.load_from_dict(_VALID_CONFIG))
        assert admin.actions == "GET,POST"
        assert jsp.actions == "GET,HEAD"
        assert api.methods.to_actions_string() == "!DELETE"

    def test_grants_enforced(self, loader: PermissionLoader) -> None:
        grants = loader.load_from_dict(_VALID_CONFIG)
        assert grants.check("/admin/users", "GET").allowed is True
        assert grants.check("/admin/public/index.html", "GET").allowed is False

    def test_missing_name_is_default_pattern(self, loader: PermissionLoader) -> None:
        grants = loader.load_from_dict({"permissions": [{"actions": "GET"}]})
        assert [p.name for p in grants] == ["/"]

    def test_empty_permission_list(self, loader: PermissionLoader) -> None:
        assert len(loader.load_from_dict({"permissions": []})) == 0

    def test_missing_permissions_raises(self, loader: PermissionLoader) -> None:
        with pytest.raises(PermissionConfigError, match="permissions"):
            loader.load_from_dict({"version": "1.0"})

    def test_non_mapping_raises(self, loader: PermissionLoader) -> None:
        with pytest.raises(PermissionConfigError, match="mapping"):
            loader.load_from_dict(["not", "a", "dict"])  # type: ignore[arg-type]

    def test_unsupported_version_raises(self, loader: PermissionLoader) -> None:
        with pytest.raises(PermissionConfigError, match="version"):
            loader.load_from_dict({"version": "2.0", "permissions": []})

    def test_numeric_version_accepted(self, loader: PermissionLoader) -> None:
        assert len(loader.load_from_dict({"version": 1.0, "permissions": []})) == 0

    def test_malformed_spec_raises_config_error(self, loader: PermissionLoader) -> None:
        config = {"permissions": [{"id": "bad", "name": "/a:/b"}]}
        with pytest.raises(PermissionConfigError, match="bad"):
            loader.load_from_dict(config, config_path="grants.yaml")

    def test_actions_and_methods_together_raise(self, loader: PermissionLoader) -> None:
        config = {"permissions": [{"name": "/a", "actions": "GET", "methods": ["GET"]}]}
        with pytest.raises(PermissionConfigError):
            loader.load_from_dict(config)

    def test_error_carries_config_path(self, loader: PermissionLoader) -> None:
        with pytest.raises(PermissionConfigError) as exc_info:
            loader.load_from_dict({"version": "9"}, config_path="grants.yaml")
        assert exc_info.value.config_path == "grants.yaml"
        assert "[grants.yaml]" in str(exc_info.value)

    def test_unknown_keys_ignored_by_default(self, loader: PermissionLoader) -> None:
        grants = loader.load_from_dict({"permissions": [], "owner": "team-a"})
        assert len(grants) == 0

    def test_unknown_keys_rejected_in_strict_mode(
        self, strict_loader: PermissionLoader
    ) -> None:
        with pytest.raises(PermissionConfigError, match="Unknown top-level keys"):
            strict_loader.load_from_dict({"permissions": [], "owner": "team-a"})


# ---------------------------------------------------------------------------
# YAML sources
# ---------------------------------------------------------------------------

class TestPermissionLoaderFromYaml:
    def test_yaml_string(self, loader: PermissionLoader) -> None:
        grants = loader.load_from_yaml_string(_VALID_YAML)
        assert len(grants) == 2
        assert grants.check("/x/page.jsp", "GET").allowed is True

    def test_invalid_yaml_string(self, loader: PermissionLoader) -> None:
        with pytest.raises(PermissionConfigError, match="parse YAML"):
            loader.load_from_yaml_string("permissions: [")

    def test_empty_yaml_string(self, loader: PermissionLoader) -> None:
        with pytest.raises(PermissionConfigError):
            loader.load_from_yaml_string("")

    def test_load_file(self, loader: PermissionLoader, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "permissions.yaml"
        path.write_text(_VALID_YAML, encoding="utf-8")
        grants = loader.load(path)
        assert len(grants) == 2

    def test_load_missing_file(self, loader: PermissionLoader, tmp_path: pathlib.Path) -> None:
        with pytest.raises(FileNotFoundError):
            loader.load(tmp_path / "missing.yaml")

    def test_load_invalid_file(self, loader: PermissionLoader, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("permissions: [", encoding="utf-8")
        with pytest.raises(PermissionConfigError) as exc_info:
            loader.load(path)
        assert exc_info.value.config_path == str(path)


# ---------------------------------------------------------------------------
# PermissionEntry
# ---------------------------------------------------------------------------

class TestPermissionEntry:
    def test_to_permission_with_actions(self) -> None:
        entry = PermissionEntry(name="/a/*", actions="POST,GET")
        assert entry.to_permission() == ResourcePermission("/a/*", "GET,POST")

    def test_to_permission_with_methods(self) -> None:
        entry = PermissionEntry(name="/a/*", methods=["GET"])
        assert entry.to_permission().actions == "GET"

    def test_default_id(self) -> None:
        assert PermissionEntry().id == "unnamed"
