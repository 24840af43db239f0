"""YAML-based loader for granted web resource permissions.

PermissionLoader reads YAML grant documents and builds
ResourcePermissionSet instances. Entries are validated with Pydantic v2.

Schema
------
::

    version: "1.0"
    description: "Grants for the reporting service"
    permissions:
      - id: "admin-area"
        name: "/admin/*:/admin/public/*"
        actions: "GET,POST"
      - id: "jsp-read"
        name: "*.jsp"
        methods:
          - "GET"
          - "HEAD"
      - name: "/api/*"
        actions: "!DELETE"

``actions`` and ``methods`` are mutually exclusive; leaving both out grants
every HTTP method.

Example
-------
::

    loader = PermissionLoader()
    grants = loader.load("/path/to/permissions.yaml")
    assert grants.check("/admin/users", "GET").allowed
"""
from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from aumos_resource_permissions.permissions.permission_set import (
    ResourcePermissionSet,
)
from aumos_resource_permissions.permissions.resource_permission import (
    ResourcePermission,
)
from aumos_resource_permissions.permissions.url_pattern import MalformedSpecError

logger = logging.getLogger(__name__)

_SUPPORTED_VERSIONS: frozenset[str] = frozenset(["1.0", "1"])


class PermissionConfigError(ValueError):
    """Raised when a permission YAML config is malformed or invalid.

    Attributes
    ----------
    config_path:
        The path to the config file that caused the error, if known.
    """

    def __init__(self, message: str, config_path: str | None = None) -> None:
        self.config_path = config_path
        prefix = f"[{config_path}] " if config_path else ""
        super().__init__(f"{prefix}{message}")


class PermissionEntry(BaseModel):
    """A single granted permission in a YAML grant document."""

    model_config = {"extra": "allow"}

    id: str = Field(default="unnamed")
    name: str | None = Field(default=None)
    actions: str | None = Field(default=None)
    methods: list[str] | None = Field(default=None)

    @model_validator(mode="after")
    def check_single_method_source(self) -> PermissionEntry:
        if self.actions is not None and self.methods is not None:
            raise ValueError("Specify either 'actions' or 'methods', not both.")
        return self

    def to_permission(self) -> ResourcePermission:
        """Build the ResourcePermission this entry describes."""
        if self.methods is not None:
            return ResourcePermission(self.name, self.methods)
        return ResourcePermission(self.name, self.actions)


class PermissionConfig(BaseModel):
    """Top-level grant document schema."""

    model_config = {"extra": "allow"}

    version: str = Field(default="1.0")
    description: str | None = Field(default=None)
    metadata: dict[str, object] = Field(default_factory=dict)
    permissions: list[PermissionEntry]

    @field_validator("version", mode="before")
    @classmethod
    def coerce_version(cls, value: object) -> str:
        return str(value)


class PermissionLoader:
    """Loads ResourcePermissionSet grants from YAML files or dicts.

    Parameters
    ----------
    strict:
        When ``True``, unknown top-level keys in the YAML file are treated
        as an error. Default ``False`` (unknown keys are ignored).
    """

    _KNOWN_TOP_KEYS: frozenset[str] = frozenset(
        ["version", "permissions", "metadata", "description"]
    )

    def __init__(self, strict: bool = False) -> None:
        self._strict = strict

    def load(self, config_path: str | Path) -> ResourcePermissionSet:
        """Load granted permissions from a YAML file on disk.

        Raises
        ------
        PermissionConfigError
            If the file cannot be parsed or is structurally invalid.
        FileNotFoundError
            If the config file does not exist.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Permission config not found: {config_path}")

        try:
            with config_path.open("r", encoding="utf-8") as fh:
                raw = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise PermissionConfigError(
                f"Failed to parse YAML: {exc}", str(config_path)
            ) from exc

        return self._build_set(raw, config_path=str(config_path))

    def load_from_dict(
        self,
        config: dict[str, object],
        config_path: str | None = None,
    ) -> ResourcePermissionSet:
        """Load granted permissions from an already-parsed config dictionary."""
        return self._build_set(config, config_path=config_path)

    def load_from_yaml_string(
        self,
        yaml_string: str,
        config_path: str | None = None,
    ) -> ResourcePermissionSet:
        """Load granted permissions from a YAML string."""
        try:
            raw = yaml.safe_load(yaml_string) or {}
        except yaml.YAMLError as exc:
            raise PermissionConfigError(
                f"Failed to parse YAML string: {exc}", config_path
            ) from exc
        return self._build_set(raw, config_path=config_path)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _build_set(
        self,
        raw: object,
        config_path: str | None = None,
    ) -> ResourcePermissionSet:
        """Validate *raw* and build the ResourcePermissionSet it describes."""
        if not isinstance(raw, dict):
            raise PermissionConfigError(
                "Permission config must be a YAML mapping (dict).", config_path
            )

        if self._strict:
            unknown_keys = set(raw.keys()) - self._KNOWN_TOP_KEYS
            if unknown_keys:
                raise PermissionConfigError(
                    f"Unknown top-level keys: {sorted(unknown_keys)}. "
                    f"Known keys: {sorted(self._KNOWN_TOP_KEYS)}.",
                    config_path,
                )

        try:
            config = PermissionConfig.model_validate(raw)
        except ValidationError as exc:
            raise PermissionConfigError(
                f"Invalid permission config: {exc}", config_path
            ) from exc

        if config.version not in _SUPPORTED_VERSIONS:
            raise PermissionConfigError(
                f"Unsupported config version {config.version!r}. "
                f"Supported: {sorted(_SUPPORTED_VERSIONS)}.",
                config_path,
            )

        grants = ResourcePermissionSet()
        for index, entry in enumerate(config.permissions):
            try:
                grants.add(entry.to_permission())
            except MalformedSpecError as exc:
                raise PermissionConfigError(
                    f"Error in permission {entry.id!r} at index {index}: {exc}",
                    config_path,
                ) from exc

        logger.info(
            "Loaded %d resource permissions from %s",
            len(grants),
            config_path or "<dict>",
        )
        return grants
