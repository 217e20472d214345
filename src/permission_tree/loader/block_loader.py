"""YAML loader for permission block sequences.

Hosts usually fetch permission blocks from a database, but fixtures,
service defaults and the ``permtree`` CLI read them from YAML files that
follow this schema.

Schema
------
::

    version: "1"
    blocks:
      - name: "role:viewer"
        statements:
          - "read@projects"
          - "read@reports"
      - name: "direct"
        statements:
          - "-read@projects:secret"
          - "+write@projects:secret:drafts"

Blocks are listed from the least to the most important source.

Example
-------
::

    loader = BlockLoader()
    config = loader.load("permissions.yaml")
    tree = parse_permissions(config.statement_blocks())
"""
from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from permission_tree.statements.grammar import validate_permission

logger = logging.getLogger(__name__)

_SUPPORTED_VERSIONS: frozenset[str] = frozenset(["1.0", "1"])


class PermissionConfigError(ValueError):
    """Raised when a permission block config is malformed or invalid.

    Attributes
    ----------
    config_path:
        The path to the config file that caused the error, if known.
    """

    def __init__(self, message: str, config_path: str | None = None) -> None:
        self.config_path = config_path
        prefix = f"[{config_path}] " if config_path else ""
        super().__init__(f"{prefix}{message}")


class BlockConfig(BaseModel):
    """One inheritance source and its raw statements."""

    model_config = {"extra": "allow"}

    name: str | None = Field(default=None)
    statements: list[str] = Field(default_factory=list)


class PermissionConfig(BaseModel):
    """Top-level schema of a permission blocks file."""

    model_config = {"extra": "allow"}

    version: str = Field(default="1")
    description: str | None = Field(default=None)
    blocks: list[BlockConfig] = Field(default_factory=list)

    @field_validator("version", mode="before")
    @classmethod
    def validate_version(cls, value: object) -> str:
        version = str(value)
        if version not in _SUPPORTED_VERSIONS:
            raise ValueError(
                f"Unsupported config version {version!r}. "
                f"Supported: {sorted(_SUPPORTED_VERSIONS)}."
            )
        return version

    def statement_blocks(self) -> list[list[str]]:
        """Return the blocks as a sequence ready for ``parse_permissions``."""
        return [list(block.statements) for block in self.blocks]

    def block_names(self) -> list[str]:
        """Return block names, falling back to ``block-<index>``."""
        return [block.name or f"block-{index}" for index, block in enumerate(self.blocks)]


class BlockLoader:
    """Loads :class:`PermissionConfig` objects from YAML files or dicts.

    Parameters
    ----------
    strict:
        When ``True``, unknown top-level keys and statements that fail the
        grammar are errors. Default ``False``: unknown keys are ignored and
        invalid statements are left for the tree builder to skip.
    """

    _KNOWN_TOP_KEYS: frozenset[str] = frozenset(["version", "description", "blocks"])

    def __init__(self, strict: bool = False) -> None:
        self._strict = strict

    def load(self, config_path: str | Path) -> PermissionConfig:
        """Load blocks from a YAML file on disk.

        Raises
        ------
        FileNotFoundError
            If the config file does not exist.
        PermissionConfigError
            If the file cannot be parsed or is structurally invalid.
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

        return self._build_config(raw, config_path=str(config_path))

    def load_from_dict(
        self,
        config: dict[str, object],
        config_path: str | None = None,
    ) -> PermissionConfig:
        """Load blocks from an already-parsed config dictionary."""
        return self._build_config(config, config_path=config_path)

    def load_from_yaml_string(
        self,
        yaml_string: str,
        config_path: str | None = None,
    ) -> PermissionConfig:
        """Load blocks from a YAML string."""
        try:
            raw = yaml.safe_load(yaml_string) or {}
        except yaml.YAMLError as exc:
            raise PermissionConfigError(
                f"Failed to parse YAML string: {exc}", config_path
            ) from exc
        return self._build_config(raw, config_path=config_path)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _build_config(
        self,
        raw: object,
        config_path: str | None = None,
    ) -> PermissionConfig:
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
            raise PermissionConfigError(str(exc), config_path) from exc

        if self._strict:
            self._check_statements(config, config_path)

        logger.info(
            "Loaded %d permission blocks from %s",
            len(config.blocks),
            config_path or "<dict>",
        )
        return config

    def _check_statements(
        self,
        config: PermissionConfig,
        config_path: str | None,
    ) -> None:
        for name, block in zip(config.block_names(), config.blocks):
            invalid = [s for s in block.statements if not validate_permission(s)]
            if invalid:
                raise PermissionConfigError(
                    f"Block '{name}' has invalid statements: {invalid}",
                    config_path,
                )
