"""Scanner settings model and loaders for confscan.

Responsibilities:
- Define scanner runtime settings as a typed dataclass.
- Provide deterministic precedence resolution for settings values.
- Provide loader entry points for YAML- and environment-based settings.

Key types:
- `ScannerConfig`: normalized settings for one scan run.
- `SettingsSources`: optional value sources for precedence resolution.
- `ConfigLoader`: static construction helpers for `ScannerConfig`.
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .models.datatypes import (
    DEFAULT_MAX_NAME_LENGTH,
    DEFAULT_MAX_VALUE_LENGTH,
    ScanLimits,
)
from .parsing import (
    normalize_optional_string,
    parse_permissive_boolean,
    parse_permissive_positive_int,
)


_DEFAULT_ENCODING = "utf-8"

_ENV_KEYS = {
    "max_name_length": "CONFSCAN_MAX_NAME_LENGTH",
    "max_value_length": "CONFSCAN_MAX_VALUE_LENGTH",
    "encoding": "CONFSCAN_ENCODING",
    "allow_unknown_options": "CONFSCAN_ALLOW_UNKNOWN_OPTIONS",
}


@dataclass(frozen=True, slots=True)
class SettingsSources:
    """Source mappings used for deterministic settings precedence.

    Attributes:
        cli: Values explicitly provided by CLI arguments, keyed by field name.
        env: Environment variables, keyed by `CONFSCAN_*` names.
    """

    cli: Mapping[str, object] = field(default_factory=dict)
    env: Mapping[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class ScannerConfig:
    """Settings for one scan run.

    Attributes:
        max_name_length: Longest accepted parameter name.
        max_value_length: Longest accepted parameter value.
        encoding: Text encoding used to read config files.
        allow_unknown_options: Whether option binding tolerates undeclared names.
    """

    max_name_length: int = DEFAULT_MAX_NAME_LENGTH
    max_value_length: int = DEFAULT_MAX_VALUE_LENGTH
    encoding: str = _DEFAULT_ENCODING
    allow_unknown_options: bool = False

    def validate(self) -> None:
        """Validate settings values before scanning."""

        for field_name in ("max_name_length", "max_value_length"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"`{field_name}` must be a positive integer.")
        self._validate_encoding(self.encoding)

    def limits(self) -> ScanLimits:
        """Return the scanner length bounds described by these settings."""

        return ScanLimits(
            max_name_length=self.max_name_length,
            max_value_length=self.max_value_length,
        )

    def resolved(self, sources: SettingsSources | None = None) -> ScannerConfig:
        """Resolve settings with deterministic source precedence.

        Precedence for each key is:
        `cli` > `env` > current field value.
        """

        resolved_sources = sources if sources is not None else SettingsSources()

        config = ScannerConfig(
            max_name_length=self._resolve_positive_int(
                "max_name_length", self.max_name_length, resolved_sources
            ),
            max_value_length=self._resolve_positive_int(
                "max_value_length", self.max_value_length, resolved_sources
            ),
            encoding=self._resolve_string("encoding", self.encoding, resolved_sources),
            allow_unknown_options=self._resolve_bool(
                "allow_unknown_options", self.allow_unknown_options, resolved_sources
            ),
        )
        config.validate()
        return config

    @staticmethod
    def _lookup(key: str, sources: SettingsSources) -> tuple[object, str] | None:
        """Return the winning raw value and its label, or `None` when unset."""

        cli_value = sources.cli.get(key)
        if cli_value is not None:
            return cli_value, f"CLI option `{key}`"

        env_key = _ENV_KEYS[key]
        env_value = normalize_optional_string(sources.env.get(env_key))
        if env_value is not None:
            return env_value, f"Environment variable `{env_key}`"
        return None

    @staticmethod
    def _resolve_positive_int(key: str, default_value: int, sources: SettingsSources) -> int:
        found = ScannerConfig._lookup(key, sources)
        if found is None:
            return default_value
        raw_value, label = found
        parsed = parse_permissive_positive_int(raw_value)
        if parsed is None:
            raise ValueError(f"{label} must be a positive integer.")
        return parsed

    @staticmethod
    def _resolve_string(key: str, default_value: str, sources: SettingsSources) -> str:
        found = ScannerConfig._lookup(key, sources)
        if found is None:
            return default_value
        return str(found[0]).strip()

    @staticmethod
    def _resolve_bool(key: str, default_value: bool, sources: SettingsSources) -> bool:
        found = ScannerConfig._lookup(key, sources)
        if found is None:
            return default_value
        raw_value, label = found
        parsed = parse_permissive_boolean(raw_value)
        if parsed is None:
            raise ValueError(
                f"{label} must be a boolean value (`true`/`false`, `1`/`0`, `yes`/`no`)."
            )
        return parsed

    @staticmethod
    def _validate_encoding(encoding: str) -> None:
        """Validate that the encoding name is known to the codec registry."""

        try:
            codecs.lookup(encoding)
        except LookupError as exc:
            raise ValueError(f"Unsupported `encoding` value `{encoding}`.") from exc


class ConfigLoader:
    """Factory methods for creating `ScannerConfig` from external sources."""

    _SUPPORTED_YAML_KEYS = frozenset(_ENV_KEYS)

    @staticmethod
    def from_yaml(path: Path) -> ScannerConfig:
        """Create validated settings from a YAML file."""

        path_text = path.read_text(encoding="utf-8")
        payload = ConfigLoader._parse_yaml_payload(path_text, path)

        return ConfigLoader._build_config_from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> ScannerConfig:
        """Create validated settings from environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env
        return ScannerConfig().resolved(SettingsSources(env=env_map))

    @staticmethod
    def _parse_yaml_payload(raw_text: str, path: Path) -> Mapping[str, Any]:
        """Parse YAML text and enforce a mapping root payload."""

        try:
            payload = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            raise ValueError(f"YAML settings file `{path}` is not valid YAML: {exc}") from exc

        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(
                f"YAML settings file `{path}` must contain a top-level mapping/object."
            )
        return payload

    @staticmethod
    def _build_config_from_mapping(payload: Mapping[str, Any], source_label: str) -> ScannerConfig:
        """Build validated settings from a mapping payload."""

        ConfigLoader._validate_yaml_keys(payload, source_label)

        config = ScannerConfig(
            max_name_length=ConfigLoader._optional_positive_int(
                payload, "max_name_length", source_label, default=DEFAULT_MAX_NAME_LENGTH
            ),
            max_value_length=ConfigLoader._optional_positive_int(
                payload, "max_value_length", source_label, default=DEFAULT_MAX_VALUE_LENGTH
            ),
            encoding=(
                normalize_optional_string(payload.get("encoding")) or _DEFAULT_ENCODING
            ),
            allow_unknown_options=ConfigLoader._optional_boolean(
                payload, "allow_unknown_options", source_label, default=False
            ),
        )
        config.validate()
        return config

    @staticmethod
    def _validate_yaml_keys(payload: Mapping[str, Any], source_label: str) -> None:
        """Validate supported YAML keys."""

        unknown = sorted(
            str(key) for key in set(payload).difference(ConfigLoader._SUPPORTED_YAML_KEYS)
        )
        if unknown:
            key_list = ", ".join(unknown)
            raise ValueError(f"{source_label} includes unsupported key(s): {key_list}.")

    @staticmethod
    def _optional_positive_int(
        payload: Mapping[str, Any], key: str, source_label: str, default: int
    ) -> int:
        """Read and validate a positive integer payload field."""

        if key not in payload or payload[key] is None:
            return default
        parsed = parse_permissive_positive_int(payload[key])
        if parsed is None:
            raise ValueError(f"{source_label} field `{key}` must be a positive integer.")
        return parsed

    @staticmethod
    def _optional_boolean(
        payload: Mapping[str, Any], key: str, source_label: str, default: bool
    ) -> bool:
        """Read and validate a boolean field from a payload."""

        if key not in payload:
            return default

        parsed = parse_permissive_boolean(payload[key])
        if parsed is None:
            raise ValueError(
                f"{source_label} field `{key}` must be a boolean value "
                "(`true`/`false`, `1`/`0`, `yes`/`no`)."
            )
        return parsed
