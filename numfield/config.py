"""Configuration model and loaders for numfield.

Responsibilities:
- Define field configuration as a typed dataclass.
- Provide loader entry points for YAML- and environment-based configuration.
- Bridge loaded configuration to `Constraints` and `FieldProps`.

Key types:
- `FieldConfig`: normalized settings for one numeric field.
- `ConfigLoader`: static construction helpers for `FieldConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .models.datatypes import (
    Constraints,
    FieldProps,
    RawEventCallback,
    ValueChangeCallback,
)
from .parsing import (
    normalize_optional_string,
    parse_optional_non_negative_int,
    parse_optional_number,
    parse_permissive_boolean,
    parse_required_boolean,
)


@dataclass(slots=True)
class FieldConfig:
    """Configuration for one numeric field.

    Attributes:
        value: Initial external value, or `None` for an empty field.
        required: Whether an empty value is an error.
        allow_decimal: Whether a fractional part is accepted.
        decimal_places: Maximum fraction digits and blur rounding target.
        min_value: Inclusive lower bound.
        max_value: Inclusive upper bound.
        label: Optional label passed through to rendering.
        placeholder: Optional placeholder passed through to rendering.
        helper_text: Optional helper text shown while the field is valid.
        extra: Opaque host-widget settings forwarded untouched.
    """

    value: str | None = None
    required: bool = False
    allow_decimal: bool = True
    decimal_places: int | None = None
    min_value: float | None = None
    max_value: float | None = None
    label: str | None = None
    placeholder: str | None = None
    helper_text: str | None = None
    extra: dict[str, str] = field(default_factory=dict)

    def validate(self) -> None:
        """Validate configuration values before a controller is built.

        `min_value > max_value` is accepted as-is; the validator reports whichever
        bound is violated last.
        """

        if self.decimal_places is not None and self.decimal_places < 0:
            raise ValueError("`decimal_places` must be a non-negative integer.")

    def constraints(self) -> Constraints:
        """Return the validation constraints described by this config."""

        return Constraints(
            required=self.required,
            allow_decimal=self.allow_decimal,
            decimal_places=self.decimal_places,
            min_value=self.min_value,
            max_value=self.max_value,
        )

    def to_props(
        self,
        on_value_change: ValueChangeCallback | None = None,
        on_change: RawEventCallback | None = None,
        on_blur: RawEventCallback | None = None,
    ) -> FieldProps:
        """Build controller props from this config and optional callbacks."""

        return FieldProps(
            value=self.value,
            on_value_change=on_value_change,
            on_change=on_change,
            on_blur=on_blur,
            min_value=self.min_value,
            max_value=self.max_value,
            required=self.required,
            allow_decimal=self.allow_decimal,
            decimal_places=self.decimal_places,
            label=self.label,
            placeholder=self.placeholder,
            helper_text=self.helper_text,
            extra=dict(self.extra),
        )


class ConfigLoader:
    """Factory methods for creating `FieldConfig` from external sources."""

    _SUPPORTED_YAML_KEYS = frozenset(
        {
            "value",
            "required",
            "allow_decimal",
            "decimal_places",
            "min",
            "max",
            "label",
            "placeholder",
            "helper_text",
            "extra",
        }
    )

    @staticmethod
    def from_yaml(path: Path) -> FieldConfig:
        """Create a validated config from a YAML file."""

        path_text = path.read_text(encoding="utf-8")
        payload = ConfigLoader._parse_yaml_payload(path_text, path)

        return ConfigLoader._build_config_from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> FieldConfig:
        """Create a validated config from `NUMFIELD_*` environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env

        config = FieldConfig(
            value=ConfigLoader._optional_env_string(env_map, "NUMFIELD_VALUE"),
            required=ConfigLoader._optional_env_boolean(
                env_map, "NUMFIELD_REQUIRED", default=False
            ),
            allow_decimal=ConfigLoader._optional_env_boolean(
                env_map, "NUMFIELD_ALLOW_DECIMAL", default=True
            ),
            decimal_places=parse_optional_non_negative_int(
                env_map.get("NUMFIELD_DECIMAL_PLACES"), "NUMFIELD_DECIMAL_PLACES"
            ),
            min_value=parse_optional_number(env_map.get("NUMFIELD_MIN"), "NUMFIELD_MIN"),
            max_value=parse_optional_number(env_map.get("NUMFIELD_MAX"), "NUMFIELD_MAX"),
            label=ConfigLoader._optional_env_string(env_map, "NUMFIELD_LABEL"),
            placeholder=ConfigLoader._optional_env_string(env_map, "NUMFIELD_PLACEHOLDER"),
            helper_text=ConfigLoader._optional_env_string(env_map, "NUMFIELD_HELPER_TEXT"),
        )
        config.validate()
        return config

    @staticmethod
    def _parse_yaml_payload(raw_text: str, path: Path) -> Mapping[str, Any]:
        """Parse YAML text and enforce a mapping root payload."""

        try:
            payload = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            raise ValueError(f"YAML config `{path}` could not be parsed: {exc}") from exc

        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return payload

    @staticmethod
    def _build_config_from_mapping(payload: Mapping[str, Any], source_label: str) -> FieldConfig:
        """Build a validated config from a normalized mapping payload."""

        ConfigLoader._validate_yaml_keys(payload, source_label)

        try:
            decimal_places = parse_optional_non_negative_int(
                payload.get("decimal_places"), "decimal_places"
            )
            min_value = parse_optional_number(payload.get("min"), "min")
            max_value = parse_optional_number(payload.get("max"), "max")
        except ValueError as exc:
            raise ValueError(f"{source_label} field {exc}") from exc

        config = FieldConfig(
            value=ConfigLoader._optional_text(payload, "value", source_label),
            required=ConfigLoader._optional_boolean(
                payload, "required", source_label, default=False
            ),
            allow_decimal=ConfigLoader._optional_boolean(
                payload, "allow_decimal", source_label, default=True
            ),
            decimal_places=decimal_places,
            min_value=min_value,
            max_value=max_value,
            label=normalize_optional_string(payload.get("label")),
            placeholder=normalize_optional_string(payload.get("placeholder")),
            helper_text=normalize_optional_string(payload.get("helper_text")),
            extra=ConfigLoader._optional_string_map(payload, "extra", source_label),
        )
        config.validate()
        return config

    @staticmethod
    def _validate_yaml_keys(payload: Mapping[str, Any], source_label: str) -> None:
        """Reject keys the field configuration does not support."""

        unknown = sorted(
            str(key) for key in set(payload).difference(ConfigLoader._SUPPORTED_YAML_KEYS)
        )
        if unknown:
            key_list = ", ".join(unknown)
            raise ValueError(f"{source_label} includes unsupported key(s): {key_list}.")

    @staticmethod
    def _optional_text(payload: Mapping[str, Any], key: str, source_label: str) -> str | None:
        """Read an optional text field, rejecting scalars YAML resolved to other types."""

        raw_value = payload.get(key)
        if raw_value is None:
            return None
        if not isinstance(raw_value, str):
            raise ValueError(
                f"{source_label} field `{key}` must be text; quote it "
                f"(e.g. `{key}: \"1.50\"`) so it is kept verbatim."
            )
        return normalize_optional_string(raw_value)

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

    @staticmethod
    def _optional_string_map(
        payload: Mapping[str, Any], key: str, source_label: str
    ) -> dict[str, str]:
        """Read an optional mapping with non-empty string keys and values."""

        if key not in payload:
            return {}

        raw = payload[key]
        if raw is None:
            return {}
        if not isinstance(raw, Mapping):
            raise ValueError(f"{source_label} field `{key}` must be a mapping/object.")

        normalized: dict[str, str] = {}
        for raw_key, raw_value in raw.items():
            key_value = normalize_optional_string(raw_key)
            value_value = normalize_optional_string(raw_value)
            if key_value is None:
                raise ValueError(f"{source_label} field `{key}` contains a blank key.")
            if value_value is None:
                raise ValueError(
                    f"{source_label} field `{key}` contains blank value for `{key_value}`."
                )
            normalized[key_value] = value_value
        return normalized

    @staticmethod
    def _optional_env_string(env: Mapping[str, str], key: str) -> str | None:
        """Read and normalize optional string environment variable values."""

        if key not in env:
            return None
        return normalize_optional_string(env.get(key))

    @staticmethod
    def _optional_env_boolean(env: Mapping[str, str], key: str, default: bool) -> bool:
        """Read a boolean environment value, falling back to `default` when unset."""

        value = ConfigLoader._optional_env_string(env, key)
        if value is None:
            return default
        return parse_required_boolean(value, key)
