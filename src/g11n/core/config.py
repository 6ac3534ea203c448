# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Configuration for g11n — YAML/TOML files, env vars and typed binding.

Keys use dot notation across nested mappings::

    g11n:
      default-locale: fr
      locales:
        de: locales/de.yaml

    config.get("g11n.default-locale")          # "fr"
    config.get_section("g11n.locales")         # {"de": "locales/de.yaml"}

Environment variables override file values: ``g11n.default-locale`` is
read from ``G11N_DEFAULT_LOCALE`` first. String values may reference
``${ENV_VAR}``, ``${other.config.key}`` or ``${key:fallback}``.
"""

from __future__ import annotations

import dataclasses
import os
import re
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar, get_origin, get_type_hints

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, ValidationError

T = TypeVar("T")

_PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")
_MAX_PLACEHOLDER_DEPTH = 10

_CONFIG_PROPERTIES_ATTR = "__g11n_config_prefix__"

_SCALAR_COERCIONS: dict[Any, Callable[[str], Any]] = {
    int: int,
    float: float,
    bool: lambda raw: raw.lower() in ("true", "1", "yes"),
}


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Mark a dataclass or Pydantic model as bindable to a configuration prefix.

    Usage:
        @config_properties(prefix="g11n.logging")
        @dataclass
        class LoggingProperties:
            format: str = "console"
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _CONFIG_PROPERTIES_ATTR, prefix)
        return cls

    return decorator


class Config:
    """Nested configuration data with dot-notation access."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}
        self._loaded_sources: list[str] = []

    @property
    def loaded_sources(self) -> list[str]:
        """Config files that were loaded, in merge order."""
        return list(self._loaded_sources)

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)

    @classmethod
    def from_file(cls, path: str | Path, active_profiles: list[str] | None = None) -> Config:
        """Load a YAML or TOML file, then merge its profile overlays.

        The overlay for profile ``dev`` of ``g11n.yaml`` is ``g11n-dev.yaml``
        in the same directory; later profiles win. A missing *path*
        yields an empty configuration.
        """
        path = Path(path)
        config = cls()
        if not path.is_file():
            return config

        candidates = [(path, str(path))]
        for profile in active_profiles or []:
            overlay = path.with_name(f"{path.stem}-{profile}{path.suffix}")
            candidates.append((overlay, f"{overlay} (profile: {profile})"))

        for candidate, label in candidates:
            if candidate.is_file():
                config._data = _merge(config._data, _read(candidate))
                config._loaded_sources.append(label)
        return config

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value at *key*, the env override, or *default*."""
        env_val = os.environ.get(_env_name(key))
        if env_val is not None:
            return env_val

        value = self._lookup(key)
        if value is None:
            return default
        if isinstance(value, str) and "${" in value:
            return self._resolve(value)
        return value

    def get_section(self, prefix: str) -> dict[str, Any]:
        """Return the mapping stored under *prefix*, or an empty dict."""
        section = self._lookup(prefix)
        return section if isinstance(section, dict) else {}

    def bind(self, config_cls: type[T]) -> T:
        """Build a ``@config_properties`` dataclass or Pydantic model from its section.

        Pydantic models are validated with ``model_validate`` and fail fast;
        dataclass fields typed ``int``, ``float`` or ``bool`` accept string
        values.
        """
        prefix = getattr(config_cls, _CONFIG_PROPERTIES_ATTR, None)
        if prefix is None:
            raise ValueError(f"{config_cls.__name__} is not decorated with @config_properties")

        section = self._expand(self.get_section(prefix))
        for key, annotation in _bindable_fields(config_cls):
            if get_origin(annotation) is dict or annotation is dict:
                continue
            env_val = os.environ.get(_env_name(f"{prefix}.{key}"))
            if env_val is not None:
                section[key] = env_val

        if issubclass(config_cls, BaseModel):
            try:
                return config_cls.model_validate(section)
            except ValidationError as exc:
                raise ValueError(
                    f"Configuration validation failed for '{config_cls.__name__}' (prefix='{prefix}'):\n{exc}"
                ) from exc

        hints = get_type_hints(config_cls)
        kwargs: dict[str, Any] = {}
        for field in dataclasses.fields(config_cls):  # type: ignore[arg-type]
            if field.name not in section:
                continue
            value = section[field.name]
            coerce = _SCALAR_COERCIONS.get(hints.get(field.name))
            kwargs[field.name] = coerce(value) if coerce and isinstance(value, str) else value
        return config_cls(**kwargs)

    def _lookup(self, key: str) -> Any:
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return None
            current = current[part]
        return current

    def _expand(self, value: Any) -> Any:
        """Resolve placeholders in every string of a section, copying containers."""
        if isinstance(value, dict):
            return {key: self._expand(item) for key, item in value.items()}
        if isinstance(value, list):
            return [self._expand(item) for item in value]
        if isinstance(value, str) and "${" in value:
            return self._resolve(value)
        return value

    def _resolve(self, value: str, depth: int = 0) -> str:
        if depth > _MAX_PLACEHOLDER_DEPTH:
            raise ValueError(f"Placeholders in '{value}' nest too deeply; check for circular references")

        def replace(match: re.Match[str]) -> str:
            ref, has_fallback, fallback = match.group(1).partition(":")

            env_val = os.environ.get(ref)
            if env_val is not None:
                return env_val

            referenced = self._lookup(ref)
            if referenced is not None:
                text = str(referenced)
                return self._resolve(text, depth + 1) if "${" in text else text

            if has_fallback:
                return fallback
            raise ValueError(f"Cannot resolve placeholder '${{{match.group(1)}}}': not found in environment or config")

        return _PLACEHOLDER_RE.sub(replace, value)


def _bindable_fields(config_cls: type) -> list[tuple[str, Any]]:
    """``(config key, annotation)`` pairs; Pydantic aliases name the key."""
    if issubclass(config_cls, BaseModel):
        return [(info.alias or name, info.annotation) for name, info in config_cls.model_fields.items()]
    hints = get_type_hints(config_cls)
    return [(field.name, hints.get(field.name)) for field in dataclasses.fields(config_cls)]  # type: ignore[arg-type]


def _env_name(key: str) -> str:
    return "G11N_" + key.removeprefix("g11n.").upper().replace(".", "_").replace("-", "_")


def _read(path: Path) -> dict[str, Any]:
    if path.suffix == ".toml":
        with path.open("rb") as fh:
            return tomllib.load(fh)
    with path.open(encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge *override* into *base*; override values win."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged
