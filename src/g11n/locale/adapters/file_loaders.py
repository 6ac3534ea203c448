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
"""File loaders — read YAML, JSON and TOML locale files.

Nested keys are flattened with dots, so the YAML document::

    Greeter:
      Hello: "Bonjour, %v!"

yields the dictionary ``{"Greeter.Hello": "Bonjour, %v!"}``.
"""

from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from g11n.kernel.exceptions import LocaleLoadException


class YamlLocaleLoader:
    """Loads ``.yaml`` / ``.yml`` locale files."""

    def load(self, path: str) -> dict[str, str]:
        try:
            with Path(path).open(encoding="utf-8") as fh:
                data = yaml.safe_load(fh) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise _load_error(path, "yaml", exc) from exc
        return _flatten_document(path, "yaml", data)


class JsonLocaleLoader:
    """Loads ``.json`` locale files."""

    def load(self, path: str) -> dict[str, str]:
        try:
            with Path(path).open(encoding="utf-8") as fh:
                data = json.load(fh) or {}
        except (OSError, ValueError) as exc:
            raise _load_error(path, "json", exc) from exc
        return _flatten_document(path, "json", data)


class TomlLocaleLoader:
    """Loads ``.toml`` locale files."""

    def load(self, path: str) -> dict[str, str]:
        try:
            with Path(path).open("rb") as fh:
                data = tomllib.load(fh)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise _load_error(path, "toml", exc) from exc
        return _flatten_document(path, "toml", data)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_error(path: str, format_name: str, exc: Exception) -> LocaleLoadException:
    return LocaleLoadException(
        f"Cannot load {format_name} locale file '{path}': {exc}",
        code="LOCALE_LOAD_FAILED",
        context={"path": path, "format": format_name},
    )


def _flatten_document(path: str, format_name: str, data: Any) -> dict[str, str]:
    if not isinstance(data, dict):
        raise LocaleLoadException(
            f"Locale file '{path}' must contain a mapping, got {type(data).__name__}",
            code="LOCALE_LOAD_FAILED",
            context={"path": path, "format": format_name},
        )
    return _flatten(data)


def _flatten(data: dict[str, Any], prefix: str = "") -> dict[str, str]:
    """Flatten a nested dict into dot-separated keys with string values."""
    items: dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{prefix}{key}" if not prefix else f"{prefix}.{key}"
        if isinstance(value, dict):
            items.update(_flatten(value, full_key))
        elif value is not None:
            items[full_key] = str(value)
    return items
