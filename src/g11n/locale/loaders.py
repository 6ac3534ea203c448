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
"""Loader registry — maps locale format names to loaders."""

from __future__ import annotations

import structlog

from g11n.locale.adapters.file_loaders import (
    JsonLocaleLoader,
    TomlLocaleLoader,
    YamlLocaleLoader,
)
from g11n.locale.ports.outbound import LocaleLoader

logger = structlog.get_logger("g11n.locale")

_loaders: dict[str, LocaleLoader] = {}


def register_loader(format_name: str, loader: LocaleLoader) -> None:
    """Register *loader* under *format_name*, replacing any previous one."""
    if not isinstance(loader, LocaleLoader):
        raise TypeError(f"{type(loader).__name__} does not implement LocaleLoader")
    _loaders[format_name] = loader
    logger.debug("loader_registered", format=format_name, loader=type(loader).__name__)


def unregister_loader(format_name: str) -> None:
    """Remove the loader registered under *format_name*, if any."""
    _loaders.pop(format_name, None)


def get_loader(format_name: str) -> LocaleLoader | None:
    """Return the loader for *format_name*, or ``None`` when none is registered."""
    return _loaders.get(format_name)


def registered_formats() -> list[str]:
    """Return the registered format names, sorted."""
    return sorted(_loaders)


def _register_builtin_loaders() -> None:
    yaml_loader = YamlLocaleLoader()
    _loaders["yaml"] = yaml_loader
    _loaders["yml"] = yaml_loader
    _loaders["json"] = JsonLocaleLoader()
    _loaders["toml"] = TomlLocaleLoader()


_register_builtin_loaders()
