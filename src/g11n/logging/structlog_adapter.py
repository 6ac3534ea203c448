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
"""StructlogAdapter — structlog configuration for g11n and host applications."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from g11n.config.properties.logging import LoggingProperties
from g11n.core.config import Config

_RENDERERS = {
    "console": lambda: structlog.dev.ConsoleRenderer(),
    "plain": lambda: structlog.dev.ConsoleRenderer(colors=False),
    "json": lambda: structlog.processors.JSONRenderer(),
}


class StructlogAdapter:
    """Default logging adapter backed by structlog.

    Log output goes to stderr so that command output on stdout (such as
    the catalogs printed by ``g11n keys``) stays machine-readable.
    Supported formats: ``console`` (colored), ``plain`` and ``json``.
    """

    def __init__(self) -> None:
        self._root_level: str = "INFO"
        self._format: str = "console"
        self._module_levels: dict[str, str] = {}

    def configure(self, config: Config) -> None:
        """Configure structlog from the g11n.logging section of config."""
        properties = config.bind(LoggingProperties)
        levels = {name: str(level).upper() for name, level in properties.level.items()}
        self._root_level = levels.pop("root", "INFO")
        self._module_levels = levels
        self._format = str(properties.format).lower()

        structlog.configure(
            processors=[*self._shared_processors(), self._renderer()],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(
            format="%(message)s",
            stream=sys.stderr,
            level=getattr(logging, self._root_level, logging.INFO),
            force=True,
        )

        for name, level in self._module_levels.items():
            self.set_level(name, level)

    def get_logger(self, name: str) -> Any:
        """Get a structlog BoundLogger by name."""
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        """Set the log level for a specific stdlib logger."""
        logging.getLogger(name).setLevel(getattr(logging, level.upper(), logging.INFO))

    @staticmethod
    def _shared_processors() -> list[structlog.types.Processor]:
        return [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
        ]

    def _renderer(self) -> structlog.types.Processor:
        factory = _RENDERERS.get(self._format, _RENDERERS["console"])
        return factory()
