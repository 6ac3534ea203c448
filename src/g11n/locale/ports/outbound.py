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
"""LocaleLoader protocol — port for reading locale files into dictionaries."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class LocaleLoader(Protocol):
    """Turns a locale source file into a flat message dictionary.

    All locale file formats (YAML, JSON, TOML, ...) must implement this
    protocol and be registered under a format name with
    :func:`g11n.locale.register_loader`.
    """

    def load(self, path: str) -> dict[str, str]:
        """Read *path* and return a mapping of message key to pattern.

        Raises :class:`~g11n.kernel.exceptions.LocaleLoadException` when
        the file cannot be read or parsed.
        """
        ...
