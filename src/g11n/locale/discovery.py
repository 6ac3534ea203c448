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
"""Locale discovery — find locale files in a directory by naming convention."""

from __future__ import annotations

from pathlib import Path

_EXTENSIONS: dict[str, tuple[str, ...]] = {
    "yaml": (".yaml", ".yml"),
    "yml": (".yml", ".yaml"),
    "json": (".json",),
    "toml": (".toml",),
}

_PREFIX = "messages_"


def discover_locales(directory: str | Path, format_name: str = "yaml") -> dict[str, str]:
    """Return ``{tag: path}`` for every locale file of *format_name* in *directory*.

    Both ``fr.yaml`` and ``messages_fr.yaml`` register the tag ``fr``.
    When both exist for one tag the prefixed name wins. Unknown formats
    match files whose extension equals the format name.
    """
    base = Path(directory)
    if not base.is_dir():
        return {}

    extensions = _EXTENSIONS.get(format_name, (f".{format_name}",))
    found: dict[str, str] = {}

    for path in sorted(base.iterdir()):
        if not path.is_file() or path.suffix not in extensions:
            continue
        stem = path.stem
        if stem.startswith(_PREFIX):
            found[stem.removeprefix(_PREFIX)] = str(path)
        elif stem and stem not in found:
            found[stem] = str(path)

    return found
