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
"""Tests for discover_locales."""

from __future__ import annotations

from pathlib import Path

from g11n.locale.discovery import discover_locales


class TestDiscoverLocales:
    def test_plain_and_prefixed_names(self, tmp_path: Path):
        (tmp_path / "fr.yaml").write_text("{}")
        (tmp_path / "messages_de.yml").write_text("{}")
        found = discover_locales(tmp_path, "yaml")
        assert found == {"fr": str(tmp_path / "fr.yaml"), "de": str(tmp_path / "messages_de.yml")}

    def test_prefixed_name_wins(self, tmp_path: Path):
        (tmp_path / "fr.yaml").write_text("{}")
        (tmp_path / "messages_fr.yaml").write_text("{}")
        assert discover_locales(tmp_path, "yaml") == {"fr": str(tmp_path / "messages_fr.yaml")}

    def test_other_formats_ignored(self, tmp_path: Path):
        (tmp_path / "fr.yaml").write_text("{}")
        (tmp_path / "de.json").write_text("{}")
        (tmp_path / "notes.txt").write_text("")
        assert discover_locales(tmp_path, "json") == {"de": str(tmp_path / "de.json")}

    def test_custom_format_matches_extension(self, tmp_path: Path):
        (tmp_path / "it.po").write_text("")
        assert discover_locales(tmp_path, "po") == {"it": str(tmp_path / "it.po")}

    def test_directories_skipped(self, tmp_path: Path):
        (tmp_path / "pt.yaml").mkdir()
        assert discover_locales(tmp_path) == {}

    def test_missing_directory(self, tmp_path: Path):
        assert discover_locales(tmp_path / "nope") == {}
