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
"""g11n CLI — inspect message records and locale files."""

from __future__ import annotations

import click

from g11n.core.config import Config
from g11n.logging.structlog_adapter import StructlogAdapter


@click.group()
@click.version_option(package_name="g11n")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """g11n — localizable message records."""
    level = "DEBUG" if verbose else "WARNING"
    StructlogAdapter().configure(Config({"g11n": {"logging": {"level": {"root": level}}}}))


from g11n.cli.catalog import check_command, keys_command
from g11n.cli.info import info_command
from g11n.cli.locales import locales_command

cli.add_command(info_command, name="info")
cli.add_command(keys_command, name="keys")
cli.add_command(check_command, name="check")
cli.add_command(locales_command, name="locales")
