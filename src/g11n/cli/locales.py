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
"""'g11n locales' — list the locales configured in a config file."""

from __future__ import annotations

import click
from rich.table import Table

from g11n.cli.console import console
from g11n.core.config import Config
from g11n.kernel.exceptions import G11nException
from g11n.messages.factory import MessageFactory


@click.command()
@click.argument("config_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--profile", "profiles", multiple=True, help="Active config profile (repeatable).")
def locales_command(config_path: str, profiles: tuple[str, ...]) -> None:
    """List the locales configured in CONFIG_PATH."""
    config = Config.from_file(config_path, active_profiles=list(profiles))

    try:
        factory = MessageFactory.from_config(config)
    except (G11nException, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc

    table = Table(title="Locales", border_style="dim")
    table.add_column("Locale", style="info")
    table.add_column("Format")
    table.add_column("Path")

    for tag in sorted(factory.locales(), key=str):
        info = factory.locale_info(tag)
        marker = " [success](active)[/success]" if tag == factory.active_locale else ""
        table.add_row(f"{tag}{marker}", info.format, info.path)

    console.print(table)
