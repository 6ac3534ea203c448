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
"""'g11n info' — Display version and registered locale formats."""

from __future__ import annotations

import platform
import sys

import click
from rich.table import Table

from g11n import __version__
from g11n.cli.console import console
from g11n.locale.loaders import get_loader, registered_formats


@click.command()
def info_command() -> None:
    """Display g11n version and the registered locale loaders."""
    console.print(f"\n[g11n]g11n[/g11n] [dim]v{__version__}[/dim]\n")

    env_table = Table(title="Environment", show_header=False, border_style="dim")
    env_table.add_column("Key", style="info")
    env_table.add_column("Value")
    env_table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    env_table.add_row("Platform", platform.platform())
    console.print(env_table)

    loaders_table = Table(title="\nLocale Formats", border_style="dim")
    loaders_table.add_column("Format", style="info")
    loaders_table.add_column("Loader")

    for format_name in registered_formats():
        loaders_table.add_row(format_name, type(get_loader(format_name)).__name__)

    console.print(loaders_table)
    console.print()
