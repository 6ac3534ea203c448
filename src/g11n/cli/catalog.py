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
"""'g11n keys' and 'g11n check' — default catalogs and locale file checks."""

from __future__ import annotations

import importlib
import json
from pathlib import Path

import click
import yaml  # type: ignore[import-untyped]
from rich.table import Table

from g11n.cli.console import console
from g11n.kernel.exceptions import G11nException
from g11n.locale.loaders import get_loader
from g11n.messages.declaration import RecordDescriptor, describe

_SUFFIX_FORMATS = {".yaml": "yaml", ".yml": "yaml", ".json": "json", ".toml": "toml"}


def load_record(target: str) -> RecordDescriptor:
    """Import ``module:Class`` and return the descriptor of the record class."""
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise click.BadParameter(f"expected MODULE:CLASS, got '{target}'")

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise click.BadParameter(f"cannot import module '{module_name}': {exc}") from exc

    record_type: object = module
    for part in attr.split("."):
        record_type = getattr(record_type, part, None)
        if record_type is None:
            raise click.BadParameter(f"module '{module_name}' has no attribute '{attr}'")

    if not isinstance(record_type, type):
        raise click.BadParameter(f"'{target}' is not a class")

    try:
        return describe(record_type)
    except G11nException as exc:
        raise click.ClickException(str(exc)) from exc


@click.command()
@click.argument("record")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["yaml", "json"]),
    default="yaml",
    show_default=True,
    help="Output format of the catalog.",
)
def keys_command(record: str, output_format: str) -> None:
    """Print the default catalog of RECORD (MODULE:CLASS) for translators."""
    catalog = load_record(record).catalog()

    if output_format == "json":
        click.echo(json.dumps(catalog, indent=2, ensure_ascii=False))
    else:
        click.echo(yaml.safe_dump(catalog, allow_unicode=True, sort_keys=False), nl=False)


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--format", "format_name", default=None, help="Loader format (inferred from the file suffix).")
@click.option("--record", default=None, help="MODULE:CLASS whose keys the file must translate.")
def check_command(path: str, format_name: str | None, record: str | None) -> None:
    """Load a locale file and report missing and unknown message keys."""
    format_name = format_name or _SUFFIX_FORMATS.get(Path(path).suffix.lower())
    if format_name is None:
        raise click.UsageError(f"cannot infer the format of '{path}'; pass --format")

    loader = get_loader(format_name)
    if loader is None:
        raise click.UsageError(f"unknown locale format '{format_name}'")

    try:
        dictionary = loader.load(path)
    except G11nException as exc:
        raise click.ClickException(str(exc)) from exc

    console.print(f"[info]{path}[/info]: {len(dictionary)} message(s)")
    if record is None:
        return

    catalog = load_record(record).catalog()
    missing = [key for key in catalog if key not in dictionary]
    unknown = sorted(key for key in dictionary if key not in catalog)

    if missing or unknown:
        table = Table(border_style="dim")
        table.add_column("Key", style="info")
        table.add_column("Problem")
        for key in missing:
            table.add_row(key, "[error]missing[/error]")
        for key in unknown:
            table.add_row(key, "[warning]unknown[/warning]")
        console.print(table)

    if missing:
        console.print(f"[error]{len(missing)} missing translation(s)[/error]")
        raise SystemExit(1)

    console.print("[success]All messages translated[/success]")
