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
"""'pymessage resolve' and 'pymessage chain' — look up messages from the shell."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import click
from rich.table import Table

from pymessage.cli.console import console
from pymessage.core.config import Config
from pymessage.i18n.configuration import configure_message_resolver
from pymessage.i18n.resolver import MessageResolver
from pymessage.kernel.exceptions import ConfigurationException
from pymessage.logging.structlog_adapter import StructlogAdapter


def _catalog_options(func: Callable[..., Any]) -> Callable[..., Any]:
    options = [
        click.option("--locale", "-l", default=None, help="Locale such as en_US; defaults to the root catalog."),
        click.option("--directory", "-d", type=click.Path(file_okay=False, path_type=Path), default=None,
                     help="Directory holding the catalog files."),
        click.option("--basename", "-b", default=None, help="Catalog base name, e.g. messages."),
        click.option("--suffix", "-s", default=None, help="Catalog file extension, e.g. .properties."),
        click.option("--encoding", "-e", default=None, help="Catalog file encoding."),
        click.option("--format", "-f", "message_format", default=None, help="Argument style: string or message."),
        click.option("--config", "-c", "config_file", type=click.Path(dir_okay=False, exists=True, path_type=Path),
                     default=None, help="YAML or TOML configuration file."),
        click.option("--profile", "-p", "profiles", multiple=True,
                     help="Configuration profile to overlay; repeatable. Defaults to pymessage.profiles.active."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _build_resolver(
    config_file: Path | None,
    directory: Path | None,
    basename: str | None,
    suffix: str | None,
    encoding: str | None,
    message_format: str | None,
    profiles: tuple[str, ...] = (),
) -> MessageResolver:
    config = _load_config(config_file, profiles)

    message: dict[str, Any] = {}
    if basename is not None:
        message["basename"] = basename
    if suffix is not None:
        message["suffix"] = suffix
    if encoding is not None:
        message["encoding"] = encoding
    if message_format is not None:
        message["format"] = message_format
    overrides: dict[str, Any] = {"message": message}
    if directory is not None:
        overrides["resource"] = {"directory": str(directory)}

    config = config.with_overrides({"pymessage": overrides})
    StructlogAdapter().configure(config)
    try:
        return configure_message_resolver(config)
    except ConfigurationException as exc:
        raise click.BadParameter(str(exc), param_hint="'--format'") from exc


def _load_config(config_file: Path | None, profiles: tuple[str, ...]) -> Config:
    """Load configuration, overlaying explicit or configured profiles."""
    config = Config.from_file(config_file) if config_file else Config.from_sources(Path.cwd())
    active = list(profiles) or config.active_profiles
    if not active:
        return config
    if config_file:
        return Config.from_file(config_file, active_profiles=active)
    return Config.from_sources(Path.cwd(), active_profiles=active)


@click.command()
@click.argument("key")
@click.argument("args", nargs=-1)
@_catalog_options
def resolve_command(
    key: str,
    args: tuple[str, ...],
    locale: str | None,
    directory: Path | None,
    basename: str | None,
    suffix: str | None,
    encoding: str | None,
    message_format: str | None,
    config_file: Path | None,
    profiles: tuple[str, ...],
) -> None:
    """Resolve KEY and print the formatted message."""
    resolver = _build_resolver(config_file, directory, basename, suffix, encoding, message_format, profiles)
    click.echo(resolver.message(key, *args, locale=locale))


@click.command()
@_catalog_options
def chain_command(
    locale: str | None,
    directory: Path | None,
    basename: str | None,
    suffix: str | None,
    encoding: str | None,
    message_format: str | None,
    config_file: Path | None,
    profiles: tuple[str, ...],
) -> None:
    """Show the catalog files searched for a locale, most specific first."""
    resolver = _build_resolver(config_file, directory, basename, suffix, encoding, message_format, profiles)
    if resolver.message_basename is None:
        console.print("[warning]No message basename configured; lookups return the key unchanged.[/warning]")
        return

    table = Table(title=f"Catalog chain for [info]{locale or '(root)'}[/info]", border_style="dim")
    table.add_column("#", style="dim")
    table.add_column("Catalog", style="info", no_wrap=True)
    table.add_column("Status")

    engine = resolver.engine
    for position, path in enumerate(resolver.locale_chain(locale), start=1):
        found = engine is not None and engine.has_resource(path)
        status = "[success]found[/success]" if found else "[dim]missing[/dim]"
        table.add_row(str(position), path, status)

    console.print(table)
