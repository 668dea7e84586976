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
"""PyMessage CLI — message lookup and catalog diagnostics."""

from __future__ import annotations

import click

from pymessage.cli.console import print_banner


class PyMessageCLI(click.Group):
    """Custom Click group that shows the PyMessage banner on help."""

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        print_banner()
        super().format_help(ctx, formatter)


@click.group(cls=PyMessageCLI)
@click.version_option(package_name="pymessage")
def cli() -> None:
    """PyMessage — localized message resolution CLI."""


from pymessage.cli.resolve import chain_command, resolve_command  # noqa: E402

cli.add_command(resolve_command, name="resolve")
cli.add_command(chain_command, name="chain")
