"""toolbridge CLI entrypoint."""

from __future__ import annotations

import click

from toolbridge import __version__


@click.group()
@click.version_option(version=__version__, prog_name="toolbridge")
def main() -> None:
    """toolbridge — expose Python modules and scripts as MCP tools."""


# Register subcommands
from toolbridge.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
