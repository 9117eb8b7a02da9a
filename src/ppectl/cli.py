"""Root CLI group for ppectl with global flags and command registration."""

from __future__ import annotations

import click

from ppectl import __version__
from ppectl.commands import register_commands
from ppectl.commands._base import PpeGroup
from ppectl.commands._context import AppContext
from ppectl.config.settings import PpeSettings


@click.group(
    cls=PpeGroup,
    invoke_without_command=True,
    examples="""\
  ppectl
  ppectl --json
  ppectl -v --log-json menu
  PPECTL_REFERENCES__ON_DELETE=orphan ppectl""",
)
@click.version_option(version=__version__, prog_name="ppectl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """ppectl — PPE inventory, loans, and returns.

    Without a subcommand, starts the interactive menu.
    """
    ctx.ensure_object(dict)
    settings = PpeSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        from ppectl.commands.menu import menu

        ctx.invoke(menu)


register_commands(cli)
