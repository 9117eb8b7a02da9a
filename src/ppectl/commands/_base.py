"""Click command classes that accept an ``examples=`` text block.

Any command or group built with these classes gains an eager
``--examples`` flag that prints the block and exits before the command
body (or the root group's menu) runs.
"""

from __future__ import annotations

from typing import Any

import click


class _ExamplesMixin:
    """Store ``examples`` and register the ``--examples`` flag."""

    params: list[click.Parameter]

    def _init_examples(self, examples: str | None) -> None:
        self.examples = examples
        if examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._print_examples,
                    help="Show usage examples.",
                )
            )

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(self.examples)
        ctx.exit(0)


class PpeCommand(_ExamplesMixin, click.Command):
    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class PpeGroup(_ExamplesMixin, click.Group):
    """Group whose subcommands default to :class:`PpeCommand`."""

    command_class = PpeCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)
