"""Main Typer application: imports and registers all CLI commands.

Entry point: ``dagscope`` (configured via pyproject.toml project.scripts).
"""

from __future__ import annotations

import typer

from dagscope.cli.commands.append import append_cmd
from dagscope.cli.commands.demo import demo_cmd
from dagscope.cli.commands.show import show_cmd
from dagscope.cli.commands.watch import watch_cmd
from dagscope.config import config
from dagscope.logging_config import setup_logging

app = typer.Typer(
    name="dagscope",
    help="dagscope: live view of a causal event DAG.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="show", help="Render the event DAG once.")(show_cmd)
app.command(name="watch", help="Watch the event DAG live.")(watch_cmd)
app.command(name="append", help="Append an event to the log.")(append_cmd)
app.command(name="demo", help="Replay a synthetic session into a live view.")(demo_cmd)


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        config.log_level,
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR).",
    ),
) -> None:
    """Configure logging before any command runs."""
    setup_logging("DEBUG" if config.debug else log_level)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
