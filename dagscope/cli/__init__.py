"""dagscope CLI: Typer-based command-line interface.

Provides the ``dagscope`` command with subcommands for rendering the
event DAG once, watching it live, appending events, and running a demo.

All output uses Rich for formatted terminal display.
"""
