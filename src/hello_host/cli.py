# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""
Main CLI entry point for hello-host.

Parses args, loads config, builds a runtime and runs the script.
"""

import logging
from pathlib import Path
from typing import List, Optional

import typer

from hello_host import __version__
from hello_host.config import ConfigError, load_config
from hello_host.event_client import EventClient
from hello_host.greeting import format_greeting
from hello_host.host import Runtime

EXAMPLE_SCRIPT = Path(__file__).parent / "example" / "main.py"

app = typer.Typer(
    name="hello-host",
    help="Run Python scripts against a small std/os host surface",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Run Python scripts against a small std/os host surface."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def run(
    script: Optional[Path] = typer.Argument(None, help="Script to run (default: bundled example)"),
    args: Optional[List[str]] = typer.Argument(None, help="Arguments exposed as scriptArgs"),
    include: Optional[List[Path]] = typer.Option(
        None, "--include", "-I", help="Script to evaluate before the main one (repeatable)"
    ),
    dump_memory: bool = typer.Option(False, "--dump-memory", help="Print memory usage after the run"),
    trace_memory: bool = typer.Option(False, "--trace-memory", help="Also list top allocation sites"),
    config_path: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config file"),
):
    """Run a script, then drain its deferred callbacks."""
    try:
        config = load_config(config_path)
    except (FileNotFoundError, ConfigError) as e:
        typer.echo(f"Config error: {e}", err=True)
        raise typer.Exit(1)

    # --verbose wins over the configured level
    if logging.getLogger().level != logging.DEBUG:
        try:
            logging.getLogger("hello_host").setLevel(str(config["log_level"]).upper())
        except ValueError as e:
            typer.echo(f"Config error: {e}", err=True)
            raise typer.Exit(1)

    script_path = (script or EXAMPLE_SCRIPT).expanduser().resolve()
    if not script_path.is_file():
        typer.echo(f"Error: script not found: {script_path}", err=True)
        raise typer.Exit(1)

    includes = [Path(p).expanduser().resolve() for p in config.get("include") or []]
    includes.extend(p.expanduser().resolve() for p in include or [])

    event_client = None
    if config.get("events_log"):
        event_client = EventClient(Path(config["events_log"]))

    runtime = Runtime(base_dir=script_path.parent, event_client=event_client)
    exit_code = runtime.execute(
        script_path,
        includes=includes,
        args=args or [],
        dump_memory=dump_memory or bool(config.get("dump_memory")),
        trace_memory=trace_memory or bool(config.get("trace_memory")),
    )
    raise typer.Exit(exit_code)


@app.command()
def greet(
    name: Optional[str] = typer.Argument(None, help="Name to greet"),
):
    """Print the greeting the example script prints."""
    typer.echo(format_greeting(name))


@app.command()
def namespaces(
    namespace: Optional[str] = typer.Argument(None, help="std or os (default: both)"),
):
    """List the members of the host namespaces."""
    runtime = Runtime()
    available = {"std": runtime.std, "os": runtime.os}

    if namespace is None:
        for ns_name, ns in available.items():
            typer.echo(f"{ns_name}:")
            for key in ns.keys():
                typer.echo(f"  {key}")
        return

    if namespace not in available:
        typer.echo(f"Error: unknown namespace '{namespace}' (expected: std, os)", err=True)
        raise typer.Exit(1)

    for key in available[namespace].keys():
        typer.echo(key)


@app.command()
def version():
    """Show version information."""
    typer.echo(f"hello-host version {__version__}")


from hello_host.commands import config as config_command

app.add_typer(config_command.app, name="config")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
