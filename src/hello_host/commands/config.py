# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""
Config command for hello-host.

Provides basic configuration validation.
"""

import typer

from hello_host.config import ConfigError, load_config, resolve_config_path

app = typer.Typer(help="Manage and validate configuration")


@app.command()
def validate(
    config_path: str = typer.Option(None, "--config", "-c", help="Path to config file"),
):
    """
    Validate configuration file.

    Checks that the config file is valid YAML with the expected shape.
    """
    typer.echo(f"Validating {resolve_config_path(config_path)}...")
    typer.echo()

    try:
        config = load_config(config_path)
    except FileNotFoundError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except ConfigError as e:
        typer.echo(f"Validation failed: {e}", err=True)
        raise typer.Exit(1)

    typer.echo("Configuration structure is valid")
    typer.echo()
    typer.echo(f"Log level: {config['log_level']}")
    if config["events_log"]:
        typer.echo(f"Events log: {config['events_log']}")
    for include in config["include"]:
        typer.echo(f"Include: {include}")
    typer.echo()
    typer.echo("Configuration validation complete!")
