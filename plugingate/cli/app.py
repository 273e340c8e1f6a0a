"""Main Typer application.

Entry point: ``plugingate`` (configured via pyproject.toml scripts).

Commands: check, config.
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from plugingate.config import GateConfig
from plugingate.inventory import load_inventory
from plugingate.signature.tree import validate_tree
from plugingate.signature.validator import SignatureValidator

app = typer.Typer(
    name="plugingate",
    help="plugingate: decide which discovered plugins are trusted to load.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

console = Console()


def _build_config(
    environment: str | None = None, allow_unsigned: list[str] | None = None
) -> GateConfig:
    """Read the configuration, applying command-line overrides.

    ``--allow-unsigned`` IDs are added to the configured allow-list.
    Exits with code 2 if the configuration is invalid.
    """
    overrides: dict[str, object] = {}
    if environment:
        overrides["environment"] = environment
    try:
        config = GateConfig(**overrides)
    except ValidationError as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(code=2)

    if allow_unsigned:
        merged = dict.fromkeys(config.plugins_allow_unsigned + tuple(allow_unsigned))
        config = config.model_copy(update={"plugins_allow_unsigned": tuple(merged)})
    return config


def _setup_logging(config: GateConfig) -> None:
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command(name="check", help="Validate the signatures in a plugin inventory.")
def check_cmd(
    inventory: Path = typer.Argument(..., help="Path to the plugin inventory JSON."),
    environment: str = typer.Option(
        None, "--environment", "-e", help="Override the environment mode."
    ),
    allow_unsigned: list[str] = typer.Option(
        None, "--allow-unsigned", "-a",
        help="Plugin ID allowed to run unsigned, added to the configured allow-list (repeatable).",
    ),
) -> None:
    """Print the gate's decision for every plugin; exit 1 if any is rejected."""
    config = _build_config(environment, allow_unsigned)
    _setup_logging(config)

    try:
        roots = load_inventory(inventory)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Cannot read inventory:[/red] {escape(str(e))}")
        raise typer.Exit(code=2)

    report = validate_tree(SignatureValidator(config), roots)

    if not report.decisions:
        console.print("[dim]No plugins in inventory.[/dim]")
        return

    table = Table(title=f"Plugin Signatures ({config.environment})")
    table.add_column("Plugin", style="cyan")
    table.add_column("Parent", style="dim")
    table.add_column("Class")
    table.add_column("Signature")
    table.add_column("Decision", justify="center")
    table.add_column("Reason")

    for d in report.decisions:
        decision = "[green]ALLOW[/green]" if d.allowed else "[red]REJECT[/red]"
        table.add_row(
            d.plugin_id, d.parent_id or "", d.plugin_class,
            d.signature or "<none>", decision, d.message,
        )
    console.print(table)

    if report.ok:
        console.print(f"[bold green]All {len(report.decisions)} plugin(s) allowed.[/bold green]")
        return

    console.print(
        f"[bold red]{len(report.rejected)} of {len(report.decisions)} plugin(s) rejected.[/bold red]"
    )
    raise typer.Exit(code=1)


@app.command(name="config", help="Show the effective signature policy.")
def config_cmd() -> None:
    """Print the configuration read from PLUGINGATE_* variables and .env."""
    config = _build_config()

    table = Table(show_header=True, header_style="bold cyan", expand=True)
    table.add_column("Setting", min_width=24)
    table.add_column("Value")
    table.add_row("environment", config.environment)
    table.add_row(
        "plugins_allow_unsigned",
        ", ".join(config.plugins_allow_unsigned) or "[dim](none)[/dim]",
    )
    table.add_row("log_level", config.log_level)

    if config.is_development:
        subtitle = "[bold yellow]Development mode: all unsigned plugins are allowed.[/bold yellow]"
        border_style = "yellow"
    else:
        subtitle = "[green]Unsigned plugins need an allow-list entry.[/green]"
        border_style = "green"

    console.print(
        Panel(
            table,
            title="[bold]Signature Policy[/bold]",
            subtitle=subtitle,
            border_style=border_style,
        )
    )


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
