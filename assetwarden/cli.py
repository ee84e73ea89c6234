"""CLI entry point for assetwarden."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, NoReturn

import typer
import yaml
from rich import print as rprint
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from assetwarden.config import WardenConfig, load_config
from assetwarden.config.loader import DEFAULT_CONFIG_TEMPLATE
from assetwarden.errors import AssetWardenError, InvalidVersionError
from assetwarden.fingerprint import FingerprintTree
from assetwarden.integrity import ClassificationReport, IntegrityResolver, Outcome
from assetwarden.log import configure_logging

app = typer.Typer(
    name="assetwarden",
    help="Decide whether deployed asset bundles can be upgraded safely.",
)

config_app = typer.Typer(help="Manage assetwarden configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: WardenConfig | None = None

_OUTCOME_STYLE = {
    Outcome.SYNCHRONIZED: "green",
    Outcome.SAFELY_UPGRADABLE: "yellow",
    Outcome.DIVERGED: "red",
}


def _get_config() -> WardenConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to assetwarden.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    configure_logging(_config.log_level, _config.log_format)


def _resolver() -> IntegrityResolver:
    return IntegrityResolver.from_config(_get_config())


def _default_assets(default: str | None) -> Path:
    """Resolve the default assets directory: --default > config."""
    path = default or _get_config().assets.default_assets
    if not path:
        rprint(
            "[red]Error:[/red] no default assets given. "
            "Pass --default or set assets.default_assets in assetwarden.yaml."
        )
        raise typer.Exit(1)
    return Path(path)


def _fail(e: Exception) -> NoReturn:
    rprint(f"[red]Error:[/red] {escape(str(e))}")
    raise typer.Exit(1)


@app.command()
def refresh(
    project: Annotated[str, typer.Argument(help="Path to the tool checkout")] = ".",
    assets: Annotated[
        str | None, typer.Option("--assets", help="Asset bundle directory to refresh directly")
    ] = None,
) -> None:
    """Regenerate the integrity record of the default assets before a release."""
    resolver = _resolver()
    typer.echo("Generating updated integrity hash ...")
    try:
        if assets:
            record = resolver.refresh(assets)
        else:
            record = resolver.refresh_project(project)
    except AssetWardenError as e:
        _fail(e)
    typer.echo(f"hash={record.hash}")
    typer.echo(f"semver={record.semver}")
    typer.echo("Done.")


def _display_report(report: ClassificationReport, default: Path, local: Path) -> None:
    style = _OUTCOME_STYLE[report.outcome]
    table = Table(title="Asset Integrity")
    table.add_column("", style="dim")
    table.add_column("Default", style="cyan")
    table.add_column("Local", style="cyan")
    table.add_row("Path", str(default), str(local))
    table.add_row("Version", report.reference_version, report.candidate_version)
    table.add_row(
        "Hash",
        report.recorded_hash or "-",
        report.candidate_hash or "[dim]not computed[/dim]",
    )
    rprint(table)
    rprint(Panel(f"[bold {style}]{report.outcome.value}[/bold {style}]", border_style=style))

    if report.outcome is Outcome.SAFELY_UPGRADABLE:
        rprint("[yellow]Local assets are unmodified and can be updated.[/yellow]")
    elif report.outcome is Outcome.DIVERGED:
        rprint("[red]Local assets have diverged; they will not be updated automatically.[/red]")


@app.command()
def check(
    local: Annotated[str, typer.Argument(help="Path to the local assets")] = ".",
    default: Annotated[
        str | None, typer.Option("--default", "-d", help="Path to the default assets")
    ] = None,
    ci: Annotated[bool, typer.Option("--ci", help="Machine-readable output")] = False,
    fail_on_diverged: Annotated[
        bool, typer.Option("--fail-on-diverged", help="Exit 1 if local assets diverged")
    ] = False,
) -> None:
    """Classify local assets against the default assets."""
    default_path = _default_assets(default)
    local_path = Path(local)
    try:
        report = _resolver().inspect(default_path, local_path)
    except (AssetWardenError, InvalidVersionError) as e:
        _fail(e)

    if ci:
        typer.echo(f"OUTCOME={report.outcome.value}")
        typer.echo(f"default_version={report.reference_version}")
        typer.echo(f"local_version={report.candidate_version}")
        if report.candidate_hash is not None:
            typer.echo(f"local_hash={report.candidate_hash}")
    else:
        _display_report(report, default_path, local_path)

    if fail_on_diverged and report.outcome is Outcome.DIVERGED:
        raise typer.Exit(code=1)


@app.command()
def version(
    local: Annotated[str, typer.Argument(help="Path to the local assets")] = ".",
    default: Annotated[
        str | None, typer.Option("--default", "-d", help="Path to the default assets")
    ] = None,
) -> None:
    """Compare local and default assets by version only."""
    oracle = _resolver().oracle
    oracle.default_assets = _default_assets(default)
    try:
        default_version = oracle.default_version()
        local_version = oracle.local_version(local)
        status = oracle.version_status(default_version, local_version, local)
    except (AssetWardenError, InvalidVersionError) as e:
        _fail(e)
    typer.echo(f"{status.value} (local {local_version}, default {default_version})")


@app.command()
def fingerprint(
    path: Annotated[str, typer.Argument(help="Asset tree to fingerprint")] = ".",
    files: Annotated[bool, typer.Option("--files", help="List the hashed files")] = False,
) -> None:
    """Print the content fingerprint of an asset tree."""
    resolver = _resolver()
    try:
        tree = FingerprintTree.build(Path(path), resolver.policy)
    except AssetWardenError as e:
        _fail(e)
    if files:
        for rel in tree.files:
            typer.echo(f"{tree.nodes[rel].hash[:12]}  {rel}")
    typer.echo(tree.root_hash)


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: Annotated[bool, typer.Option("--force", help="Overwrite existing file")] = False,
) -> None:
    """Write a default assetwarden.yaml in the current directory."""
    dest = Path("assetwarden.yaml")
    if dest.exists() and not force:
        rprint("[yellow]assetwarden.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    dest.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {dest}")


if __name__ == "__main__":
    app()
