"""CLI entry point for docparity."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from docparity.compare import ComparisonResult, create_comparator
from docparity.config import ParityConfig, load_config
from docparity.config.loader import DEFAULT_CONFIG_TEMPLATE
from docparity.errors import ParityError
from docparity.harness import RoundTripStressHarness, create_harness

app = typer.Typer(
    name="docparity",
    help="Verify that document packages survive round-trips unchanged.",
)

config_app = typer.Typer(help="Manage docparity configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: ParityConfig | None = None

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def _configure_logging(cfg: ParityConfig) -> None:
    if cfg.log_format == "json":
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(_JsonFormatter())
    else:
        handler = RichHandler(console=Console(stderr=True), show_path=False, markup=False)
    root = logging.getLogger("docparity")
    root.handlers[:] = [handler]
    root.setLevel(_LOG_LEVELS[cfg.log_level])
    root.propagate = False


def _get_config() -> ParityConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to docparity.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    _configure_logging(_config)


def _display_result(result: ComparisonResult) -> None:
    table = Table(title="Archive Comparison")
    table.add_column("Entry", style="cyan")
    table.add_column("Path")
    table.add_column("Change", justify="center")

    for name in result.added_entries:
        table.add_row(escape(name), "-", "[green]added entry[/green]")
    for name in result.removed_entries:
        table.add_row(escape(name), "-", "[red]removed entry[/red]")
    for name in result.unresolved_entries:
        table.add_row(escape(name), "-", "[magenta]unresolved[/magenta]")
    for record in result.records:
        style = {"added": "green", "removed": "red"}.get(record.kind.value, "yellow")
        table.add_row(escape(record.entry), escape(record.path), f"[{style}]{record.kind.value}[/{style}]")
    rprint(table)

    if result.fault is not None:
        rprint(f"[red bold]Fatal:[/red bold] {escape(result.fault.message)}")


@app.command()
def compare(
    first: Annotated[Path, typer.Argument(help="Reference archive")],
    second: Annotated[Path, typer.Argument(help="Candidate archive")],
    strategy: Annotated[
        str | None, typer.Option("--strategy", help="Hash strategy: raw | normalized")
    ] = None,
    dump_dir: Annotated[
        Path | None, typer.Option("--dump-dir", help="Write mismatched entry pairs here")
    ] = None,
    ci: Annotated[bool, typer.Option("--ci", help="Machine-readable output")] = False,
) -> None:
    """Compare two archives entry by entry."""
    cfg = _get_config()
    if strategy is not None:
        cfg = cfg.model_copy(
            update={"hashing": cfg.hashing.model_copy(update={"strategy": strategy})}
        )
    if dump_dir is not None:
        cfg = cfg.model_copy(
            update={"compare": cfg.compare.model_copy(update={"dump_dir": str(dump_dir)})}
        )

    try:
        result = create_comparator(cfg).compare_paths(first, second)
    except (ValueError, ParityError, OSError) as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if ci:
        for line in result.diagnostics:
            typer.echo(line)
        typer.echo("IDENTICAL" if result.identical else "DIFFERENT")
    elif result.identical:
        rprint("[green]Archives are identical.[/green]")
    else:
        _display_result(result)

    if not result.identical:
        raise typer.Exit(code=1)


def _report(name: str, ok: bool) -> None:
    if ok:
        rprint(f"[green]PASS[/green] {name}")
    else:
        rprint(f"[red]FAIL[/red] {name}")
        raise typer.Exit(code=1)


def _harness() -> RoundTripStressHarness:
    return create_harness(_get_config())


@app.command()
def stress(
    path: Annotated[Path, typer.Argument(help="Package archive to stress")],
) -> None:
    """Run the full round-trip pipeline on one archive."""
    _report(f"stress {path}", _harness().stress_test(path))


@app.command()
def clone(
    path: Annotated[Path, typer.Argument(help="Package archive")],
) -> None:
    """Check that an in-memory clone is identical to its source."""
    _report(f"clone {path}", _harness().test_clone(path))


@app.command(name="diff-stress")
def diff_stress(
    path: Annotated[Path, typer.Argument(help="Package archive")],
) -> None:
    """Check that a document has no deltas against itself."""
    _report(f"diff-stress {path}", _harness().diff_stress_test(path))


@app.command(name="merge-stress")
def merge_stress(
    first: Annotated[Path, typer.Argument(help="First package archive")],
    second: Annotated[Path, typer.Argument(help="Second package archive")],
) -> None:
    """Check that merging against an unchanged side is a no-op."""
    _report(f"merge-stress {first} {second}", _harness().merge_stress_test(first, second))


@config_app.command("show")
def config_show() -> None:
    """Show the effective configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False, sort_keys=False), "yaml"))


@config_app.command("init")
def config_init(
    force: Annotated[bool, typer.Option("--force", help="Overwrite existing file")] = False,
) -> None:
    """Write a default docparity.yaml to the current directory."""
    dest = Path("docparity.yaml")
    if dest.exists() and not force:
        rprint(f"[yellow]{dest} already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    dest.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {dest}")


if __name__ == "__main__":
    app()
