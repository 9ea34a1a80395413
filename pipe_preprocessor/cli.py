"""CLI entry point for the pipe preprocessor."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax
from rich.table import Table

from pipe_preprocessor.config import PipesConfig, load_config
from pipe_preprocessor.config.loader import DEFAULT_CONFIG_TEMPLATE
from pipe_preprocessor.models import PreprocessResult, ProcessError, RewriteOptions
from pipe_preprocessor.preprocessor import PipePreprocessor, create_pipe_preprocessor

app = typer.Typer(
    name="pipes",
    help="Rewrite {value | pipe:args} template syntax into plain function calls.",
)

config_app = typer.Typer(help="Manage pipes configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: PipesConfig | None = None

_LOG_LEVELS = {"debug": logging.DEBUG, "info": logging.INFO, "warn": logging.WARNING, "error": logging.ERROR}


def _get_config() -> PipesConfig:
    if _config is None:
        return load_config()
    return _config


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=_LOG_LEVELS[level],
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to pipes.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    _setup_logging(_config.log_level)


def _build_options(cfg: PipesConfig, prefix: str | None, debug: bool) -> RewriteOptions:
    """CLI flags win over the config file."""
    overrides: dict = {}
    if prefix is not None:
        overrides["name_prefix"] = prefix
    if debug:
        overrides["debug"] = True
    if not overrides:
        return cfg.rewrite
    return RewriteOptions.model_validate({**cfg.rewrite.model_dump(), **overrides})


def _display_rewrites(result: PreprocessResult) -> None:
    table = Table(title=f"Rewritten blocks ({len(result.rewrites)})")
    table.add_column("File", style="dim")
    table.add_column("Original", style="cyan")
    table.add_column("Rewritten", style="green")
    for rec in result.rewrites:
        table.add_row(rec.filename, rec.original, rec.rewritten)
    rprint(table)


def _display_usage(totals: dict[str, int], used_in: dict[str, set[str]]) -> None:
    table = Table(title=f"Pipes ({len(totals)})")
    table.add_column("Pipe", style="cyan")
    table.add_column("Uses", justify="right")
    table.add_column("Files", justify="right")
    for name, count in sorted(totals.items(), key=lambda x: (-x[1], x[0])):
        table.add_row(name, str(count), str(len(used_in[name])))
    rprint(table)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def transform(
    path: Annotated[Path, typer.Argument(help="Template file or directory")],
    out: Annotated[
        Path | None, typer.Option("--out", "-o", help="Output file, or output directory for a tree")
    ] = None,
    prefix: Annotated[
        str | None, typer.Option("--prefix", "-p", help="Prefix for generated call names")
    ] = None,
    debug: Annotated[bool, typer.Option("--debug", help="Show every rewritten block")] = False,
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Report without writing files")] = False,
    glob: Annotated[
        str | None, typer.Option("--glob", "-g", help="File pattern when PATH is a directory")
    ] = None,
) -> None:
    """Rewrite pipe blocks in a file (to stdout or --out) or a directory tree."""
    cfg = _get_config()
    if not path.exists():
        rprint(f"[red]Error:[/red] path not found: {path}")
        raise typer.Exit(1)

    preprocessor = PipePreprocessor(_build_options(cfg, prefix, debug))

    if path.is_file():
        result = preprocessor.process_file(path, out, encoding=cfg.files.encoding, dry_run=dry_run)
        if out is None:
            typer.echo(result.code, nl=False)
            return
        if result.skipped:
            rprint(f"[yellow]Excluded[/yellow] {path}")
        elif dry_run:
            rprint(f"[dim]Would write[/dim] {out} ({result.rewritten} blocks)")
        else:
            rprint(f"[green]Wrote[/green] {out} ({result.rewritten} blocks)")
        if debug:
            _display_rewrites(result)
        return

    if out is None and not dry_run:
        rprint("[red]Error:[/red] --out is required when PATH is a directory")
        raise typer.Exit(1)

    report = preprocessor.process_tree(
        path,
        out or path,
        glob=glob or cfg.files.glob,
        encoding=cfg.files.encoding,
        dry_run=dry_run,
    )

    verb = "Would process" if dry_run else "Processed"
    rprint(
        f"[green]{verb}[/green] {report.processed} files, "
        f"{report.blocks} blocks rewritten, "
        f"{report.unchanged} unchanged, {report.excluded} excluded "
        f"in {report.duration:.2f}s"
    )
    for err in report.errors:
        rprint(f"  [red]Error[/red] {err.file}: {err.error}")
    if report.errors:
        raise typer.Exit(1)


@app.command()
def scan(
    path: Annotated[Path, typer.Argument(help="Template file or directory")],
    glob: Annotated[
        str | None, typer.Option("--glob", "-g", help="File pattern when PATH is a directory")
    ] = None,
) -> None:
    """List the pipe names used by templates."""
    cfg = _get_config()
    if not path.exists():
        rprint(f"[red]Error:[/red] path not found: {path}")
        raise typer.Exit(1)

    preprocessor = create_pipe_preprocessor(cfg.rewrite)
    files = [path] if path.is_file() else sorted(p for p in path.rglob(glob or cfg.files.glob) if p.is_file())

    totals: dict[str, int] = {}
    used_in: dict[str, set[str]] = {}
    errors: list[ProcessError] = []
    for file in files:
        if preprocessor.is_excluded(str(file)):
            continue
        try:
            content = file.read_text(encoding=cfg.files.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            errors.append(ProcessError(file=str(file), error=str(exc)))
            continue
        usage = preprocessor.scan_usage(content, str(file))
        for name, count in usage.pipes.items():
            totals[name] = totals.get(name, 0) + count
            used_in.setdefault(name, set()).add(str(file))

    if totals:
        _display_usage(totals, used_in)
    else:
        rprint("[yellow]No pipe usage found.[/yellow]")

    for err in errors:
        rprint(f"  [red]Error[/red] {err.file}: {err.error}")
    if errors:
        raise typer.Exit(1)


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(mode="json"), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default pipes.yaml in current directory."""
    target = Path("pipes.yaml")
    if target.exists() and not force:
        rprint("[yellow]pipes.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
