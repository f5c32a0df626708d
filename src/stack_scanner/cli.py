"""Command-line interface: ``stack-scanner ROOT [options]``."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from .config import OutputFormat, ScanConfig
from .engine import run_scan
from .errors import ScannerError
from .log import configure_logging
from .registry import PatternRegistry
from .report import render, render_json

app = typer.Typer(
    name="stack-scanner",
    help="Scan a project for leaked secrets and stack misconfigurations",
    add_completion=False,
)
err_console = Console(stderr=True)


def _split_profiles(value: Optional[str]) -> Optional[tuple[str, ...]]:
    if value is None:
        return None
    return tuple(p.strip() for p in value.split(",") if p.strip())


@app.command()
def main(
    root: Path = typer.Argument(..., help="Project directory to scan"),
    profiles: Optional[str] = typer.Option(
        None,
        "--profiles",
        help="Comma-separated profiles to use instead of auto-detection (e.g. nextjs,docker)",
    ),
    exclude: Optional[list[str]] = typer.Option(
        None, "--exclude", "-e", help="Glob to exclude; may be repeated"
    ),
    max_file_size: Optional[int] = typer.Option(
        None, "--max-file-size", help="Skip files larger than this many bytes"
    ),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", help="Worker threads"),
    output_format: OutputFormat = typer.Option(OutputFormat.text, "--format", "-f", help="Report format"),
    rules: Optional[Path] = typer.Option(None, "--rules", help="Extra JSON rule catalog"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the report to a file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress to stderr"),
) -> None:
    """Scan ROOT. Exits 1 when issues are found, 2 on bad input or configuration."""
    configure_logging(verbose)

    try:
        config = ScanConfig.from_env(
            max_file_size=max_file_size,
            workers=workers,
            exclude=tuple(exclude) if exclude else None,
            profiles=_split_profiles(profiles),
            output_format=output_format,
        )
        registry = PatternRegistry.from_catalog()
        if rules is not None:
            registry = registry.load_file(rules)
        report = run_scan(root, config, registry)
    except ScannerError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(e.exit_code)

    text = render_json(report) if config.output_format == OutputFormat.json else render(report)
    if output is not None:
        try:
            output.write_text(text if text.endswith("\n") else text + "\n", encoding="utf-8")
        except OSError as e:
            err_console.print(f"[red]Error:[/red] cannot write report: {escape(str(e))}")
            raise typer.Exit(2)
        err_console.print(f"[green]Report written to {escape(str(output))}[/green]")
    else:
        typer.echo(text, nl=not text.endswith("\n"))

    raise typer.Exit(report.exit_code)


if __name__ == "__main__":
    app()
