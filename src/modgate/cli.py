"""Typer CLI entrypoint for the admission scanner."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional

import typer
from pydantic import ValidationError

from .config import load_yaml
from .container import create_container
from .logging import configure_logging
from .schemas.config import load_config

app = typer.Typer(help="Module admission scanner CLI.")


@app.callback()
def main_callback() -> None:
    """Decide which discovered Python modules may be loaded."""


@app.command()
def scan(
    path: List[Path] = typer.Option(
        ..., exists=True, file_okay=False, dir_okay=True, help="Directory holding candidate modules."
    ),
    output: Path = typer.Option(
        ...,
        exists=False,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
        help="Output JSON report path.",
    ),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    recursive: Optional[bool] = typer.Option(None, "--recursive/--no-recursive", help="Descend into sub-directories."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
    console_logs: bool = typer.Option(False, "--console-logs", help="Render logs for a terminal instead of JSON."),
) -> None:
    """Scan directories and report which modules would be admitted."""
    raw: dict[str, Any] = {}
    if config:
        try:
            raw = load_yaml(config)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="config") from exc

    discovery = dict(raw.get("discovery") or {})
    discovery["directories"] = [str(directory) for directory in path]
    if recursive is not None:
        discovery["recursive"] = recursive
    raw["discovery"] = discovery

    try:
        app_config = load_config(raw)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc), param_hint="config") from exc

    configure_logging(log_level, json_output=not console_logs)

    container = create_container(settings=app_config)
    try:
        scanner = container.scanner()
    except (ImportError, AttributeError, ValueError) as exc:
        raise typer.BadParameter(f"Unable to build criteria: {exc}", param_hint="config") from exc

    report = scanner.scan()
    container.report_writer().write(output, report)

    counts = report.counts()
    typer.echo(
        f"Scanned {len(report.outcomes)} modules: {counts['admitted']} admitted, "
        f"{counts['rejected']} rejected, {counts['excluded']} excluded, {counts['failed']} failed. "
        f"Report saved to {output}."
    )
    if report.failed:
        raise typer.Exit(code=1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
