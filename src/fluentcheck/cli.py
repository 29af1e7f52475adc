from __future__ import annotations

from pathlib import Path

import typer

app = typer.Typer(name="fluentcheck", help="Inspect fluentcheck results and settings")

EXAMPLE_CONFIG = """\
# fluentcheck output options
use_colors: true
use_unicode_symbols: true
show_success_details: true
# also settable with FLUENTCHECK_ENHANCED_OUTPUT=true
enhanced_output: false
# junit_path: ${CI_REPORTS_DIR:-reports}/fluentcheck.xml
"""


@app.command()
def report(
    junit: str = typer.Argument(help="Path to a junit.xml written by fluentcheck"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
):
    """Print totals and failures from a junit.xml file."""
    from fluentcheck.rendering.junit import read_junit_summary
    from fluentcheck.verbose import setup_logger

    logger = setup_logger(None, verbose=verbose, logger_name="fluentcheck.cli")

    junit_path = Path(junit)
    if not junit_path.exists():
        typer.echo(f"Error: junit file not found: {junit}", err=True)
        raise typer.Exit(1)

    logger.debug(f"Reading {junit_path}")
    summary = read_junit_summary(junit_path)
    passed = summary.tests - summary.failures
    typer.echo(f"{summary.tests} assertion(s): {passed} passed, {summary.failures} failed")
    for name, message in summary.failure_messages:
        typer.echo(f"  FAIL  {name}")
        if message and message != name:
            typer.echo(f"        {message}")

    # Exit with non-zero if any chain failed
    if summary.failures:
        raise typer.Exit(1)


@app.command("config")
def show_config(
    file: str | None = typer.Option(None, "--file", "-f", help="YAML config to load"),
):
    """Print the effective output configuration."""
    import yaml
    from pydantic import ValidationError

    from fluentcheck.config import Config, load_config

    try:
        effective = load_config(Path(file)) if file is not None else Config()
    except FileNotFoundError:
        typer.echo(f"Error: config file not found: {file}", err=True)
        raise typer.Exit(1)
    except (ValidationError, ValueError, TypeError, yaml.YAMLError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(yaml.dump(effective.model_dump(), default_flow_style=False, sort_keys=False))


@app.command()
def init(
    dir: str = typer.Option(".", "--dir", help="Directory to write fluentcheck.yaml into"),
):
    """Write an example fluentcheck.yaml."""
    project_dir = Path(dir)
    project_dir.mkdir(parents=True, exist_ok=True)

    target = project_dir / "fluentcheck.yaml"
    if target.exists():
        typer.echo(f"fluentcheck.yaml already exists in {dir}, skipping.")
        return

    target.write_text(EXAMPLE_CONFIG)
    typer.echo(f"Wrote {target}")
