"""
genharness — CLI entrypoint.

Usage:
    genharness <generator.py> <out-dir> [-T:AdditionalTextPath] [-P:Key=Value]...
    python -m genharness.main --help
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from genharness import __version__
from genharness.core.config.properties import strip_option_marker
from genharness.core.observability.logging_config import configure_logging


@click.command()
@click.version_option(version=__version__, prog_name="genharness")
@click.argument("module_path", type=click.Path(path_type=Path))
@click.argument("output_dir", type=click.Path(path_type=Path))
@click.option(
    "-T",
    "--additional-text",
    "additional_texts",
    multiple=True,
    help="Auxiliary text file passed to the generator (-T:PATH also accepted).",
)
@click.option(
    "-P",
    "--property",
    "properties",
    multiple=True,
    help="Build property KEY=VALUE, exposed as build_property.KEY (repeatable).",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to genharness.yml (default: ./genharness.yml if present).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output the result as JSON.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
def cli(
    module_path: Path,
    output_dir: Path,
    additional_texts: tuple[str, ...],
    properties: tuple[str, ...],
    config_path: Path | None,
    as_json: bool,
    verbose: bool,
    quiet: bool,
    debug: bool,
) -> None:
    """Run the code generator in MODULE_PATH once and write its output to OUTPUT_DIR."""
    configure_logging(debug, verbose, quiet)

    from genharness.core.use_cases.run import run_generator

    # Only the first -T is used
    additional_text = (
        Path(strip_option_marker(additional_texts[0], "-T:")) if additional_texts else None
    )

    # click hands "-P:k=v" over as ":k=v"; restore what was typed for warnings
    raw_properties = [f"-P{p}" if p.startswith(":") else p for p in properties]

    def warn(message: str) -> None:
        click.secho(message, fg="yellow", err=True)

    try:
        result = run_generator(
            module_path,
            output_dir,
            properties=raw_properties,
            additional_text=additional_text,
            config_path=config_path,
            on_warning=warn,
        )
    except SystemExit as e:
        # A generator calling sys.exit is a failed run, whatever the code
        click.secho(f"Error executing generator: generator exited (code {e.code})", fg="red", err=True)
        sys.exit(1)
    except Exception as e:
        click.secho(f"Error executing generator: {e}", fg="red", err=True)
        sys.exit(1)

    for diagnostic in result.diagnostics:
        click.echo(str(diagnostic), err=True)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.secho(
        f"Successfully generated {result.files_written} file(s) to {result.output_dir}",
        fg="green",
    )


if __name__ == "__main__":
    cli()
