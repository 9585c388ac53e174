"""Entry point: python -m backendgen --input openapi.json

Reads an OpenAPI document and writes a Go + BadgerDB server skeleton.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click
import yaml

from .codegen import generate
from .config import OUTPUT_DIR, Settings
from .loader import InvalidShapeError, load_spec

_DEFAULTS = Settings()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@click.command()
@click.option("-i", "--input", "input_path", required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="OpenAPI document (JSON or YAML).")
@click.option("-o", "--output", "output_dir", default=OUTPUT_DIR, show_default=True, type=click.Path(file_okay=False, path_type=Path), help="Directory for the generated Go project.")
@click.option("--module", "module_name", default=_DEFAULTS.module_name, show_default=True, envvar="BACKENDGEN_MODULE", help="Go module name written to go.mod.")
@click.option("--addr", "listen_addr", default=_DEFAULTS.listen_addr, show_default=True, envvar="BACKENDGEN_ADDR", help="Listen address of the generated server.")
@click.option("--db-path", default=_DEFAULTS.db_path, show_default=True, envvar="BACKENDGEN_DB_PATH", help="BadgerDB directory used by the generated server.")
@click.option("--log-level", default="WARNING", show_default=True, envvar="BACKENDGEN_LOG_LEVEL", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False))
def main(input_path: Path, output_dir: Path, module_name: str, listen_addr: str, db_path: str, log_level: str) -> None:
    """Generate a Go backend skeleton from an OpenAPI document."""
    configure_logging(log_level.upper())
    settings = Settings(module_name=module_name, listen_addr=listen_addr, db_path=db_path)

    click.echo(f"Reading {input_path}...")
    try:
        spec = load_spec(input_path)
        context = generate(spec, output_dir, settings)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise click.ClickException(f"could not parse {input_path}: {exc}") from exc
    except InvalidShapeError as exc:
        raise click.ClickException(f"invalid document: {exc}") from exc

    click.echo(
        f"Generated {output_dir} ({context['schema_count']} schemas, "
        f"{context['operation_count']} operations)"
    )


if __name__ == "__main__":
    main()
