"""Render templates and write generated output.

Takes the context from context_builder and produces the Go project:
models, router, handlers, BadgerDB bootstrap, namespace manifest,
entry point and go.mod.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import jinja2

from .config import OUTPUT_DIR, Settings
from .context_builder import build_context

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"

# Artifact name -> template name. Artifact names are part of the output contract.
ARTIFACTS: dict[str, str] = {
    "models.go": "models.go.j2",
    "server.go": "server.go.j2",
    "handlers.go": "handlers.go.j2",
    "db.go": "db.go.j2",
    "db_init.go": "db_init.go.j2",
    "main.go": "main.go.j2",
    "go.mod": "go.mod.j2",
}


def _environment() -> jinja2.Environment:
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )


def render(context: dict[str, Any]) -> dict[str, str]:
    """Render every artifact; returns {artifact name: text}."""
    env = _environment()
    return {
        name: env.get_template(template).render(**context)
        for name, template in ARTIFACTS.items()
    }


def write_artifacts(artifacts: dict[str, str], output_dir: Path = OUTPUT_DIR) -> list[Path]:
    """Write rendered artifacts into output_dir, creating it if needed."""
    output_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for name, text in artifacts.items():
        output_path = output_dir / name
        output_path.write_text(text, encoding="utf-8")
        logger.debug("Wrote %s (%d bytes)", output_path, len(text))
        written.append(output_path)
    return written


def generate(
    spec: dict[str, Any],
    output_dir: Path = OUTPUT_DIR,
    settings: Settings | None = None,
) -> dict[str, Any]:
    """Build the context, render all artifacts and write them.

    Nothing is written if the document is rejected. Returns the context.
    """
    context = build_context(spec, settings)
    artifacts = render(context)
    write_artifacts(artifacts, output_dir)
    return context
