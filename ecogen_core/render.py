"""Render topologies as PM2 ecosystem files."""
import json
import logging
from enum import Enum
from pathlib import Path

from .schemas import Topology

logger = logging.getLogger(__name__)


class OutputFormat(str, Enum):
    JSON = "json"
    JS = "js"


DEFAULT_FILENAMES = {
    OutputFormat.JSON: "ecosystem.json",
    OutputFormat.JS: "ecosystem.config.js",
}


def render(topology: Topology, output_format: OutputFormat | str = OutputFormat.JSON) -> str:
    """Render a topology in the given format.

    ``json`` produces a plain ecosystem document; ``js`` wraps the same
    document in ``module.exports`` so PM2 can load it as a config module.
    """
    output_format = OutputFormat(output_format)
    body = json.dumps(topology.to_ecosystem(), indent=2)

    if output_format == OutputFormat.JS:
        header = f"// PM2 ecosystem for the {topology.layout.value} layout, generated by ecogen\n"
        return f"{header}module.exports = {body};\n"
    return body + "\n"


def write(topology: Topology, path: Path, output_format: OutputFormat | str = OutputFormat.JSON) -> Path:
    """Render a topology and write it to ``path``."""
    content = render(topology, output_format)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    logger.debug(f"Ecosystem written to {path}")
    return path
