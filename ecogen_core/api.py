"""High-level API: detect, resolve and assemble in one call.

The CLI goes through these functions so that configuration defaults are
applied in one place before being passed down as plain arguments.
"""
import logging
from pathlib import Path
from typing import Optional

from .assembler import assemble
from .catalogue import get_layout, uses_artifact_dir
from .config import EcogenConfig, get_config
from .exceptions import ValidationError
from .platform import HostPlatform, detect_host
from .render import DEFAULT_FILENAMES, OutputFormat, render, write
from .resolver import resolve_host
from .schemas import Layout, Topology

logger = logging.getLogger(__name__)


def layout_root(layout: Layout, config: EcogenConfig) -> Optional[str]:
    """Return the configured root for a layout (None for development)."""
    if layout == Layout.STANDARD:
        return config.standard_root
    elif layout == Layout.SHARED:
        return config.shared_root
    return None


def build_topology(
    layout: Optional[str] = None,
    root: Optional[str] = None,
    os_name: Optional[str] = None,
    arch: Optional[str] = None,
    config: Optional[EcogenConfig] = None,
) -> Topology:
    """Build a topology, filling unset options from configuration.

    Args:
        layout: Layout name. Defaults to the configured default layout.
        root: Root override for host layouts.
        os_name: Raw OS identifier overriding detection (e.g. ``darwin``).
        arch: Raw architecture identifier overriding detection.
        config: Configuration to use. Defaults to the global config.

    Returns:
        The assembled topology.
    """
    config = config or get_config()
    selected = get_layout(layout or config.default_layout)

    artifact_dir = None
    if uses_artifact_dir(selected):
        host = detect_host(os_name, arch)
        artifact_dir = resolve_host(host)

    return assemble(
        selected,
        artifact_dir,
        root=root if root is not None else layout_root(selected, config),
        node_env=config.node_env,
        max_memory_restart=config.max_memory_restart,
    )


def host_summary(os_name: Optional[str] = None, arch: Optional[str] = None) -> dict:
    """Describe the host facts and the artifact directory they resolve to."""
    host: HostPlatform = detect_host(os_name, arch)
    return {
        "raw_os": host.raw_os,
        "raw_arch": host.raw_arch,
        "os_family": host.os_family.value,
        "architecture": host.architecture.value,
        "artifact_dir": resolve_host(host),
    }


def generate(
    layout: Optional[str] = None,
    root: Optional[str] = None,
    os_name: Optional[str] = None,
    arch: Optional[str] = None,
    output_format: Optional[str] = None,
    output: Optional[Path] = None,
    config: Optional[EcogenConfig] = None,
) -> str:
    """Build and render an ecosystem document, writing it when ``output`` is set.

    A directory given as ``output`` receives the format's default file name.

    Returns:
        The rendered document.
    """
    config = config or get_config()
    try:
        fmt = OutputFormat(output_format or config.output_format)
    except ValueError:
        raise ValidationError("output_format", f"expected json or js, got {output_format or config.output_format}")
    topology = build_topology(layout, root, os_name, arch, config)

    if output is not None:
        if output.is_dir():
            output = output / DEFAULT_FILENAMES[fmt]
        write(topology, output, fmt)
        logger.info(f"Wrote {len(topology)} processes to {output}")
    return render(topology, fmt)
