"""Build artifact directory resolution."""
import logging
from typing import Dict, Tuple

from .platform import Architecture, HostPlatform, OsFamily, get_architecture, get_os_family

logger = logging.getLogger(__name__)

DEFAULT_ARTIFACT_DIR = "target/release"

# Every (os, arch) pair is listed so lookups can never miss.
ARTIFACT_DIRS: Dict[Tuple[OsFamily, Architecture], str] = {
    (OsFamily.MACOS, Architecture.ARM64): "target/aarch64-apple-darwin/release",
    (OsFamily.MACOS, Architecture.X86_64): DEFAULT_ARTIFACT_DIR,
    (OsFamily.MACOS, Architecture.OTHER): DEFAULT_ARTIFACT_DIR,
    (OsFamily.LINUX, Architecture.ARM64): "target/aarch64-unknown-linux-gnu/release",
    (OsFamily.LINUX, Architecture.X86_64): DEFAULT_ARTIFACT_DIR,
    (OsFamily.LINUX, Architecture.OTHER): DEFAULT_ARTIFACT_DIR,
    (OsFamily.OTHER, Architecture.ARM64): DEFAULT_ARTIFACT_DIR,
    (OsFamily.OTHER, Architecture.X86_64): DEFAULT_ARTIFACT_DIR,
    (OsFamily.OTHER, Architecture.OTHER): DEFAULT_ARTIFACT_DIR,
}


def resolve(os_family: OsFamily | str, architecture: Architecture | str) -> str:
    """Return the relative directory holding the build artifacts for a platform.

    Raw identifiers such as ``darwin`` or ``aarch64`` are normalized first and
    anything unrecognized counts as ``other``, so this always returns a value.

    Args:
        os_family: OS family, as enum member or raw identifier.
        architecture: CPU architecture, as enum member or raw identifier.

    Returns:
        Relative directory such as ``target/release``.
    """
    if not isinstance(os_family, OsFamily):
        os_family = get_os_family(str(os_family))
    if not isinstance(architecture, Architecture):
        architecture = get_architecture(str(architecture))

    artifact_dir = ARTIFACT_DIRS[(os_family, architecture)]

    logger.info(f"Detected platform: {os_family.value}, architecture: {architecture.value}")
    logger.info(f"Using binary path: {artifact_dir}")
    return artifact_dir


def resolve_host(host: HostPlatform) -> str:
    """Resolve the artifact directory for detected host facts."""
    return resolve(host.os_family, host.architecture)
