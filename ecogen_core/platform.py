"""Platform detection utilities.

This module is intentionally standalone with no dependencies on other ecogen
modules so the resolver and the CLI can both import it freely.
"""
import platform
from enum import Enum
from typing import NamedTuple, Optional


class OsFamily(str, Enum):
    """Operating system families the resolver distinguishes."""
    MACOS = "macos"
    LINUX = "linux"
    OTHER = "other"


class Architecture(str, Enum):
    """CPU architectures the resolver distinguishes."""
    ARM64 = "arm64"
    X86_64 = "x86_64"
    OTHER = "other"


class HostPlatform(NamedTuple):
    """Host facts, computed once at startup."""
    os_family: OsFamily
    architecture: Architecture
    raw_os: str = ""
    raw_arch: str = ""


def get_os_family(system: Optional[str] = None) -> OsFamily:
    """Return normalized OS family: macos, linux or other."""
    if system is None:
        system = platform.system()
    system = system.strip().lower()
    if system in ("darwin", "macos"):
        return OsFamily.MACOS
    elif system == "linux":
        return OsFamily.LINUX
    return OsFamily.OTHER


def get_architecture(machine: Optional[str] = None) -> Architecture:
    """Return normalized architecture: arm64, x86_64 or other."""
    if machine is None:
        machine = platform.machine()
    machine = machine.strip().lower()
    if machine in ("aarch64", "arm64"):
        return Architecture.ARM64
    elif machine in ("x86_64", "amd64", "x64"):
        return Architecture.X86_64
    return Architecture.OTHER


def detect_host(system: Optional[str] = None, machine: Optional[str] = None) -> HostPlatform:
    """Read the host facts, optionally overriding the raw identifiers."""
    raw_os = system if system is not None else platform.system()
    raw_arch = machine if machine is not None else platform.machine()
    return HostPlatform(
        os_family=get_os_family(raw_os),
        architecture=get_architecture(raw_arch),
        raw_os=raw_os,
        raw_arch=raw_arch,
    )
