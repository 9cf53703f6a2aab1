"""
ecogen Core Module - PM2 ecosystem generator core library.
"""
__version__ = "0.1.0"

from .exceptions import (
    EcogenError,
    ConfigError,
    DuplicateServiceError,
    DuplicatePortError,
    InvalidRootError,
    UnknownLayoutError,
    ValidationError,
)
from .platform import OsFamily, Architecture, HostPlatform, detect_host
from .schemas import Layout, ProcessDescriptor, Topology
from .resolver import resolve, resolve_host
from .assembler import assemble
from .config import get_config, get_config_manager
from . import render

__all__ = [
    "__version__",
    # Exceptions
    "EcogenError",
    "ConfigError",
    "DuplicateServiceError",
    "DuplicatePortError",
    "InvalidRootError",
    "UnknownLayoutError",
    "ValidationError",
    # Platform
    "OsFamily",
    "Architecture",
    "HostPlatform",
    "detect_host",
    # Model
    "Layout",
    "ProcessDescriptor",
    "Topology",
    # Operations
    "resolve",
    "resolve_host",
    "assemble",
    # Config
    "get_config",
    "get_config_manager",
    # Submodules
    "render",
]
