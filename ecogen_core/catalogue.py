"""Service catalogues for each deployment layout."""
from typing import Dict, Optional, Tuple

from .exceptions import UnknownLayoutError
from .schemas import Layout, LaunchStrategy as L, ServiceSpec

SEMANTIC_API_URL = "http://127.0.0.1:50057"
SEMANTIC_URL = "http://127.0.0.1:3002"

_SEMANTIC_ENV = (("PROVIDER", "cohere"), ("API_URL", SEMANTIC_API_URL))
_UPLOADER_ENV = (("PROVIDER", "cohere"), ("API_URL", SEMANTIC_URL))
_SEMANTIC_ARGS = f"--provider cohere --api {SEMANTIC_API_URL}"


def _services(binary: L, mayorana: L) -> Tuple[ServiceSpec, ...]:
    return (
        ServiceSpec(name="ai-uploader", port=8080, launch=binary, extra_env=_UPLOADER_ENV),
        ServiceSpec(name="store", port=3000, launch=binary),
        ServiceSpec(name="grpc-logger", port=3001, launch=binary),
        ServiceSpec(name="semantic", port=3002, launch=binary, args=_SEMANTIC_ARGS, extra_env=_SEMANTIC_ENV),
        ServiceSpec(name="gateway", port=3003, launch=binary),
        ServiceSpec(name="dashboard", port=3004, launch=L.NPM_START),
        ServiceSpec(name="landing", port=3005, launch=L.NPM_START),
        ServiceSpec(name="mayorana", port=3006, launch=mayorana, production_env=True),
    )


CATALOGUES: Dict[Layout, Tuple[ServiceSpec, ...]] = {
    Layout.DEVELOPMENT: _services(L.BINARY, L.NEXT_START),
    Layout.STANDARD: _services(L.BUNDLED, L.NEXT_START),
    Layout.SHARED: _services(L.BUNDLED, L.NODE_SERVER),
}

# None means paths are relative to the directory the supervisor is started from.
DEFAULT_ROOTS: Dict[Layout, Optional[str]] = {
    Layout.DEVELOPMENT: None,
    Layout.STANDARD: "/opt/api0",
    Layout.SHARED: "/opt/app",
}

DESCRIPTIONS: Dict[Layout, str] = {
    Layout.DEVELOPMENT: "Source tree, platform-specific build artifacts",
    Layout.STANDARD: "Host install under /opt, one directory per service",
    Layout.SHARED: "Single shared app directory on the host",
}


def get_layout(name: str | Layout) -> Layout:
    """Look up a layout by name.

    Raises:
        UnknownLayoutError: If the name matches no layout.
    """
    if isinstance(name, Layout):
        return name
    try:
        return Layout(name.strip().lower())
    except ValueError:
        raise UnknownLayoutError(name)


def get_catalogue(layout: Layout) -> Tuple[ServiceSpec, ...]:
    """Return the services catalogued for a layout, in launch order."""
    return CATALOGUES[get_layout(layout)]


def uses_artifact_dir(layout: Layout) -> bool:
    """Whether any service in the layout launches a platform-specific build."""
    return any(spec.launch == L.BINARY for spec in get_catalogue(layout))
