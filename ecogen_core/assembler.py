"""Process descriptor assembly.

Turns a layout catalogue into the ordered topology handed to PM2. Everything
the result depends on comes in as an argument: the layout, the artifact
directory resolved for the host, and the optional root override.
"""
import logging
from pathlib import PurePosixPath
from typing import Dict, Iterable, Optional

from .catalogue import DEFAULT_ROOTS, get_catalogue, get_layout
from .exceptions import DuplicatePortError, DuplicateServiceError, InvalidRootError, ValidationError
from .schemas import (
    LaunchStrategy,
    Layout,
    LogFiles,
    ProcessDescriptor,
    RestartPolicy,
    ServiceSpec,
    Topology,
)
from .utils import validate_memory

logger = logging.getLogger(__name__)

DEFAULT_NODE_ENV = "production"
DEFAULT_MAX_MEMORY_RESTART = "500M"
LOG_DIR_NAME = "logs"


def assemble(
    layout: Layout | str,
    artifact_dir: Optional[str] = None,
    *,
    root: Optional[str] = None,
    node_env: str = DEFAULT_NODE_ENV,
    max_memory_restart: str = DEFAULT_MAX_MEMORY_RESTART,
) -> Topology:
    """Build the topology for a layout.

    Args:
        layout: Layout mode (enum member or name).
        artifact_dir: Relative build artifact directory from the resolver.
            Required for the development layout, ignored otherwise.
        root: Absolute root for host layouts. Defaults to the layout's root.
        node_env: Runtime mode marker exported as NODE_ENV.
        max_memory_restart: Memory ceiling before the supervisor restarts.

    Returns:
        Topology with one descriptor per catalogued service.

    Raises:
        ValidationError: If the development layout is given no artifact dir.
            or the memory ceiling is malformed.
        InvalidRootError: If a host layout root is empty or relative.
        DuplicateServiceError: If two services share a name.
        DuplicatePortError: If two services share a port.
    """
    layout = get_layout(layout)
    restart = RestartPolicy(
        watch=False,
        max_memory_restart=validate_memory(max_memory_restart),
        time=True,
    )

    if layout == Layout.DEVELOPMENT:
        if not artifact_dir or not artifact_dir.strip():
            raise ValidationError("artifact_dir", "required for the development layout")
        base_root = None
    else:
        artifact_dir = None
        base_root = _host_root(root if root is not None else DEFAULT_ROOTS[layout])

    catalogue = get_catalogue(layout)
    _check_unique(catalogue, layout)

    apps = []
    for spec in catalogue:
        if base_root is None:
            descriptor = _development_descriptor(spec, artifact_dir, node_env, restart)
        else:
            descriptor = _host_descriptor(spec, base_root, node_env, restart)
        apps.append(descriptor)
        logger.debug(f"Assembled {descriptor.name}: {descriptor.launch_target}")

    logger.info(f"Assembled {len(apps)} processes for {layout.value} layout")
    return Topology(
        layout=layout,
        artifact_dir=artifact_dir,
        root=str(base_root) if base_root is not None else None,
        apps=tuple(apps),
    )


def _host_root(root: Optional[str]) -> PurePosixPath:
    if root is None or not root.strip():
        raise InvalidRootError(root or "", "root directory cannot be empty")
    path = PurePosixPath(root.strip())
    if not path.is_absolute():
        raise InvalidRootError(root, "host layouts need an absolute root")
    return path


def _check_unique(catalogue: Iterable[ServiceSpec], layout: Layout) -> None:
    names = set()
    ports: Dict[int, str] = {}
    for spec in catalogue:
        if spec.name in names:
            raise DuplicateServiceError(spec.name, layout.value)
        names.add(spec.name)
        if spec.port in ports:
            raise DuplicatePortError(spec.port, ports[spec.port], spec.name, layout.value)
        ports[spec.port] = spec.name


def _environment(spec: ServiceSpec, node_env: str, config_path: str) -> Dict[str, str]:
    env = {
        "NODE_ENV": node_env,
        "PORT": str(spec.port),
        "CONFIG_PATH": config_path,
    }
    env.update(dict(spec.extra_env))
    return env


def _production_env(spec: ServiceSpec) -> Optional[Dict[str, str]]:
    if spec.production_env:
        return {"NODE_ENV": "production"}
    return None


def _node_command(spec: ServiceSpec) -> tuple:
    """Return (script, args) for a node launched service."""
    if spec.launch == LaunchStrategy.NPM_START:
        return "npm", "start"
    elif spec.launch == LaunchStrategy.NEXT_START:
        return "node_modules/.bin/next", f"start -p {spec.port}"
    elif spec.launch == LaunchStrategy.NODE_SERVER:
        return "node", "server.js"
    raise ValidationError("launch", f"{spec.launch.value} is not a node launch strategy")


def _development_descriptor(
    spec: ServiceSpec, artifact_dir: str, node_env: str, restart: RestartPolicy
) -> ProcessDescriptor:
    if spec.launch == LaunchStrategy.BINARY:
        # Script paths resolve against the supervisor's working directory.
        script = str(PurePosixPath(spec.name) / artifact_dir / spec.name)
        return ProcessDescriptor(
            name=spec.name,
            script=script,
            args=spec.args,
            port=spec.port,
            env=_environment(spec, node_env, f"./{spec.name}/config.yaml"),
            restart=restart,
            env_production=_production_env(spec),
        )

    script, args = _node_command(spec)
    return ProcessDescriptor(
        name=spec.name,
        script=script,
        args=args,
        cwd=f"./{spec.name}",
        port=spec.port,
        env=_environment(spec, node_env, "./config.yaml"),
        restart=restart,
        env_production=_production_env(spec),
    )


def _host_descriptor(
    spec: ServiceSpec, root: PurePosixPath, node_env: str, restart: RestartPolicy
) -> ProcessDescriptor:
    base_dir = root / spec.name
    log_dir = root / LOG_DIR_NAME

    if spec.launch in (LaunchStrategy.BINARY, LaunchStrategy.BUNDLED):
        script, args = f"./{spec.name}", spec.args
    else:
        script, args = _node_command(spec)

    return ProcessDescriptor(
        name=spec.name,
        script=script,
        args=args,
        cwd=str(base_dir),
        port=spec.port,
        env=_environment(spec, node_env, "./config.yaml"),
        restart=restart,
        log_files=LogFiles(
            error=str(log_dir / f"{spec.name}.error.log"),
            out=str(log_dir / f"{spec.name}.out.log"),
            combined=str(log_dir / f"{spec.name}.combined.log"),
        ),
        env_production=_production_env(spec),
    )
