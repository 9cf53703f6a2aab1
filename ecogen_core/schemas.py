"""Pydantic schemas for ecogen.

These describe the services in a layout catalogue and the descriptors that
make up an assembled topology. Descriptors and topologies are frozen, and
environment mappings are read-only views, so nothing changes them once the
assembler has built them.
"""
from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Layout(str, Enum):
    """Mutually exclusive deployment layouts."""
    DEVELOPMENT = "development"
    STANDARD = "standard"
    SHARED = "shared"


class LaunchStrategy(str, Enum):
    """How a service is started by the supervisor."""
    BINARY = "binary"          # compiled artifact under the resolved target dir
    BUNDLED = "bundled"        # prebuilt executable shipped inside the service dir
    NPM_START = "npm-start"
    NEXT_START = "next-start"
    NODE_SERVER = "node-server"


class ServiceSpec(BaseModel):
    """A catalogued service within one layout."""
    model_config = ConfigDict(frozen=True)

    name: str
    port: int
    launch: LaunchStrategy
    args: Optional[str] = None
    extra_env: Tuple[Tuple[str, str], ...] = ()
    production_env: bool = False


class RestartPolicy(BaseModel):
    """Restart settings shared by every descriptor."""
    model_config = ConfigDict(frozen=True)

    watch: bool = False
    max_memory_restart: str = "500M"
    time: bool = True


class LogFiles(BaseModel):
    """Log destinations for host-rooted layouts."""
    model_config = ConfigDict(frozen=True)

    error: str
    out: str
    combined: str


class ProcessDescriptor(BaseModel):
    """Everything the supervisor needs to launch one service."""
    model_config = ConfigDict(frozen=True)

    name: str
    script: str
    args: Optional[str] = None
    cwd: Optional[str] = None
    port: int
    env: Mapping[str, str]
    restart: RestartPolicy = Field(default_factory=RestartPolicy)
    log_files: Optional[LogFiles] = None
    instances: int = 1
    exec_mode: str = "fork"
    env_production: Optional[Mapping[str, str]] = None

    @field_validator("env", "env_production")
    @classmethod
    def _read_only(cls, value):
        if value is None:
            return None
        return MappingProxyType(dict(value))

    @property
    def launch_target(self) -> str:
        """Script plus arguments, as a single command line."""
        if self.args:
            return f"{self.script} {self.args}"
        return self.script

    def to_pm2(self) -> dict:
        """Render as a PM2 app declaration, omitting empty keys."""
        app = {"name": self.name}
        if self.cwd is not None:
            app["cwd"] = self.cwd
        app["script"] = self.script
        if self.args:
            app["args"] = self.args
        app["instances"] = self.instances
        app["exec_mode"] = self.exec_mode
        app["env"] = dict(self.env)
        app["watch"] = self.restart.watch
        app["time"] = self.restart.time
        app["max_memory_restart"] = self.restart.max_memory_restart
        if self.log_files is not None:
            app["error_file"] = self.log_files.error
            app["out_file"] = self.log_files.out
            app["log_file"] = self.log_files.combined
        if self.env_production:
            app["env_production"] = dict(self.env_production)
        return app


class Topology(BaseModel):
    """Ordered descriptors for one layout."""
    model_config = ConfigDict(frozen=True)

    layout: Layout
    artifact_dir: Optional[str] = None
    root: Optional[str] = None
    apps: Tuple[ProcessDescriptor, ...]

    def names(self) -> List[str]:
        return [app.name for app in self.apps]

    def ports(self) -> List[int]:
        return [app.port for app in self.apps]

    def get(self, name: str) -> Optional[ProcessDescriptor]:
        for app in self.apps:
            if app.name == name:
                return app
        return None

    def __len__(self) -> int:
        return len(self.apps)

    def to_ecosystem(self) -> dict:
        """Render as a PM2 ecosystem document."""
        return {"apps": [app.to_pm2() for app in self.apps]}
