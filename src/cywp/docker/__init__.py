"""cywp.docker - container runtime CLI orchestration."""

from cywp.docker.args import (
    build_container_args,
    build_network_args,
    build_volume_args,
    normalize_container_config,
)
from cywp.docker.client import Docker
from cywp.docker.config import (
    ContainerConfig,
    EnvironmentVariable,
    HealthCheck,
    NetworkConfig,
    PortMapping,
    RuntimeConfig,
    VolumeConfig,
    VolumeMount,
)
from cywp.docker.entities import (
    Container,
    ContainerStatus,
    Network,
    ResourceStatus,
    RunOutput,
    Volume,
)
from cywp.docker.process import find_executable, run_process

__all__ = [
    "Docker",
    # Options
    "ContainerConfig",
    "EnvironmentVariable",
    "HealthCheck",
    "NetworkConfig",
    "PortMapping",
    "RuntimeConfig",
    "VolumeConfig",
    "VolumeMount",
    # Entities
    "Container",
    "ContainerStatus",
    "Network",
    "ResourceStatus",
    "RunOutput",
    "Volume",
    # Building blocks
    "build_container_args",
    "build_network_args",
    "build_volume_args",
    "normalize_container_config",
    "find_executable",
    "run_process",
]
