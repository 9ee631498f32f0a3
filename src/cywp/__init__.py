"""cywp: programmatic docker resources for WordPress test environments."""

# Orchestrator and resource types
from cywp.docker import (
    Container,
    ContainerConfig,
    ContainerStatus,
    Docker,
    EnvironmentVariable,
    HealthCheck,
    Network,
    NetworkConfig,
    PortMapping,
    ResourceStatus,
    RunOutput,
    RuntimeConfig,
    Volume,
    VolumeConfig,
    VolumeMount,
)

# All errors (foundational)
from cywp.errors import (
    ConfigurationError,
    CywpError,
    ExecutionError,
    LaunchError,
    OutputError,
)

__version__ = "0.1.1"

__all__ = [
    # Core
    "Docker",
    "RuntimeConfig",
    # Options
    "ContainerConfig",
    "EnvironmentVariable",
    "HealthCheck",
    "NetworkConfig",
    "PortMapping",
    "VolumeConfig",
    "VolumeMount",
    # Entities
    "Container",
    "ContainerStatus",
    "Network",
    "ResourceStatus",
    "RunOutput",
    "Volume",
    # Errors
    "CywpError",
    "ConfigurationError",
    "ExecutionError",
    "LaunchError",
    "OutputError",
]
