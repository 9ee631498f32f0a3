"""Configuration types for the docker layer.

Resource options (containers, volumes, networks) are plain frozen dataclasses.
They are not validated on construction; ``cywp.docker.args`` validates them
when building the command line, so a bad option is reported before any
process is spawned.
"""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

DEFAULT_EXECUTABLE = "docker"


@dataclass(frozen=True)
class VolumeMount:
    """Bind mount of a host path into the container."""

    host: str
    docker: str


@dataclass(frozen=True)
class EnvironmentVariable:
    """Environment variable set inside the container."""

    name: str
    value: str


@dataclass(frozen=True)
class PortMapping:
    """Host port published to a container port."""

    host: str
    docker: str


@dataclass(frozen=True)
class HealthCheck:
    """Container health check.

    Attributes:
        command: Command the runtime runs to check health. Required.
        interval: Time between checks (e.g. "10s").
        retries: Consecutive failures before unhealthy. Must be a whole number.
        start_period: Grace period before failures count (e.g. "30s").
        timeout: Maximum time for one check (e.g. "5s").
    """

    command: str | None = None
    interval: str | None = None
    retries: int | None = None
    start_period: str | None = None
    timeout: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> HealthCheck:
        """Create health check from a mapping (camelCase or snake_case keys)."""
        return cls(
            command=data.get("command"),
            interval=data.get("interval"),
            retries=data.get("retries"),
            start_period=_pick(data, "start_period", "startPeriod"),
            timeout=data.get("timeout"),
        )


@dataclass(frozen=True)
class ContainerConfig:
    """Options for creating or running a container.

    Sequences keep the caller's order; the command line is emitted in that order.
    Entries of ``volumes``, ``environment_variables`` and ``expose_ports`` may be
    the dataclasses above or mappings with the same keys.
    """

    image: str | None = None
    name: str | None = None
    network: str | None = None
    volumes: Sequence[VolumeMount | Mapping[str, Any]] = ()
    environment_variables: Sequence[EnvironmentVariable | Mapping[str, Any]] = ()
    expose_ports: Sequence[PortMapping | Mapping[str, Any]] = ()
    health: HealthCheck | None = None
    rm: bool = False
    commands: Sequence[str] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ContainerConfig:
        """Create config from a mapping.

        Accepts the camelCase keys used by JavaScript-style option objects
        (``environmentVariables``, ``exposePorts``) as well as snake_case keys.
        Values are passed through unchecked.
        """
        health = data.get("health")
        if isinstance(health, Mapping):
            health = HealthCheck.from_dict(health)

        return cls(
            image=data.get("image"),
            name=data.get("name"),
            network=data.get("network"),
            volumes=_or_empty(data.get("volumes")),
            environment_variables=_or_empty(
                _pick(data, "environment_variables", "environmentVariables")
            ),
            expose_ports=_or_empty(_pick(data, "expose_ports", "exposePorts")),
            health=health,
            rm=bool(data.get("rm", False)),
            commands=_or_empty(data.get("commands")),
        )


@dataclass(frozen=True)
class NetworkConfig:
    """Options for creating a network."""

    name: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> NetworkConfig:
        """Create config from a mapping."""
        return cls(name=data.get("name"))

    @classmethod
    def coerce(cls, value: NetworkConfig | Mapping[str, Any] | str | None) -> NetworkConfig:
        """Normalize a bare network name or mapping into a NetworkConfig."""
        if isinstance(value, NetworkConfig):
            return value
        if isinstance(value, Mapping):
            return cls.from_dict(value)
        # Non-string values are kept so the argument builder can reject them
        return cls(name=value)


@dataclass(frozen=True)
class VolumeConfig:
    """Options for creating a volume."""

    name: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VolumeConfig:
        """Create config from a mapping."""
        return cls(name=data.get("name"))

    @classmethod
    def coerce(cls, value: VolumeConfig | Mapping[str, Any] | str | None) -> VolumeConfig:
        """Normalize a bare volume name or mapping into a VolumeConfig."""
        if isinstance(value, VolumeConfig):
            return value
        if isinstance(value, Mapping):
            return cls.from_dict(value)
        # Non-string values are kept so the argument builder can reject them
        return cls(name=value)


@dataclass(frozen=True)
class RuntimeConfig:
    """Settings for invoking the container runtime.

    Attributes:
        executable: Container runtime CLI to invoke (docker or a compatible tool).
        env: Extra environment variables for spawned processes, merged over
            the current environment.
        cwd: Working directory for spawned processes. None means inherit.
    """

    executable: str = DEFAULT_EXECUTABLE
    env: dict[str, str] = field(default_factory=dict)
    cwd: Path | None = None

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not isinstance(self.executable, str) or not self.executable.strip():
            raise ValueError(f"executable must be a non-empty string, got: {self.executable!r}")
        if self.cwd is not None and not isinstance(self.cwd, Path):
            object.__setattr__(self, "cwd", Path(self.cwd))

    @classmethod
    def from_env(cls) -> RuntimeConfig:
        """Load configuration from environment variables.

        Reads CYWP_DOCKER_EXECUTABLE and CYWP_DOCKER_CWD.
        """
        kwargs: dict[str, Any] = {}
        if executable := os.environ.get("CYWP_DOCKER_EXECUTABLE"):
            kwargs["executable"] = executable
        if cwd := os.environ.get("CYWP_DOCKER_CWD"):
            kwargs["cwd"] = Path(cwd)
        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, path: Path | str) -> RuntimeConfig:
        """Load configuration from YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Mapping[str, Any]) -> RuntimeConfig:
        """Create config from dictionary."""
        cwd = data.get("cwd")
        return cls(
            executable=data.get("executable", DEFAULT_EXECUTABLE),
            env={str(k): str(v) for k, v in (data.get("env") or {}).items()},
            cwd=Path(cwd) if cwd else None,
        )

    def process_env(self) -> dict[str, str] | None:
        """Environment for spawned processes, or None to inherit unchanged."""
        if not self.env:
            return None
        full_env = os.environ.copy()
        full_env.update(self.env)
        return full_env


def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def _or_empty(value: Any) -> Any:
    # Keep malformed values as-is so the argument builder can report them
    return () if value is None else value
