"""Resources created through the container runtime.

Entities are immutable values returned by ``cywp.docker.client.Docker``.
They hold the options the resource was created with plus the identity and
status reported by the runtime. A status change produces a new entity.
"""

from __future__ import annotations

from dataclasses import dataclass

from cywp.docker.config import ContainerConfig


class ContainerStatus:
    """Status values for containers."""

    CREATED = "created"
    STARTED = "started"
    REMOVED = "removed"

    @classmethod
    def all(cls) -> set[str]:
        """Return set of all container statuses."""
        return {cls.CREATED, cls.STARTED, cls.REMOVED}


class ResourceStatus:
    """Status values for volumes and networks."""

    ALIVE = "alive"
    REMOVED = "removed"

    @classmethod
    def all(cls) -> set[str]:
        """Return set of all volume/network statuses."""
        return {cls.ALIVE, cls.REMOVED}


@dataclass(frozen=True)
class Container:
    """A container known to the runtime.

    ``id`` is the runtime's output for the creating command, with
    surrounding whitespace removed.
    """

    config: ContainerConfig
    id: str
    status: str

    @property
    def image(self) -> str | None:
        return self.config.image

    @property
    def name(self) -> str | None:
        return self.config.name

    @property
    def network(self) -> str | None:
        return self.config.network


@dataclass(frozen=True)
class Volume:
    """A named volume. ``name`` is the name reported by the runtime."""

    name: str
    status: str


@dataclass(frozen=True)
class Network:
    """A user-defined network."""

    id: str
    name: str
    status: str


@dataclass(frozen=True)
class RunOutput:
    """Output of a one-off command run in a throwaway container."""

    stdout: str
    stderr: str
