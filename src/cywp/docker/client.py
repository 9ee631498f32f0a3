"""Docker orchestrator: create containers, volumes and networks via the CLI."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import replace
from typing import Any, TypeVar

from cywp.docker.args import (
    COMMANDS_EXAMPLE,
    build_container_args,
    build_network_args,
    build_remove_container_args,
    build_remove_network_args,
    build_remove_volume_args,
    build_start_container_args,
    build_volume_args,
    normalize_container_config,
)
from cywp.docker.config import ContainerConfig, NetworkConfig, RuntimeConfig, VolumeConfig
from cywp.docker.entities import (
    Container,
    ContainerStatus,
    Network,
    ResourceStatus,
    RunOutput,
    Volume,
)
from cywp.docker.process import find_executable, run_process
from cywp.errors import ConfigurationError, LaunchError, OutputError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Docker:
    """Create and tear down docker resources, one CLI invocation per call.

    Every method spawns a single process and returns a new entity once it
    exits. Option errors raise ConfigurationError before anything is spawned.
    Arguments passed in are never modified.

    Usage:
        docker = Docker()

        network = await docker.create_network("cywp-network")
        volume = await docker.create_volume("cywp-db")
        container = await docker.create_container(
            ContainerConfig(image="mysql:5.7", name="cywp-mysql", network=network.name),
            run=True,
        )

        output = await docker.run_in_container(
            ContainerConfig(image="alpine:latest", commands=["echo", "hi"], rm=True)
        )
    """

    def __init__(self, config: RuntimeConfig | None = None) -> None:
        """Initialize orchestrator.

        Args:
            config: Runtime settings. Defaults to RuntimeConfig() ("docker" on PATH).
        """
        self.config = config or RuntimeConfig()

    @property
    def executable(self) -> str:
        return self.config.executable

    def is_available(self) -> bool:
        """Check whether the container runtime executable is on PATH."""
        return find_executable(self.executable) is not None

    def ensure_available(self) -> None:
        """Raise LaunchError if the container runtime executable is missing."""
        if not self.is_available():
            raise LaunchError(
                self.executable,
                FileNotFoundError(f"{self.executable} not found on PATH"),
            )

    async def create_container(
        self,
        options: ContainerConfig | Mapping[str, Any],
        run: bool = False,
        detach: bool = True,
    ) -> Container:
        """Create a container, optionally starting it.

        Args:
            options: Container options.
            run: Start the container as part of creation.
            detach: With ``run``, return once the container has started rather
                than after it exits.

        Returns:
            Container with status "removed" if ``rm`` was requested, otherwise
            "started" when ``run`` is set and "created" when it is not.

        Raises:
            ConfigurationError: If the options are invalid.
            LaunchError: If the runtime could not be started.
            ExecutionError: If the runtime reported a failure.
        """
        config = normalize_container_config(_container_config(options))
        args = build_container_args(config, run=run, detach=detach)

        if config.rm:
            status = ContainerStatus.REMOVED
        elif run:
            status = ContainerStatus.STARTED
        else:
            status = ContainerStatus.CREATED

        # Attached runs print the container's own output instead of its id
        require_id = not run or detach

        def on_complete(stdout: str, stderr: str) -> Container:
            container_id = _identifier(stdout, args, required=require_id)
            return Container(config=config, id=container_id, status=status)

        container = await self._run(args, on_complete)
        logger.info("Container %s (%s) is %s", container.id, config.image, container.status)
        return container

    async def run_in_container(self, options: ContainerConfig | Mapping[str, Any]) -> RunOutput:
        """Run commands in a throwaway container and return their output.

        The container must be created with ``rm=True`` so nothing is left
        behind, and ``commands`` must be a non-empty list.

        Raises:
            ConfigurationError: If ``commands`` is empty or ``rm`` is not set.
            LaunchError: If the runtime could not be started.
            ExecutionError: If the command failed.
        """
        config = _container_config(options) or ContainerConfig()

        commands = config.commands
        if (
            isinstance(commands, (str, bytes))
            or not isinstance(commands, Sequence)
            or not commands
        ):
            raise ConfigurationError(
                "options.commands must be provided to use run_in_container",
                COMMANDS_EXAMPLE,
                "commands",
            )
        if not config.rm:
            raise ConfigurationError(
                "options.rm must be true to use run_in_container",
                COMMANDS_EXAMPLE,
                "rm",
            )

        args = build_container_args(config, run=True, detach=False)

        return await self._run(args, lambda stdout, stderr: RunOutput(stdout=stdout, stderr=stderr))

    async def create_volume(self, name: VolumeConfig | Mapping[str, Any] | str) -> Volume:
        """Create a named volume.

        The name printed by the runtime becomes the volume's name.
        """
        args = build_volume_args(name)

        def on_complete(stdout: str, stderr: str) -> Volume:
            return Volume(name=_identifier(stdout, args), status=ResourceStatus.ALIVE)

        volume = await self._run(args, on_complete)
        logger.info("Volume %s created", volume.name)
        return volume

    async def create_network(self, options: NetworkConfig | Mapping[str, Any] | str) -> Network:
        """Create a network from options or a bare network name."""
        config = NetworkConfig.coerce(options)
        args = build_network_args(config)

        def on_complete(stdout: str, stderr: str) -> Network:
            return Network(
                id=_identifier(stdout, args),
                name=str(config.name),
                status=ResourceStatus.ALIVE,
            )

        network = await self._run(args, on_complete)
        logger.info("Network %s (%s) created", network.name, network.id)
        return network

    async def start_container(self, container: Container) -> Container:
        """Start a created container. Returns a new entity with status "started"."""
        args = build_start_container_args(container.id)
        await self._run(args, _ignore_output)
        logger.info("Container %s started", container.id)
        return replace(container, status=ContainerStatus.STARTED)

    async def remove_container(self, container: Container, force: bool = False) -> Container:
        """Remove a container. ``force`` also removes a running one."""
        args = build_remove_container_args(container.id, force=force)
        await self._run(args, _ignore_output)
        logger.info("Container %s removed", container.id)
        return replace(container, status=ContainerStatus.REMOVED)

    async def remove_volume(self, volume: Volume) -> Volume:
        args = build_remove_volume_args(volume.name)
        await self._run(args, _ignore_output)
        logger.info("Volume %s removed", volume.name)
        return replace(volume, status=ResourceStatus.REMOVED)

    async def remove_network(self, network: Network) -> Network:
        args = build_remove_network_args(network.id)
        await self._run(args, _ignore_output)
        logger.info("Network %s removed", network.name)
        return replace(network, status=ResourceStatus.REMOVED)

    async def _run(self, args: list[str], on_complete: Callable[[str, str], T]) -> T:
        return await run_process(
            self.executable,
            args,
            on_complete,
            env=self.config.process_env(),
            cwd=self.config.cwd,
        )


def _container_config(
    options: ContainerConfig | Mapping[str, Any] | None,
) -> ContainerConfig | None:
    if isinstance(options, Mapping):
        return ContainerConfig.from_dict(options)
    return options


def _identifier(stdout: str, args: Sequence[str], required: bool = True) -> str:
    """Resource identifier printed by the runtime, without the trailing newline."""
    identifier = stdout.strip()
    if required and not identifier:
        raise OutputError(
            f"Expected an identifier in the output of {' '.join(args)}, got nothing",
            args=args,
            returncode=0,
            stdout=stdout,
        )
    return identifier


def _ignore_output(stdout: str, stderr: str) -> None:
    return None
