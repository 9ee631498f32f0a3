"""Command line construction for the container runtime.

Turns resource options into argument lists ready for the process runner.
All option validation happens here so a bad option never spawns a process.
Builders are pure: the same options always produce the same arguments.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import Any

from cywp.docker.config import (
    ContainerConfig,
    EnvironmentVariable,
    HealthCheck,
    NetworkConfig,
    PortMapping,
    VolumeConfig,
    VolumeMount,
)
from cywp.errors import ConfigurationError

IMAGE_EXAMPLE = "ContainerConfig(image='wordpress:latest')"
NAME_EXAMPLE = "ContainerConfig(image='wordpress:latest', name='cywp-wp', network='cywp-network')"
HEALTH_EXAMPLE = (
    "ContainerConfig(\n\timage='mysql:5.7',\n"
    "\thealth=HealthCheck(command='mysqladmin ping', retries=3),\n)"
)
VOLUMES_EXAMPLE = (
    "ContainerConfig(\n\timage='wordpress:latest',\n\tvolumes=[\n"
    "\t\tVolumeMount(host='./example.js', docker='/usr/bin/example.js'),\n\t],\n)"
)
ENVIRONMENT_EXAMPLE = (
    "ContainerConfig(\n\timage='wordpress:latest',\n\tenvironment_variables=[\n"
    "\t\tEnvironmentVariable(name='DOCKER_ENV', value='foo'),\n\t],\n)"
)
PORTS_EXAMPLE = (
    "ContainerConfig(\n\timage='wordpress:latest',\n\texpose_ports=[\n"
    "\t\tPortMapping(host='8080', docker='80'),\n\t],\n)"
)
COMMANDS_EXAMPLE = "ContainerConfig(image='alpine:latest', commands=['echo', 'hello'], rm=True)"
NETWORK_EXAMPLE = "NetworkConfig(name='cywp-network')"
VOLUME_EXAMPLE = "VolumeConfig(name='cywp-volume')"


def normalize_container_config(config: ContainerConfig | None) -> ContainerConfig:
    """Validate container options and return them in fully typed form.

    Mapping entries in list options are converted to their dataclasses and
    sequences become tuples, so the result is safe to keep on an entity.

    Raises:
        ConfigurationError: If a required option is missing or malformed.
    """
    if config is None or not config.image:
        raise ConfigurationError("options.image must be provided!", IMAGE_EXAMPLE, "image")

    _validate_string(config.image, "image", IMAGE_EXAMPLE)
    _validate_string(config.name, "name", NAME_EXAMPLE)
    _validate_string(config.network, "network", NAME_EXAMPLE)

    health = _validate_health(config.health)
    volumes = tuple(
        VolumeMount(host=host, docker=docker)
        for host, docker in _pairs(
            config.volumes, "volumes", ("host", "docker"), VOLUMES_EXAMPLE
        )
    )
    environment = tuple(
        EnvironmentVariable(name=name, value=value)
        for name, value in _pairs(
            config.environment_variables,
            "environment_variables",
            ("name", "value"),
            ENVIRONMENT_EXAMPLE,
        )
    )
    ports = tuple(
        PortMapping(host=host, docker=docker)
        for host, docker in _pairs(
            config.expose_ports, "expose_ports", ("host", "docker"), PORTS_EXAMPLE
        )
    )
    commands = _validate_commands(config.commands)

    return replace(
        config,
        volumes=volumes,
        environment_variables=environment,
        expose_ports=ports,
        health=health,
        rm=bool(config.rm),
        commands=commands,
    )


def build_container_args(
    config: ContainerConfig | None,
    run: bool = False,
    detach: bool = True,
) -> list[str]:
    """Build ``container create`` / ``container run`` arguments.

    Args:
        config: Container options.
        run: Start the container on creation (``container run``).
        detach: With ``run``, return as soon as the container starts
            instead of waiting for it to exit. Ignored without ``run``.

    Returns:
        Argument list, without the executable.

    Raises:
        ConfigurationError: If the options are invalid.
    """
    config = normalize_container_config(config)

    if run:
        args = ["container", "run"]
        if detach:
            args.append("--detach")
    else:
        args = ["container", "create"]

    if config.name:
        args.extend(["--name", config.name])

    if config.network:
        args.extend(["--net", config.network])

    if config.health is not None:
        health = config.health
        args.extend(["--health-cmd", str(health.command)])
        if health.interval:
            args.extend(["--health-interval", str(health.interval)])
        if health.retries:
            args.extend(["--health-retries", str(health.retries)])
        if health.start_period:
            args.extend(["--health-start-period", str(health.start_period)])
        if health.timeout:
            args.extend(["--health-timeout", str(health.timeout)])

    if config.rm:
        args.append("--rm")

    for volume in config.volumes:
        args.extend(["-v", f"{volume.host}:{volume.docker}"])

    for variable in config.environment_variables:
        args.extend(["-e", f"{variable.name}={variable.value}"])

    for port in config.expose_ports:
        args.extend(["-p", f"{port.host}:{port.docker}"])

    args.append(str(config.image))
    args.extend(config.commands)

    return args


def build_network_args(config: NetworkConfig | Mapping[str, Any] | str | None) -> list[str]:
    """Build ``network create`` arguments from options or a bare name.

    Raises:
        ConfigurationError: If no network name is given.
    """
    config = NetworkConfig.coerce(config)
    if not config.name:
        raise ConfigurationError("options.name must be provided!", NETWORK_EXAMPLE, "name")
    _validate_string(config.name, "name", NETWORK_EXAMPLE)

    return ["network", "create", config.name]


def build_volume_args(config: VolumeConfig | Mapping[str, Any] | str | None) -> list[str]:
    """Build ``volume create`` arguments from options or a bare name.

    Raises:
        ConfigurationError: If no volume name is given.
    """
    config = VolumeConfig.coerce(config)
    if not config.name:
        raise ConfigurationError("volume name must be provided!", VOLUME_EXAMPLE, "name")
    _validate_string(config.name, "name", VOLUME_EXAMPLE)

    return ["volume", "create", config.name]


def build_start_container_args(container_id: str) -> list[str]:
    return ["container", "start", _require_reference(container_id, "container id")]


def build_remove_container_args(container_id: str, force: bool = False) -> list[str]:
    args = ["container", "rm"]
    if force:
        args.append("--force")
    args.append(_require_reference(container_id, "container id"))
    return args


def build_remove_volume_args(name: str) -> list[str]:
    return ["volume", "rm", _require_reference(name, "volume name")]


def build_remove_network_args(network_id: str) -> list[str]:
    return ["network", "rm", _require_reference(network_id, "network id")]


def _require_reference(value: str | None, what: str) -> str:
    if not value or not isinstance(value, str):
        raise ConfigurationError(f"{what} must be provided to reference an existing resource")
    return value


def _validate_string(value: Any, option: str, example: str) -> None:
    """Reject a scalar option that is set but is not a string."""
    if value is not None and not isinstance(value, str):
        raise ConfigurationError(
            f"options.{option} must be a string, got {type(value).__name__}",
            example,
            option,
        )


def _validate_health(health: HealthCheck | Mapping[str, Any] | None) -> HealthCheck | None:
    if health is None:
        return None
    if isinstance(health, Mapping):
        health = HealthCheck.from_dict(health)
    if not isinstance(health, HealthCheck):
        raise ConfigurationError(
            "options.health must be a HealthCheck", HEALTH_EXAMPLE, "health"
        )

    if not health.command:
        raise ConfigurationError(
            "options.health.command must be defined to use options.health",
            HEALTH_EXAMPLE,
            "health.command",
        )
    for field_name in ("command", "interval", "start_period", "timeout"):
        _validate_string(getattr(health, field_name), f"health.{field_name}", HEALTH_EXAMPLE)

    retries = health.retries
    # bool is an int subclass but never a retry count
    if retries is not None and (isinstance(retries, bool) or not isinstance(retries, int)):
        raise ConfigurationError(
            f"options.health.retries must be an integer, got {retries!r}",
            HEALTH_EXAMPLE,
            "health.retries",
        )

    return health


def _pairs(
    items: Any,
    option: str,
    keys: tuple[str, str],
    example: str,
) -> list[tuple[str, str]]:
    """Extract ordered (first, second) pairs from a list option."""
    if items is None:
        return []
    if isinstance(items, (str, bytes)) or not isinstance(items, Sequence):
        raise ConfigurationError(f"options.{option} must be a list", example, option)

    pairs = []
    for item in items:
        if isinstance(item, Mapping):
            first, second = item.get(keys[0]), item.get(keys[1])
        else:
            first, second = getattr(item, keys[0], None), getattr(item, keys[1], None)

        if not first or not second:
            raise ConfigurationError(
                f"options.{option} must contain entries with {keys[0]} and {keys[1]}",
                example,
                option,
            )
        pairs.append((str(first), str(second)))

    return pairs


def _validate_commands(commands: Any) -> tuple[str, ...]:
    if commands is None:
        return ()
    if (
        isinstance(commands, (str, bytes))
        or not isinstance(commands, Sequence)
        or not all(isinstance(command, str) for command in commands)
    ):
        raise ConfigurationError(
            "options.commands must be a list of strings", COMMANDS_EXAMPLE, "commands"
        )
    return tuple(commands)
