"""Resolution of the console's public base address from the console
configuration ConfigMap.
"""

from __future__ import annotations

__all__ = ("ConfigMapLookup", "get_console_base_address")

from collections.abc import Mapping
from typing import Any, Protocol
from urllib.parse import SplitResult

import structlog

from consoleoperator import state
from consoleoperator.consoleserver import parse_console_config
from consoleoperator.errors import (
    ConsoleConfigDecodeError,
    ConsoleConfigNotFoundError,
    InvalidURLError,
    MissingConsoleConfigDataError,
)
from consoleoperator.urls import parse_url


class ConfigMapLookup(Protocol):
    """Read-only access to ConfigMap bodies by namespace and name.

    Implementations raise an exception if the ConfigMap doesn't exist.
    """

    def get(self, namespace: str, name: str) -> Mapping[str, Any]: ...


def get_console_base_address(
    lookup: ConfigMapLookup,
    *,
    namespace: str = state.CONSOLE_NAMESPACE,
    name: str = state.CONSOLE_CONFIG_MAP_NAME,
    key: str = state.CONSOLE_CONFIG_KEY,
    logger: Any | None = None,
) -> SplitResult:
    """Get the console's public base address from the console configuration
    ConfigMap.

    Parameters
    ----------
    lookup
        Read-only ConfigMap lookup (see `consoleoperator.k8s`).
    namespace : `str`
        Namespace of the console configuration ConfigMap.
    name : `str`
        Name of the console configuration ConfigMap.
    key : `str`
        The ConfigMap data key holding ``console-config.yaml``.
    logger : optional
        Logger to use. Defaults to a structlog logger.

    Returns
    -------
    url : `urllib.parse.SplitResult`
        The ``clusterInfo.consoleBaseAddress``. This is an empty URL if the
        address isn't set yet, which callers must treat as unknown.

    Raises
    ------
    consoleoperator.errors.ConsoleConfigNotFoundError
        Raised if the ConfigMap can't be retrieved (retryable).
    consoleoperator.errors.MissingConsoleConfigDataError
        Raised if the ConfigMap has no (or an empty) ``key`` (retryable).
    consoleoperator.errors.ConsoleConfigDecodeError
        Raised if the configuration document is malformed.
    consoleoperator.errors.InvalidURLError
        Raised if the base address is not a valid URL.
    """
    if logger is None:
        logger = structlog.getLogger(__name__)

    try:
        config_map = lookup.get(namespace, name)
    except Exception as e:
        raise ConsoleConfigNotFoundError(
            f"failed to get configmap {namespace}/{name}: {e}",
            namespace=namespace,
            name=name,
        ) from e

    config_yaml = (config_map.get("data") or {}).get(key)
    if not config_yaml:
        raise MissingConsoleConfigDataError(
            f"failed to find console config data under {key!r} in "
            f"configmap {namespace}/{name}",
            key=key,
        )

    try:
        config = parse_console_config(config_yaml)
    except ConsoleConfigDecodeError as e:
        raise ConsoleConfigDecodeError(
            f"failed to parse console configuration from configmap "
            f"{namespace}/{name}: {e}"
        ) from e

    base_address = config.cluster_info.console_base_address
    try:
        url = parse_url(base_address)
    except InvalidURLError as e:
        raise InvalidURLError(
            e.url, f"failed to parse console base address: {e.reason}"
        ) from e

    if not url.geturl():
        logger.info("Console base address is not set yet")
    else:
        logger.debug(f"Console base address: {url.geturl()}")
    return url
