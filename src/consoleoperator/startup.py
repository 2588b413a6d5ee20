"""Code intended to run on start-up, before running any handlers."""

__all__ = ("start_operator",)

from typing import Any

import structlog

from consoleoperator import __version__, state
from consoleoperator.baseaddress import get_console_base_address
from consoleoperator.errors import ConsoleOperatorError
from consoleoperator.k8s import KubernetesConfigMapLookup, create_k8sclient


def start_operator(logger: Any | None = None) -> None:
    """Log the operator configuration and the console base address known
    at start-up.

    A missing or invalid console configuration is not fatal here; it is
    reported again by the ConfigMap handlers once the ConfigMap changes.
    """
    if logger is None:
        logger = structlog.getLogger(__name__)

    logger.info(
        f"Starting console-operator {__version__} for configmap "
        f"{state.console_namespace}/{state.console_config_map_name}"
    )

    lookup = KubernetesConfigMapLookup(create_k8sclient())
    try:
        url = get_console_base_address(
            lookup,
            namespace=state.console_namespace,
            name=state.console_config_map_name,
            key=state.console_config_key,
            logger=logger,
        )
    except ConsoleOperatorError:
        logger.exception("Could not resolve the console base address")
        return

    if url.geturl():
        logger.info(f"Console base address: {url.geturl()}")
