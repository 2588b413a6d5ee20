"""Kopf handlers that mirror the console configuration ConfigMap and react
to changes of the console's public base address.
"""

__all__ = ("console_config_maps", "handle_console_config_change")

from typing import Any

import kopf

from .. import state
from ..baseaddress import get_console_base_address
from ..errors import ConsoleConfigNotFoundError, ConsoleOperatorError
from ..filters import as_when, include_names_filter
from ..identity import DeletedLastKnown, resolve_payload
from ..k8s import IndexConfigMapLookup

_console_config_filter = as_when(
    include_names_filter(state.console_config_map_name)
)


@kopf.index("", "v1", "configmaps", when=_console_config_filter)  # type: ignore[arg-type]
def console_config_maps(
    *,
    namespace: str,
    name: str,
    body: kopf.Body,
    **kwargs: Any,
) -> dict[tuple[str, str], dict[str, Any]]:
    """Index the console configuration ConfigMap by ``(namespace, name)``."""
    return {(namespace, name): dict(body)}


@kopf.on.event("", "v1", "configmaps", when=_console_config_filter)  # type: ignore[arg-type]
def handle_console_config_change(
    *,
    event: dict[str, Any],
    namespace: str,
    name: str,
    console_config_maps: kopf.Index,
    logger: Any,
    **kwargs: Any,
) -> None:
    """Resolve and log the console base address when the console
    configuration ConfigMap changes.

    Parameters
    ----------
    event : `dict`
        The raw watch event.
    namespace : `str`
        The namespace of the ConfigMap.
    name : `str`
        The name of the ConfigMap.
    console_config_maps : `kopf.Index`
        The index of console configuration ConfigMaps.
    logger : `Any`
        The kopf logger.
    kwargs : `Any`
        Additional keyword arguments provided by kopf.
    """
    if namespace != state.console_namespace:
        return

    if isinstance(resolve_payload(event), DeletedLastKnown):
        logger.warning(f"Console configuration {namespace}/{name} deleted")
        return

    try:
        url = get_console_base_address(
            IndexConfigMapLookup(console_config_maps),
            namespace=namespace,
            name=name,
            key=state.console_config_key,
            logger=logger,
        )
    except ConsoleConfigNotFoundError:
        logger.info(f"Console configuration {namespace}/{name} not indexed yet")
        return
    except ConsoleOperatorError as e:
        logger.error(f"Invalid console configuration: {e}")
        return

    if url.geturl():
        logger.info(f"Console base address: {url.geturl()}")
