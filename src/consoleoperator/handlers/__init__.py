"""Kopf handlers for the console-operator."""

__all__ = (
    "configure_operator",
    "console_config_maps",
    "handle_console_config_change",
)

from typing import Any

import kopf

from consoleoperator.handlers.consoleconfig import (
    console_config_maps,
    handle_console_config_change,
)
from consoleoperator.startup import start_operator


@kopf.on.startup()
def configure_operator(*, logger: Any, **kwargs: Any) -> None:
    start_operator(logger=logger)
