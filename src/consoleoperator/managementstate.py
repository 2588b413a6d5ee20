"""Dispatch of reconciliation according to the operator's management
state.
"""

from __future__ import annotations

__all__ = (
    "ManagementState",
    "ManagementStateController",
    "OperatorStateReader",
    "handle_management_state",
)

import enum
from collections.abc import Mapping
from typing import Any, Protocol

from consoleoperator.errors import (
    OperatorStateReadError,
    UnknownManagementStateError,
)


class ManagementState(str, enum.Enum):
    """Values of ``spec.managementState`` in an operator configuration."""

    MANAGED = "Managed"
    UNMANAGED = "Unmanaged"
    REMOVED = "Removed"


class ManagementStateController(Protocol):
    """The reconciliation behaviors selected by the management state.

    Each method receives the kopf-style ``stopped`` flag of the current
    reconciliation (an object with an ``is_set()`` method, or `None`) and is
    responsible for honoring it during blocking work.
    """

    def handle_managed(self, stopped: Any) -> Any: ...

    def handle_unmanaged(self, stopped: Any) -> Any: ...

    def handle_removed(self, stopped: Any) -> Any: ...


class OperatorStateReader(Protocol):
    """Read access to the operator configuration's ``spec``."""

    def get_operator_spec(self) -> Mapping[str, Any]: ...


def handle_management_state(
    controller: ManagementStateController,
    operator_client: OperatorStateReader,
    stopped: Any = None,
) -> Any:
    """Invoke the controller's handler matching the declared management
    state, returning its result unmodified.

    Parameters
    ----------
    controller
        Implements ``handle_managed``, ``handle_unmanaged`` and
        ``handle_removed``.
    operator_client
        Reads the operator configuration (see
        `consoleoperator.k8s.KubernetesOperatorStateReader`).
    stopped
        Cancellation flag passed through to the handler.

    Raises
    ------
    consoleoperator.errors.OperatorStateReadError
        Raised if the operator configuration can't be read. No handler is
        invoked.
    consoleoperator.errors.UnknownManagementStateError
        Raised if the declared state is not a known `ManagementState`.
    """
    try:
        operator_spec = operator_client.get_operator_spec()
    except Exception as e:
        raise OperatorStateReadError(
            f"failed to retrieve operator config: {e}"
        ) from e

    declared = operator_spec.get("managementState")
    try:
        management_state = ManagementState(declared)
    except ValueError as e:
        raise UnknownManagementStateError(declared) from e

    if management_state is ManagementState.MANAGED:
        return controller.handle_managed(stopped)
    elif management_state is ManagementState.UNMANAGED:
        return controller.handle_unmanaged(stopped)
    else:
        return controller.handle_removed(stopped)
