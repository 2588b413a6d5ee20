"""Cluster topology and capability checks."""

from __future__ import annotations

__all__ = (
    "CAPABILITY_CONSOLE",
    "CAPABILITY_INGRESS",
    "CAPABILITY_OPENSHIFT_SAMPLES",
    "EXTERNAL_TOPOLOGY_MODE",
    "HIGHLY_AVAILABLE_TOPOLOGY_MODE",
    "SINGLE_REPLICA_TOPOLOGY_MODE",
    "TopologyFact",
    "is_external_control_plane_with_ingress_disabled",
)

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

HIGHLY_AVAILABLE_TOPOLOGY_MODE = "HighlyAvailable"
SINGLE_REPLICA_TOPOLOGY_MODE = "SingleReplica"
EXTERNAL_TOPOLOGY_MODE = "External"

CAPABILITY_INGRESS = "Ingress"
CAPABILITY_OPENSHIFT_SAMPLES = "openshift-samples"
CAPABILITY_CONSOLE = "Console"


def is_external_control_plane_with_ingress_disabled(
    topology: str, enabled_capabilities: Iterable[str]
) -> bool:
    """Return `True` if the control plane is hosted externally (for example
    with HyperShift) and the ingress capability is not enabled.
    """
    return (
        topology == EXTERNAL_TOPOLOGY_MODE
        and CAPABILITY_INGRESS not in set(enabled_capabilities)
    )


@dataclass(frozen=True)
class TopologyFact:
    """The control plane topology and enabled capabilities of a cluster."""

    control_plane_topology: str
    enabled_capabilities: frozenset[str]

    @classmethod
    def from_resources(
        cls,
        infrastructure: Mapping[str, Any],
        cluster_version: Mapping[str, Any],
    ) -> TopologyFact:
        """Read the topology from the ``cluster`` Infrastructure and
        ClusterVersion resource bodies.

        Missing status fields are read as an empty topology and no enabled
        capabilities.
        """
        infra_status = infrastructure.get("status") or {}
        capabilities = (
            (cluster_version.get("status") or {}).get("capabilities") or {}
        )
        return cls(
            control_plane_topology=infra_status.get(
                "controlPlaneTopology", ""
            ),
            enabled_capabilities=frozenset(
                capabilities.get("enabledCapabilities") or ()
            ),
        )

    @property
    def external_control_plane_with_ingress_disabled(self) -> bool:
        return is_external_control_plane_with_ingress_disabled(
            self.control_plane_topology, self.enabled_capabilities
        )
