"""Helpers for interacting with Kubernetes APIs."""

__all__ = (
    "IndexConfigMapLookup",
    "KubernetesConfigMapLookup",
    "KubernetesOperatorStateReader",
    "StaticConfigMapLookup",
    "create_k8sclient",
    "get_config_map",
    "get_operator_config",
)

import json
from collections.abc import Mapping
from typing import Any

import kopf
import kubernetes

from consoleoperator import state


def create_k8sclient() -> kubernetes.client:
    """Get a Kubernetes client configured with available cluster
    authentication.

    If in-cluster authentication is available, that is used. Otherwise
    this function falls-back to using a kubectl config file, which is
    appropriate for development.
    """
    try:
        kubernetes.config.load_incluster_config()
    except Exception:
        kubernetes.config.load_kube_config()
    return kubernetes.client


def get_config_map(
    *,
    namespace: str,
    name: str,
    k8s_client: Any,
) -> dict[str, Any]:
    """Get a ConfigMap resource as a raw manifest.

    Parameters
    ----------
    namespace : `str`
        The Kubernetes namespace of the ConfigMap.
    name : `str`
        The name of the ConfigMap.
    k8s_client
        A Kubernetes client (see `create_k8sclient`).

    Raises
    ------
    kubernetes.client.exceptions.ApiException
        Raised if the ConfigMap can't be read, including when it doesn't
        exist (status 404).
    """
    api = k8s_client.CoreV1Api()
    result = api.read_namespaced_config_map(
        name=name, namespace=namespace, _preload_content=False
    )
    return json.loads(result.data)


def get_operator_config(
    *,
    name: str,
    k8s_client: Any,
) -> dict[str, Any]:
    """Get the cluster-scoped ``consoles.operator.openshift.io`` resource
    as a raw manifest.
    """
    api = k8s_client.CustomObjectsApi()
    return api.get_cluster_custom_object(
        group="operator.openshift.io",
        version="v1",
        plural="consoles",
        name=name,
    )


class KubernetesConfigMapLookup:
    """ConfigMap lookup that reads from the Kubernetes API server."""

    def __init__(self, k8s_client: Any) -> None:
        self._k8s_client = k8s_client

    def get(self, namespace: str, name: str) -> dict[str, Any]:
        return get_config_map(
            namespace=namespace, name=name, k8s_client=self._k8s_client
        )


class IndexConfigMapLookup:
    """ConfigMap lookup over a kopf index keyed by ``(namespace, name)``.

    The index is kopf's locally mirrored copy of the watched ConfigMaps, so
    a lookup may return slightly stale data.
    """

    def __init__(self, index: kopf.Index) -> None:
        self._index = index

    def get(self, namespace: str, name: str) -> Mapping[str, Any]:
        store = self._index.get((namespace, name))
        if not store:
            raise KeyError(f"configmap {namespace}/{name} not found")
        return next(iter(store))


class StaticConfigMapLookup:
    """ConfigMap lookup over a fixed collection of ConfigMap bodies."""

    def __init__(self, *config_maps: Mapping[str, Any]) -> None:
        self._config_maps = {
            (cm["metadata"]["namespace"], cm["metadata"]["name"]): cm
            for cm in config_maps
        }

    def get(self, namespace: str, name: str) -> Mapping[str, Any]:
        try:
            return self._config_maps[(namespace, name)]
        except KeyError:
            raise KeyError(
                f"configmap {namespace}/{name} not found"
            ) from None


class KubernetesOperatorStateReader:
    """Reads the ``spec`` of the console operator configuration."""

    def __init__(
        self, k8s_client: Any, name: str = state.operator_config_name
    ) -> None:
        self._k8s_client = k8s_client
        self._name = name

    def get_operator_spec(self) -> Mapping[str, Any]:
        operator_config = get_operator_config(
            name=self._name, k8s_client=self._k8s_client
        )
        return operator_config.get("spec") or {}
