"""Tests for the consoleoperator.k8s module, using fake Kubernetes
clients.
"""

from __future__ import annotations

import json
from types import SimpleNamespace
from typing import Any

import pytest
from kubernetes.client.exceptions import ApiException

from consoleoperator.baseaddress import get_console_base_address
from consoleoperator.errors import ConsoleConfigNotFoundError
from consoleoperator.k8s import (
    IndexConfigMapLookup,
    KubernetesConfigMapLookup,
    KubernetesOperatorStateReader,
)
from consoleoperator.managementstate import handle_management_state

CONFIG_MAP = {
    "apiVersion": "v1",
    "kind": "ConfigMap",
    "metadata": {"name": "console-config", "namespace": "openshift-console"},
    "data": {
        "console-config.yaml": (
            "clusterInfo:\n  consoleBaseAddress: https://example.com\n"
        )
    },
}


class FakeCoreV1Api:
    def __init__(self, config_maps: list[dict[str, Any]]) -> None:
        self.config_maps = {
            (cm["metadata"]["namespace"], cm["metadata"]["name"]): cm
            for cm in config_maps
        }

    def read_namespaced_config_map(
        self, *, name: str, namespace: str, _preload_content: bool
    ) -> Any:
        try:
            config_map = self.config_maps[(namespace, name)]
        except KeyError:
            raise ApiException(status=404, reason="Not Found") from None
        return SimpleNamespace(data=json.dumps(config_map).encode("utf-8"))


class FakeCustomObjectsApi:
    def __init__(self, objects: dict[str, dict[str, Any]]) -> None:
        self.objects = objects

    def get_cluster_custom_object(
        self, *, group: str, version: str, plural: str, name: str
    ) -> dict[str, Any]:
        assert (group, version, plural) == (
            "operator.openshift.io",
            "v1",
            "consoles",
        )
        try:
            return self.objects[name]
        except KeyError:
            raise ApiException(status=404, reason="Not Found") from None


def fake_client(
    config_maps: list[dict[str, Any]] | None = None,
    operator_configs: dict[str, dict[str, Any]] | None = None,
) -> Any:
    core = FakeCoreV1Api(config_maps or [])
    custom = FakeCustomObjectsApi(operator_configs or {})
    return SimpleNamespace(
        CoreV1Api=lambda: core, CustomObjectsApi=lambda: custom
    )


def test_kubernetes_config_map_lookup() -> None:
    lookup = KubernetesConfigMapLookup(fake_client([CONFIG_MAP]))
    assert lookup.get("openshift-console", "console-config") == CONFIG_MAP
    url = get_console_base_address(lookup)
    assert url.geturl() == "https://example.com"


def test_kubernetes_config_map_lookup_not_found() -> None:
    lookup = KubernetesConfigMapLookup(fake_client())
    with pytest.raises(ConsoleConfigNotFoundError) as excinfo:
        get_console_base_address(lookup)
    assert isinstance(excinfo.value.__cause__, ApiException)
    assert excinfo.value.__cause__.status == 404


def test_index_config_map_lookup() -> None:
    index = {("openshift-console", "console-config"): [CONFIG_MAP]}
    lookup = IndexConfigMapLookup(index)  # type: ignore[arg-type]
    assert get_console_base_address(lookup).geturl() == "https://example.com"

    with pytest.raises(KeyError):
        lookup.get("openshift-console", "other")


def test_index_config_map_lookup_empty_store() -> None:
    index: dict[tuple[str, str], list[dict[str, Any]]] = {
        ("openshift-console", "console-config"): []
    }
    lookup = IndexConfigMapLookup(index)  # type: ignore[arg-type]
    with pytest.raises(ConsoleConfigNotFoundError):
        get_console_base_address(lookup)


class RemovingController:
    def handle_managed(self, stopped: Any) -> str:
        return "managed"

    def handle_unmanaged(self, stopped: Any) -> str:
        return "unmanaged"

    def handle_removed(self, stopped: Any) -> str:
        return "removed"


def test_operator_state_reader() -> None:
    client = fake_client(
        operator_configs={
            "cluster": {
                "apiVersion": "operator.openshift.io/v1",
                "kind": "Console",
                "metadata": {"name": "cluster"},
                "spec": {"managementState": "Removed"},
            }
        }
    )
    reader = KubernetesOperatorStateReader(client, name="cluster")
    assert reader.get_operator_spec() == {"managementState": "Removed"}
    assert handle_management_state(RemovingController(), reader) == "removed"


def test_operator_state_reader_without_spec() -> None:
    client = fake_client(operator_configs={"cluster": {"metadata": {}}})
    reader = KubernetesOperatorStateReader(client, name="cluster")
    assert reader.get_operator_spec() == {}
