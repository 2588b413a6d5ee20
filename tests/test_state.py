"""Tests for the consoleoperator.state module and package metadata."""

from types import SimpleNamespace

import consoleoperator
from consoleoperator import state
from consoleoperator.k8s import KubernetesOperatorStateReader


def test_defaults() -> None:
    assert state.CONSOLE_NAMESPACE == "openshift-console"
    assert state.CONSOLE_CONFIG_MAP_NAME == "console-config"
    assert state.console_config_key == "console-config.yaml"


def test_version() -> None:
    assert isinstance(consoleoperator.__version__, str)
    assert consoleoperator.__version__


def test_operator_state_reader_default_name() -> None:
    requested = []

    def get_cluster_custom_object(**kwargs: str) -> dict:
        requested.append(kwargs["name"])
        return {"spec": {"managementState": "Managed"}}

    custom = SimpleNamespace(get_cluster_custom_object=get_cluster_custom_object)
    client = SimpleNamespace(CustomObjectsApi=lambda: custom)
    reader = KubernetesOperatorStateReader(client)
    assert reader.get_operator_spec() == {"managementState": "Managed"}
    assert requested == [state.operator_config_name]
