"""Tests for the consoleoperator.startup module."""

from __future__ import annotations

import json
import logging
from types import SimpleNamespace
from typing import Any

import pytest
from kubernetes.client.exceptions import ApiException

from consoleoperator import startup


def fake_client(config_map: dict[str, Any] | None) -> Any:
    def read_namespaced_config_map(**kwargs: Any) -> Any:
        if config_map is None:
            raise ApiException(status=404, reason="Not Found")
        return SimpleNamespace(data=json.dumps(config_map))

    core = SimpleNamespace(read_namespaced_config_map=read_namespaced_config_map)
    return SimpleNamespace(CoreV1Api=lambda: core)


def test_start_operator(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    config_map = {
        "metadata": {"name": "console-config", "namespace": "openshift-console"},
        "data": {
            "console-config.yaml": (
                "clusterInfo:\n  consoleBaseAddress: https://example.com\n"
            )
        },
    }
    monkeypatch.setattr(
        startup, "create_k8sclient", lambda: fake_client(config_map)
    )
    logger = logging.getLogger("test_startup")
    with caplog.at_level(logging.INFO, logger="test_startup"):
        startup.start_operator(logger=logger)
    assert "Console base address: https://example.com" in caplog.text


def test_start_operator_without_config_map(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.setattr(startup, "create_k8sclient", lambda: fake_client(None))
    logger = logging.getLogger("test_startup")
    with caplog.at_level(logging.INFO, logger="test_startup"):
        startup.start_operator(logger=logger)
    assert "Could not resolve the console base address" in caplog.text
