"""Operator configuration as module-level attributes."""

import os

CONSOLE_NAMESPACE = "openshift-console"
CONSOLE_CONFIG_MAP_NAME = "console-config"
CONSOLE_CONFIG_KEY = "console-config.yaml"

console_namespace = os.environ.get("CONSOLE_NAMESPACE", CONSOLE_NAMESPACE)
"""The namespace where the console and its configuration are deployed."""

console_config_map_name = os.environ.get(
    "CONSOLE_CONFIG_MAP_NAME", CONSOLE_CONFIG_MAP_NAME
)
"""The name of the ConfigMap holding ``console-config.yaml``."""

console_config_key = CONSOLE_CONFIG_KEY
"""The ConfigMap data key holding the console server configuration."""

operator_config_name = os.environ.get("CONSOLE_OPERATOR_CONFIG_NAME", "cluster")
"""The name of the cluster-scoped ``consoles.operator.openshift.io``
resource that declares the management state.
"""
