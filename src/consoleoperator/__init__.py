"""Reconciliation decision logic for the OpenShift console operator."""

from importlib.metadata import PackageNotFoundError, version

__all__ = ("__version__",)

try:
    __version__ = version("console-operator")
except PackageNotFoundError:
    __version__ = "unknown"
