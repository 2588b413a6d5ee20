"""Exception types raised by the console operator.

Retryable conditions derive from `kopf.TemporaryError` and fatal ones from
`kopf.PermanentError`, so that kopf handlers can let them propagate and
the reactor will retry (or give up on) the reconciliation accordingly.
"""

__all__ = (
    "ConsoleConfigDecodeError",
    "ConsoleConfigNotFoundError",
    "ConsoleOperatorError",
    "IdentityError",
    "InvalidURLError",
    "MissingConsoleConfigDataError",
    "OperatorStateReadError",
    "UnknownManagementStateError",
)

import kopf


class ConsoleOperatorError(Exception):
    """Base class for errors raised by the console operator."""


class ConsoleConfigNotFoundError(ConsoleOperatorError, kopf.TemporaryError):
    """The console configuration ConfigMap could not be retrieved.

    The ConfigMap may not exist yet while the cluster converges.
    """

    def __init__(
        self, message: str, *, namespace: str, name: str, delay: float = 10
    ) -> None:
        super().__init__(message, delay=delay)
        self.namespace = namespace
        self.name = name


class MissingConsoleConfigDataError(
    ConsoleOperatorError, kopf.TemporaryError
):
    """The ConfigMap exists but the console configuration key is absent or
    empty.
    """

    def __init__(self, message: str, *, key: str, delay: float = 10) -> None:
        super().__init__(message, delay=delay)
        self.key = key


class ConsoleConfigDecodeError(ConsoleOperatorError, kopf.PermanentError):
    """The console configuration document is not valid YAML, or its
    structure doesn't match the expected document layout.
    """


class InvalidURLError(ConsoleOperatorError, kopf.PermanentError, ValueError):
    """A string could not be parsed as a URL reference."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"parse {url!r}: {reason}")
        self.url = url
        self.reason = reason


class OperatorStateReadError(ConsoleOperatorError, kopf.TemporaryError):
    """The operator configuration (and its management state) could not be
    read.
    """


class UnknownManagementStateError(ConsoleOperatorError, kopf.PermanentError):
    """The declared management state is none of the known values."""

    def __init__(self, state: object) -> None:
        super().__init__(f"console is in an unknown state: {state}")
        self.state = state


class IdentityError(ConsoleOperatorError, ValueError):
    """An event payload doesn't carry Kubernetes object metadata."""

    def __init__(self, obj: object) -> None:
        super().__init__(f"Unexpected type {type(obj).__name__}")
        self.obj = obj
