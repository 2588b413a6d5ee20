"""Event filters deciding which watch events reach reconciliation.

Filters run on the shared event-delivery path of a watch: they never raise
and never block. A payload that carries no object metadata doesn't match;
the failure is reported to the ``on_error`` sink (logged by default).
"""

from __future__ import annotations

__all__ = (
    "EventFilter",
    "as_when",
    "exclude_names_filter",
    "include_names_filter",
    "label_filter",
)

from collections.abc import Callable, Mapping
from typing import Any

import structlog

from consoleoperator.errors import IdentityError
from consoleoperator.identity import Identity, resolve_payload

EventFilter = Callable[[Any], bool]
ErrorSink = Callable[[IdentityError], None]


def _log_identity_error(error: IdentityError) -> None:
    logger = structlog.getLogger(__name__)
    logger.error(str(error))


def _identify(obj: Any, on_error: ErrorSink | None) -> Identity | None:
    try:
        return resolve_payload(obj).identity
    except IdentityError as e:
        (on_error or _log_identity_error)(e)
        return None


def include_names_filter(
    *names: str, on_error: ErrorSink | None = None
) -> EventFilter:
    """Return a filter that matches objects whose name is one of ``names``.

    Parameters
    ----------
    *names : `str`
        Object names to admit. Order and duplicates don't matter.
    on_error : callable, optional
        Called with the `~consoleoperator.errors.IdentityError` when a
        payload has no object metadata. Defaults to logging the error.
    """
    name_set = frozenset(names)

    def _filter(obj: Any) -> bool:
        identity = _identify(obj, on_error)
        if identity is None:
            return False
        return identity.name in name_set

    return _filter


def exclude_names_filter(
    *names: str, on_error: ErrorSink | None = None
) -> EventFilter:
    """Inverse of `include_names_filter`."""
    include = include_names_filter(*names, on_error=on_error)

    def _filter(obj: Any) -> bool:
        return not include(obj)

    return _filter


def label_filter(
    labels: Mapping[str, str], on_error: ErrorSink | None = None
) -> EventFilter:
    """Return a filter that matches objects carrying every label in
    ``labels`` with exactly the same value.

    A label that is missing from the object is a mismatch.
    """
    required = dict(labels)

    def _filter(obj: Any) -> bool:
        identity = _identify(obj, on_error)
        if identity is None:
            return False
        obj_labels = identity.labels
        for key, value in required.items():
            if key not in obj_labels or obj_labels[key] != value:
                return False
        return True

    return _filter


def as_when(event_filter: EventFilter) -> Callable[..., bool]:
    """Adapt a filter to the signature of kopf's ``when=`` callbacks,
    which receive the resource body as a keyword argument.
    """

    def _when(*, body: Any, **kwargs: Any) -> bool:
        return event_filter(body)

    return _when
