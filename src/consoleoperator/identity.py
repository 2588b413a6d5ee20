"""Resolution of watch-event payloads into object identities.

A payload delivered on a watch path is either the live object or, for a
deletion, a tombstone wrapping the last state known before the object
disappeared. Both are resolved once, here, into `LiveObject` or
`DeletedLastKnown`; filters only ever look at the resulting `Identity`.
"""

from __future__ import annotations

__all__ = (
    "DeletedLastKnown",
    "Identity",
    "LiveObject",
    "WatchedObject",
    "resolve_payload",
)

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Union

from consoleoperator.errors import IdentityError

DELETED = "DELETED"
"""Raw watch event type of a deletion."""


@dataclass(frozen=True)
class Identity:
    """Name and labels of a Kubernetes object."""

    name: str
    labels: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({})
    )


@dataclass(frozen=True)
class LiveObject:
    """An object as currently present in the cluster."""

    identity: Identity


@dataclass(frozen=True)
class DeletedLastKnown:
    """The last known state of a deleted object."""

    identity: Identity


WatchedObject = Union[LiveObject, DeletedLastKnown]


def resolve_payload(obj: Any) -> WatchedObject:
    """Resolve a watch payload into a `LiveObject` or `DeletedLastKnown`.

    Parameters
    ----------
    obj
        One of:

        - a raw watch event, ``{"type": ..., "object": {...}}``; a
          ``DELETED`` event is treated as a tombstone,
        - a `DeletedLastKnown` or `LiveObject` (returned as-is),
        - a resource body (a `dict` or `kopf.Body`) with a ``metadata``
          mapping,
        - a `kubernetes` client model with a ``metadata`` attribute.

    Raises
    ------
    consoleoperator.errors.IdentityError
        Raised if no object metadata can be found in ``obj``.
    """
    if isinstance(obj, (LiveObject, DeletedLastKnown)):
        return obj

    if isinstance(obj, Mapping) and "object" in obj and "type" in obj:
        identity = _extract_identity(obj["object"])
        if obj["type"] == DELETED:
            return DeletedLastKnown(identity)
        return LiveObject(identity)

    return LiveObject(_extract_identity(obj))


def _extract_identity(obj: Any) -> Identity:
    if isinstance(obj, Mapping):
        metadata = obj.get("metadata")
        if not isinstance(metadata, Mapping):
            raise IdentityError(obj)
        name = metadata.get("name")
        labels = metadata.get("labels")
    else:
        metadata = getattr(obj, "metadata", None)
        if metadata is None or not hasattr(metadata, "name"):
            raise IdentityError(obj)
        name = metadata.name
        labels = getattr(metadata, "labels", None)

    if labels is not None and not isinstance(labels, Mapping):
        raise IdentityError(obj)

    return Identity(
        name=name or "",
        labels=MappingProxyType(dict(labels or {})),
    )
