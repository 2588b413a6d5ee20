"""The console server configuration document (``console-config.yaml``).

`parse_console_config` decodes the YAML document stored in the console
ConfigMap into a `ConsoleConfig`, `dump_console_config` serializes one back
to YAML and `build_console_config` assembles one from explicit settings.
None of these validate the values themselves (URLs and paths are plain
strings here).
"""

from __future__ import annotations

__all__ = (
    "Auth",
    "Brand",
    "ClusterInfo",
    "ConsoleConfig",
    "Customization",
    "Providers",
    "ServingInfo",
    "Session",
    "build_console_config",
    "dump_console_config",
    "parse_console_config",
)

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any, TypeVar

import yaml

from consoleoperator.errors import ConsoleConfigDecodeError

API_VERSION = "console.openshift.io/v1"
KIND = "ConsoleConfig"

DEFAULT_CLIENT_ID = "console"
DEFAULT_CLIENT_SECRET_FILE = "/var/oauth-config/clientSecret"
DEFAULT_BIND_ADDRESS = "https://[::]:8443"
DEFAULT_CERT_FILE = "/var/serving-cert/tls.crt"
DEFAULT_KEY_FILE = "/var/serving-cert/tls.key"


class Brand(str, enum.Enum):
    """Console branding, as in ``Console.spec.customization.brand``."""

    DEFAULT = ""
    OKD = "okd"
    OPENSHIFT = "openshift"
    OCP = "ocp"
    ONLINE = "online"
    DEDICATED = "dedicated"
    DEDICATED_LEGACY = "OpenShift"
    AZURE = "azure"
    ROSA = "ROSA"


def _key(name: str) -> Any:
    """Declare a string field stored under the document key ``name``."""
    return field(default="", metadata={"key": name})


@dataclass(frozen=True)
class Auth:
    client_id: str = _key("clientID")
    client_secret_file: str = _key("clientSecretFile")
    logout_redirect: str = _key("logoutRedirect")


@dataclass(frozen=True)
class ClusterInfo:
    console_base_address: str = _key("consoleBaseAddress")
    master_public_url: str = _key("masterPublicURL")


@dataclass(frozen=True)
class Customization:
    branding: str = _key("branding")
    documentation_base_url: str = _key("documentationBaseURL")


@dataclass(frozen=True)
class Providers:
    statuspage_id: str = _key("statuspageID")


@dataclass(frozen=True)
class ServingInfo:
    bind_address: str = _key("bindAddress")
    cert_file: str = _key("certFile")
    key_file: str = _key("keyFile")


@dataclass(frozen=True)
class Session:
    """Session settings, kept as an opaque mapping of string values."""

    values: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ConsoleConfig:
    """The root of the console server configuration document."""

    api_version: str = _key("apiVersion")
    kind: str = _key("kind")
    auth: Auth = field(default_factory=Auth, metadata={"key": "auth"})
    cluster_info: ClusterInfo = field(
        default_factory=ClusterInfo, metadata={"key": "clusterInfo"}
    )
    customization: Customization = field(
        default_factory=Customization, metadata={"key": "customization"}
    )
    providers: Providers = field(
        default_factory=Providers, metadata={"key": "providers"}
    )
    serving_info: ServingInfo = field(
        default_factory=ServingInfo, metadata={"key": "servingInfo"}
    )
    session: Session = field(
        default_factory=Session, metadata={"key": "session"}
    )


_SECTION_TYPES: dict[str, type] = {
    "auth": Auth,
    "cluster_info": ClusterInfo,
    "customization": Customization,
    "providers": Providers,
    "serving_info": ServingInfo,
    "session": Session,
}

T = TypeVar("T")


def parse_console_config(data: bytes | str) -> ConsoleConfig:
    """Parse a ``console-config.yaml`` document.

    Unknown keys are ignored and missing keys are read as empty strings.

    Parameters
    ----------
    data : `bytes` or `str`
        The YAML document.

    Returns
    -------
    config : `ConsoleConfig`
        The parsed configuration.

    Raises
    ------
    consoleoperator.errors.ConsoleConfigDecodeError
        Raised if the document is not valid YAML, or if a key that holds a
        section (or the document itself) is not a mapping.
    """
    try:
        document = _to_tree(
            next(yaml.compose_all(data, Loader=yaml.SafeLoader), None)
        )
    except yaml.YAMLError as e:
        raise ConsoleConfigDecodeError(str(e)) from e
    return _decode(ConsoleConfig, document, "")


def _to_tree(node: yaml.Node | None) -> Any:
    """Convert a composed YAML node into dicts, lists and the raw text of
    scalars, so that ``0x1F`` or ``yes`` are kept as written. Only nulls
    become `None`.
    """
    if node is None:
        return None
    if isinstance(node, yaml.MappingNode):
        tree = {}
        for key_node, value_node in node.value:
            if not isinstance(key_node, yaml.ScalarNode):
                raise ConsoleConfigDecodeError(
                    f"unsupported mapping key at {key_node.start_mark}"
                )
            tree[key_node.value] = _to_tree(value_node)
        return tree
    if isinstance(node, yaml.SequenceNode):
        return [_to_tree(item) for item in node.value]
    if node.tag == "tag:yaml.org,2002:null":
        return None
    return node.value


def _decode(cls: type[T], value: Any, path: str) -> T:
    if value is None:
        return cls()
    if not isinstance(value, Mapping):
        raise ConsoleConfigDecodeError(
            f"cannot decode {type(value).__name__} into {path or 'document'}"
            f"; a mapping is required"
        )
    if cls is Session:
        return Session(  # type: ignore[return-value]
            values={
                str(k): _decode_scalar(v, f"{path}.{k}")
                for k, v in value.items()
            }
        )

    kwargs = {}
    for f in fields(cls):  # type: ignore[arg-type]
        key = f.metadata["key"]
        if key not in value:
            continue
        field_path = f"{path}.{key}" if path else key
        section = _SECTION_TYPES.get(f.name)
        if section is not None:
            kwargs[f.name] = _decode(section, value[key], field_path)
        else:
            kwargs[f.name] = _decode_scalar(value[key], field_path)
    return cls(**kwargs)


def _decode_scalar(value: Any, path: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    raise ConsoleConfigDecodeError(
        f"cannot decode {type(value).__name__} into {path}; "
        f"a string is required"
    )


def dump_console_config(config: ConsoleConfig) -> str:
    """Serialize a `ConsoleConfig` to a YAML document.

    Empty strings are omitted, except inside the opaque session mapping;
    every section is written, possibly as an empty mapping.
    """
    return yaml.safe_dump(
        _encode(config), default_flow_style=False, sort_keys=True
    )


def _encode(obj: Any) -> dict[str, Any]:
    if isinstance(obj, Session):
        return dict(obj.values)

    document: dict[str, Any] = {}
    for f in fields(obj):
        value = getattr(obj, f.name)
        if isinstance(value, str):
            if value:
                document[f.metadata["key"]] = value
        else:
            document[f.metadata["key"]] = _encode(value)
    return document


def build_console_config(
    *,
    host: str = "",
    logout_url: str = "",
    brand: Brand | str = Brand.DEFAULT,
    doc_url: str = "",
    api_server_url: str = "",
    status_page_id: str = "",
) -> ConsoleConfig:
    """Assemble the console server configuration from explicit settings.

    The OAuth client and serving certificate settings are the fixed values
    the console deployment mounts.

    Parameters
    ----------
    host : `str`
        The public base address of the console
        (``clusterInfo.consoleBaseAddress``).
    logout_url : `str`
        Where to redirect after logout (``auth.logoutRedirect``).
    brand : `Brand` or `str`
        The console branding (``customization.branding``).
    doc_url : `str`
        Base URL of the product documentation
        (``customization.documentationBaseURL``).
    api_server_url : `str`
        Public URL of the API server (``clusterInfo.masterPublicURL``).
    status_page_id : `str`
        The statuspage.io page ID (``providers.statuspageID``).

    Returns
    -------
    config : `ConsoleConfig`
    """
    branding = brand.value if isinstance(brand, Brand) else brand
    return ConsoleConfig(
        api_version=API_VERSION,
        kind=KIND,
        auth=Auth(
            client_id=DEFAULT_CLIENT_ID,
            client_secret_file=DEFAULT_CLIENT_SECRET_FILE,
            logout_redirect=logout_url,
        ),
        cluster_info=ClusterInfo(
            console_base_address=host,
            master_public_url=api_server_url,
        ),
        customization=Customization(
            branding=branding,
            documentation_base_url=doc_url,
        ),
        providers=Providers(statuspage_id=status_page_id),
        serving_info=ServingInfo(
            bind_address=DEFAULT_BIND_ADDRESS,
            cert_file=DEFAULT_CERT_FILE,
            key_file=DEFAULT_KEY_FILE,
        ),
        session=Session(),
    )
