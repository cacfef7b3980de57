"""Core data models for kubescrape."""

import base64
import binascii
import ipaddress
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from kubescrape.core.exceptions import ConfigurationError


class NodeAddressType(str, Enum):
    """Node address type as reported in a node's status."""

    HOSTNAME = "Hostname"
    INTERNAL_DNS = "InternalDNS"
    INTERNAL_IP = "InternalIP"
    EXTERNAL_DNS = "ExternalDNS"
    EXTERNAL_IP = "ExternalIP"


class TLSClientConfig(BaseModel):
    """TLS material used when connecting to a server.

    File paths and inline data are alternatives for the same material. Inline
    data given as a string is treated as base64, the way kubeconfig files carry
    it.
    """

    model_config = ConfigDict(frozen=True)

    insecure: bool = False
    ca_file: str = ""
    cert_file: str = ""
    key_file: str = ""
    ca_data: bytes | None = None
    cert_data: bytes | None = None
    key_data: bytes | None = None

    @field_validator("ca_data", "cert_data", "key_data", mode="before")
    @classmethod
    def decode_base64(cls, value: Any) -> Any:
        """Decode base64 strings into raw bytes."""
        if isinstance(value, str):
            try:
                return base64.b64decode(value, validate=True)
            except binascii.Error as e:
                raise ValueError(f"invalid base64 data: {e}") from e
        return value

    def is_empty(self) -> bool:
        """Check whether no TLS setting is present."""
        return self == TLSClientConfig()


class RestConfig(BaseModel):
    """Connection descriptor for a Kubernetes endpoint.

    Mirrors the cluster-wide settings (host, credentials, TLS material) resolved
    once at startup from in-cluster or kubeconfig credentials.
    """

    model_config = ConfigDict(frozen=True)

    host: str = ""
    api_path: str = ""
    username: str = ""
    password: str = ""
    bearer_token: str = ""
    bearer_token_file: str = ""
    user_agent: str = ""
    tls_client_config: TLSClientConfig = Field(default_factory=TLSClientConfig)

    @classmethod
    def from_file(cls, path: str | Path) -> "RestConfig":
        """Load a connection descriptor from a YAML file.

        Args:
            path: Path to descriptor file

        Returns:
            RestConfig instance

        Raises:
            ConfigurationError: If file cannot be loaded or parsed
        """
        config_path = Path(path).expanduser()

        if not config_path.exists():
            raise ConfigurationError(f"Connection descriptor not found: {config_path}")

        try:
            with config_path.open() as f:
                data = yaml.safe_load(f)
        except Exception as e:
            raise ConfigurationError(f"Failed to load connection descriptor: {e}") from e

        try:
            return cls(**(data or {}))
        except Exception as e:
            raise ConfigurationError(f"Invalid connection descriptor: {e}") from e

    def redacted(self) -> dict[str, Any]:
        """Dump the descriptor with secrets masked."""
        data = self.model_dump()
        for key in ("password", "bearer_token"):
            if data[key]:
                data[key] = "<redacted>"
        tls = data["tls_client_config"]
        for key in ("ca_data", "cert_data", "key_data"):
            if tls[key] is not None:
                tls[key] = f"<{len(tls[key])} bytes>"
        return data


DEFAULT_ADDRESS_TYPE_PRIORITY: tuple[NodeAddressType, ...] = (
    NodeAddressType.HOSTNAME,
    NodeAddressType.INTERNAL_DNS,
    NodeAddressType.INTERNAL_IP,
    NodeAddressType.EXTERNAL_DNS,
    NodeAddressType.EXTERNAL_IP,
)

DEFAULT_KUBELET_PORT = 10250


class KubeletClientConfig(BaseModel):
    """Resolved settings for scraping kubelet metrics endpoints."""

    model_config = ConfigDict(frozen=True)

    address_type_priority: tuple[NodeAddressType, ...] = DEFAULT_ADDRESS_TYPE_PRIORITY
    scheme: str = "https"
    default_port: int = DEFAULT_KUBELET_PORT
    client: RestConfig = Field(default_factory=RestConfig)

    def node_url(self, address: str, path: str = "/metrics/resource") -> str:
        """Build the metrics URL for a node address.

        Args:
            address: Hostname or IP address of the node
            path: Endpoint path on the kubelet

        Returns:
            URL of the form scheme://address:port/path
        """
        try:
            if ipaddress.ip_address(address).version == 6:
                address = f"[{address}]"
        except ValueError:
            pass

        if not path.startswith("/"):
            path = f"/{path}"

        return f"{self.scheme}://{address}:{self.default_port}{path}"
