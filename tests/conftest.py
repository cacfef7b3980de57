"""Pytest configuration and shared fixtures."""

from pathlib import Path
from typing import Any

import pytest
import yaml

from kubescrape.core.models import (
    KubeletClientConfig,
    NodeAddressType,
    RestConfig,
    TLSClientConfig,
)


@pytest.fixture
def base_config() -> RestConfig:
    """Provide a fully populated cluster connection descriptor."""
    return RestConfig(
        host="https://10.96.0.1:443",
        api_path="",
        username="Username",
        password="Password",
        bearer_token="ApiserverBearerToken",
        bearer_token_file="ApiserverBearerTokenFile",
        tls_client_config=TLSClientConfig(
            insecure=False,
            cert_file="CertFile",
            key_file="KeyFile",
            ca_file="CAFile",
            cert_data=b"CertData",
            key_data=b"KeyData",
            ca_data=b"CAData",
        ),
        user_agent="UserAgent",
    )


@pytest.fixture
def expected_config(base_config: RestConfig) -> KubeletClientConfig:
    """Provide the configuration derived with no overrides."""
    return KubeletClientConfig(
        address_type_priority=[
            NodeAddressType.HOSTNAME,
            NodeAddressType.INTERNAL_DNS,
            NodeAddressType.INTERNAL_IP,
            NodeAddressType.EXTERNAL_DNS,
            NodeAddressType.EXTERNAL_IP,
        ],
        scheme="https",
        default_port=10250,
        client=base_config,
    )


@pytest.fixture
def base_config_data() -> dict[str, Any]:
    """Connection descriptor as stored in YAML (inline data base64 encoded)."""
    return {
        "host": "https://10.96.0.1:443",
        "username": "Username",
        "password": "Password",
        "bearer_token": "ApiserverBearerToken",
        "tls_client_config": {
            "ca_file": "CAFile",
            "ca_data": "Q0FEYXRh",  # CAData
            "cert_file": "CertFile",
            "key_file": "KeyFile",
        },
    }


@pytest.fixture
def base_config_file(tmp_path: Path, base_config_data: dict[str, Any]) -> Path:
    """Write the connection descriptor to a temporary YAML file."""
    path = tmp_path / "base.yaml"
    path.write_text(yaml.safe_dump(base_config_data))
    return path


def pytest_configure(config: Any) -> None:
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
