"""Conversion from kubernetes client configuration to connection descriptors."""

from kubernetes import client

from kubescrape.core.exceptions import KubernetesError
from kubescrape.core.models import RestConfig, TLSClientConfig
from kubescrape.utils.logging import get_logger

logger = get_logger(__name__)

BEARER_PREFIX = "bearer "

# Current clients store the token under BearerToken, older ones under authorization
TOKEN_KEYS = ("BearerToken", "authorization")


def rest_config_from_kubernetes(configuration: client.Configuration) -> RestConfig:
    """Build a RestConfig from a loaded kubernetes client Configuration.

    The kubernetes client keeps TLS material as file paths only, so inline
    data fields are left unset.

    Args:
        configuration: Configuration populated by load_kube_config or
            load_incluster_config

    Returns:
        Connection descriptor with the same host, credentials and TLS files

    Raises:
        KubernetesError: If the argument is not a kubernetes Configuration
    """
    if not isinstance(configuration, client.Configuration):
        raise KubernetesError(
            f"Expected kubernetes.client.Configuration, got {type(configuration).__name__}"
        )

    token = _bearer_token(configuration.api_key or {})

    tls = TLSClientConfig(
        insecure=not configuration.verify_ssl,
        ca_file=configuration.ssl_ca_cert or "",
        cert_file=configuration.cert_file or "",
        key_file=configuration.key_file or "",
    )

    rest_config = RestConfig(
        host=configuration.host or "",
        username=configuration.username or "",
        password=configuration.password or "",
        bearer_token=token,
        tls_client_config=tls,
    )

    logger.debug(
        "base_config_converted",
        host=rest_config.host,
        has_token=bool(token),
        insecure=tls.insecure,
    )
    return rest_config


def _bearer_token(api_key: dict[str, str]) -> str:
    token = next((api_key[key] for key in TOKEN_KEYS if api_key.get(key)), "")
    if token[: len(BEARER_PREFIX)].lower() == BEARER_PREFIX:
        token = token[len(BEARER_PREFIX) :]
    return token.strip()
