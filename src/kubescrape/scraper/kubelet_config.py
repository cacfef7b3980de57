"""Derivation of kubelet scrape configuration from cluster connection settings."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from kubescrape.core.models import (
    DEFAULT_ADDRESS_TYPE_PRIORITY,
    DEFAULT_KUBELET_PORT,
    KubeletClientConfig,
    RestConfig,
    TLSClientConfig,
)
from kubescrape.utils.logging import get_logger

if TYPE_CHECKING:
    from kubescrape.core.options import Options

logger = get_logger(__name__)


def _set_insecure_tls(config: KubeletClientConfig, options: Options) -> KubeletClientConfig:
    tls = config.client.tls_client_config.model_copy(
        update={"insecure": True, "ca_file": "", "ca_data": None}
    )
    return _with_tls(config, tls)


def _set_ca_file(config: KubeletClientConfig, options: Options) -> KubeletClientConfig:
    tls = config.client.tls_client_config.model_copy(
        update={"ca_file": options.kubelet_ca_file, "ca_data": None}
    )
    return _with_tls(config, tls)


def _set_completely_insecure(
    config: KubeletClientConfig, options: Options
) -> KubeletClientConfig:
    client = config.client.model_copy(
        update={
            "tls_client_config": TLSClientConfig(),
            "username": "",
            "password": "",
            "bearer_token": "",
            "bearer_token_file": "",
        }
    )
    return config.model_copy(update={"client": client, "scheme": "http"})


def _set_client_cert_file(config: KubeletClientConfig, options: Options) -> KubeletClientConfig:
    tls = config.client.tls_client_config.model_copy(
        update={"cert_file": options.kubelet_client_cert_file, "cert_data": None}
    )
    return _with_tls(config, tls)


def _set_client_key_file(config: KubeletClientConfig, options: Options) -> KubeletClientConfig:
    tls = config.client.tls_client_config.model_copy(
        update={"key_file": options.kubelet_client_key_file, "key_data": None}
    )
    return _with_tls(config, tls)


def _with_tls(config: KubeletClientConfig, tls: TLSClientConfig) -> KubeletClientConfig:
    client = config.client.model_copy(update={"tls_client_config": tls})
    return config.model_copy(update={"client": client})


Predicate = Callable[["Options"], bool]
Patch = Callable[[KubeletClientConfig, "Options"], KubeletClientConfig]
Rule = tuple[str, Predicate, Patch]

# Order matters: the completely insecure reset undoes the CA overrides above it,
# and the client cert/key overrides are reapplied on top of that reset.
OVERRIDE_RULES: tuple[Rule, ...] = (
    ("insecure_kubelet_tls", lambda o: o.insecure_kubelet_tls, _set_insecure_tls),
    (
        "kubelet_ca_file",
        lambda o: not o.insecure_kubelet_tls and bool(o.kubelet_ca_file),
        _set_ca_file,
    ),
    (
        "deprecated_completely_insecure_kubelet",
        lambda o: o.deprecated_completely_insecure_kubelet,
        _set_completely_insecure,
    ),
    ("kubelet_client_cert_file", lambda o: bool(o.kubelet_client_cert_file), _set_client_cert_file),
    ("kubelet_client_key_file", lambda o: bool(o.kubelet_client_key_file), _set_client_key_file),
)


def derive_kubelet_config(base: RestConfig, options: Options) -> KubeletClientConfig:
    """Derive the configuration used to scrape kubelets.

    Starts from the cluster connection descriptor, uses https on the default
    kubelet port with the fixed node address priority, then applies each
    override rule in order. Neither input is modified.

    Args:
        base: Cluster-wide connection descriptor
        options: Kubelet override options

    Returns:
        KubeletClientConfig owning its own copy of the descriptor
    """
    config = KubeletClientConfig(
        address_type_priority=DEFAULT_ADDRESS_TYPE_PRIORITY,
        scheme="https",
        default_port=DEFAULT_KUBELET_PORT,
        client=base.model_copy(deep=True),
    )

    applied = []
    for name, predicate, patch in OVERRIDE_RULES:
        if predicate(options):
            config = patch(config, options)
            applied.append(name)

    logger.debug(
        "kubelet_config_derived",
        scheme=config.scheme,
        port=config.default_port,
        overrides=applied,
    )
    return config
