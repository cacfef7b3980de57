"""Kubelet override options."""

from pydantic import BaseModel, Field

from kubescrape.core.models import KubeletClientConfig, RestConfig
from kubescrape.scraper.kubelet_config import derive_kubelet_config


class Options(BaseModel):
    """User-supplied overrides for kubelet connections.

    The fields are independent; conflicting values are resolved by the order in
    which derive_kubelet_config applies them, never rejected.
    """

    insecure_kubelet_tls: bool = Field(
        default=False, description="Skip verification of kubelet serving certificates"
    )
    kubelet_ca_file: str = Field(
        default="", description="CA bundle used to verify kubelet serving certificates"
    )
    deprecated_completely_insecure_kubelet: bool = Field(
        default=False, description="Use plain HTTP and no credentials towards kubelets"
    )
    kubelet_client_cert_file: str = Field(
        default="", description="Client certificate presented to kubelets"
    )
    kubelet_client_key_file: str = Field(
        default="", description="Client key presented to kubelets"
    )

    def kubelet_config(self, base: RestConfig) -> KubeletClientConfig:
        """Derive the kubelet client configuration from a base descriptor."""
        return derive_kubelet_config(base, self)
