"""Adapters between kubescrape models and external libraries."""

from kubescrape.adapters.k8s_adapter import rest_config_from_kubernetes

__all__ = [
    "rest_config_from_kubernetes",
]
