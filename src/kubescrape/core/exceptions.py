"""Custom exceptions for kubescrape."""


class KubescrapeError(Exception):
    """Base exception for all kubescrape errors."""


class ConfigurationError(KubescrapeError):
    """Configuration-related errors."""


class KubernetesError(KubescrapeError):
    """Kubernetes client configuration could not be used."""


class NodeAddressError(KubescrapeError):
    """Node exposes no address of a preferred type."""
