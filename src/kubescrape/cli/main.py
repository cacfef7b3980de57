"""Main CLI entry point for kubescrape."""

from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING, Any

import click
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from kubescrape import __version__
from kubescrape.core.exceptions import ConfigurationError, KubescrapeError
from kubescrape.utils.logging import get_logger, log_error, log_operation, setup_logging

if TYPE_CHECKING:
    from kubescrape.core.config import KubescrapeConfig
    from kubescrape.core.models import KubeletClientConfig, RestConfig

console = Console()
logger = get_logger(__name__)


class KubescrapeContext:
    """Shared context for CLI commands with lazy initialization."""

    def __init__(self, config_path: str | None):
        """Initialize context with an optional config path.

        Args:
            config_path: Path to configuration file
        """
        self.config_path = config_path
        self._config: KubescrapeConfig | None = None

    @property
    def config(self) -> KubescrapeConfig:
        """Get or create config lazily."""
        if self._config is None:
            from kubescrape.core.config import KubescrapeConfig

            if self.config_path:
                self._config = KubescrapeConfig.from_file(self.config_path)
            else:
                self._config = KubescrapeConfig()
        return self._config

    def base_config(self, base_path: str | None) -> RestConfig:
        """Load the base connection descriptor, preferring an explicit path."""
        from kubescrape.core.models import RestConfig

        if base_path:
            return RestConfig.from_file(base_path)
        if self.config.base_config_path:
            return self.config.load_base_config()
        raise ConfigurationError(
            "No base connection descriptor: pass --base or set base_config_path"
        )


def _render(kubelet_config: KubeletClientConfig) -> dict[str, Any]:
    return {
        "address_type_priority": [t.value for t in kubelet_config.address_type_priority],
        "scheme": kubelet_config.scheme,
        "default_port": kubelet_config.default_port,
        "client": kubelet_config.client.redacted(),
    }


def _print_table(data: dict[str, Any]) -> None:
    table = Table(title="Kubelet Client Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("scheme", data["scheme"])
    table.add_row("default_port", str(data["default_port"]))
    table.add_row("address_type_priority", ", ".join(data["address_type_priority"]))

    client = dict(data["client"])
    tls = client.pop("tls_client_config")
    for key, value in client.items():
        table.add_row(key, str(value))
    for key, value in tls.items():
        table.add_row(f"tls.{key}", "" if value is None else str(value))

    console.print(table)


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to configuration file",
)
@click.pass_context
def cli(ctx: click.Context, config: str | None) -> None:
    """kubescrape - Derive kubelet scrape client configuration."""
    ctx.obj = KubescrapeContext(config_path=config)


@cli.command()
@click.option(
    "--base",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Connection descriptor YAML (overrides base_config_path)",
)
@click.option(
    "--kubelet-insecure-tls",
    "insecure_kubelet_tls",
    is_flag=True,
    help="Do not verify CA of serving certificates presented by kubelets",
)
@click.option(
    "--kubelet-certificate-authority",
    "kubelet_ca_file",
    default="",
    help="Path to the CA to use to validate the kubelet's serving certificates",
)
@click.option(
    "--deprecated-kubelet-completely-insecure",
    "deprecated_completely_insecure_kubelet",
    is_flag=True,
    help="Do not use any encryption, authorization, or authentication with kubelets",
)
@click.option(
    "--kubelet-client-certificate",
    "kubelet_client_cert_file",
    default="",
    help="Path to a client cert file for TLS",
)
@click.option(
    "--kubelet-client-key",
    "kubelet_client_key_file",
    default="",
    help="Path to a client key file for TLS",
)
@click.option(
    "--format",
    type=click.Choice(["table", "json", "yaml"]),
    default="table",
    help="Output format",
)
@click.pass_context
def derive(ctx: click.Context, base: str | None, format: str, **overrides: Any) -> None:
    """Print the kubelet client configuration derived from a base descriptor."""
    from kubescrape.scraper.kubelet_config import derive_kubelet_config

    kubescrape_ctx = ctx.obj

    try:
        config = kubescrape_ctx.config
        setup_logging(
            level=config.logging.level,
            format=config.logging.format,
            output=config.logging.output,
        )

        base_config = kubescrape_ctx.base_config(base)
        logger.debug("base_config_loaded", host=base_config.host)

        # Flags only switch overrides on; unset flags keep the config file values
        options = config.kubelet.model_copy(
            update={key: value for key, value in overrides.items() if value}
        )
        kubelet_config = derive_kubelet_config(base_config, options)
    except KubescrapeError as e:
        log_error(logger, e, operation="derive", exc_info=False)
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    log_operation(
        logger,
        "derive",
        host=kubelet_config.client.host,
        scheme=kubelet_config.scheme,
        format=format,
    )

    data = _render(kubelet_config)
    if format == "json":
        click.echo(json.dumps(data, indent=2))
    elif format == "yaml":
        click.echo(yaml.safe_dump(data, sort_keys=False))
    else:
        _print_table(data)


if __name__ == "__main__":
    cli()
