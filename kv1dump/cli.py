"""CLI for kv1dump."""

import os
import sys
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, TextIO

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .client import VaultHTTPClient
from .exceptions import EXIT_FAILURE, Kv1DumpError, UsageError
from .export import export_mount
from .kv import TraversalStats
from .metrics import ExportMetrics
from .preflight import check_prerequisites
from .types import DumpConfig

app = typer.Typer(
    help="Recursively export every secret from a Vault KV v1 mount as JSON lines",
    add_completion=False
)
console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        from . import __version__
        Console().print(f"[bold blue]kv1dump[/bold blue] version {__version__}")
        raise typer.Exit()


@contextmanager
def _open_output(path: Optional[Path]) -> Iterator[TextIO]:
    """Yield stdout, or a private temp file that replaces ``path`` on success."""
    if path is None:
        yield sys.stdout
        return

    path.parent.mkdir(parents=True, exist_ok=True)
    # mkstemp creates the file owner read/write only
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w") as f:
            yield f
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def _build_config(
    vault_addr: Optional[str],
    vault_token: Optional[str],
    namespace: Optional[str],
    ca_cert: Optional[Path],
    tls_skip_verify: bool,
    timeout: int,
    max_depth: int
) -> DumpConfig:
    if not vault_addr:
        raise UsageError(
            "VAULT_ADDR is not set. Please export VAULT_ADDR (e.g. https://vault.example.com:8200)"
        )
    if not vault_token:
        raise UsageError(
            "VAULT_TOKEN is not set. Please export VAULT_TOKEN (a valid token with read/list perms)"
        )

    if tls_skip_verify:
        verify = False
    elif ca_cert:
        verify = str(ca_cert)
    else:
        verify = True

    try:
        return DumpConfig(
            vault_addr=vault_addr,
            vault_token=vault_token,
            namespace=namespace or None,
            verify=verify,
            timeout=timeout,
            max_depth=max_depth,
        )
    except ValidationError as e:
        problems = "; ".join(error["msg"] for error in e.errors())
        raise UsageError(f"Invalid configuration: {problems}")


def _print_summary(mount: str, stats: TraversalStats) -> None:
    table = Table(title=f"Export of {escape(mount)}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Secrets Exported", str(stats.records))
    table.add_row("Failed Reads", str(stats.failed_reads))
    table.add_row("Namespaces Listed", str(stats.namespaces))
    table.add_row("Failed Lists", str(stats.failed_lists))
    table.add_row("Skipped (depth)", str(stats.skipped_namespaces))

    console.print(table)


@app.command()
def dump(
    mount: str = typer.Argument(
        ...,
        help="Name of the KV v1 mount to export"
    ),
    vault_addr: Optional[str] = typer.Option(
        None,
        "--vault-addr",
        envvar="VAULT_ADDR",
        help="HashiCorp Vault address"
    ),
    vault_token: Optional[str] = typer.Option(
        None,
        "--vault-token",
        envvar="VAULT_TOKEN",
        help="HashiCorp Vault token with list and read permissions"
    ),
    namespace: Optional[str] = typer.Option(
        None,
        "--namespace",
        envvar="VAULT_NAMESPACE",
        help="Vault Enterprise namespace"
    ),
    ca_cert: Optional[Path] = typer.Option(
        None,
        "--ca-cert",
        envvar="VAULT_CACERT",
        help="CA bundle used to verify the Vault TLS certificate"
    ),
    tls_skip_verify: bool = typer.Option(
        False,
        "--tls-skip-verify",
        envvar="VAULT_SKIP_VERIFY",
        help="Disable TLS certificate verification"
    ),
    timeout: int = typer.Option(
        30,
        "--timeout",
        help="Per-request timeout in seconds"
    ),
    max_depth: int = typer.Option(
        64,
        "--max-depth",
        help="Deepest sub-namespace level to descend into"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write JSON lines to this file (mode 0600) instead of stdout"
    ),
    metrics_file: Optional[Path] = typer.Option(
        None,
        "--metrics-file",
        help="Write Prometheus textfile-collector metrics to this path"
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Do not print the summary table"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version information and exit"
    )
):
    """Export every secret under MOUNT, one JSON object per line."""
    try:
        config = _build_config(
            vault_addr, vault_token, namespace, ca_cert, tls_skip_verify, timeout, max_depth
        )
        check_prerequisites()

        client = VaultHTTPClient(config)
        metrics = ExportMetrics(mount.strip("/")) if metrics_file else None

        with _open_output(output) as out:
            stats = export_mount(
                client,
                mount,
                out,
                console=console,
                max_depth=config.max_depth,
                metrics=metrics,
            )

        if metrics is not None:
            metrics.write(metrics_file)
        if not quiet:
            _print_summary(mount, stats)

    except Kv1DumpError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(e.exit_code)
    except KeyboardInterrupt:
        console.print("\n[yellow]Export interrupted by user[/yellow]")
        sys.exit(EXIT_FAILURE)
    except Exception as e:
        console.print(f"[red]Export error: {escape(str(e))}[/red]")
        sys.exit(EXIT_FAILURE)


if __name__ == "__main__":
    app()
