"""Export orchestration: probe the mount, then stream every secret."""

import time
from typing import Optional, TextIO

from rich.console import Console

from .kv import KeyLister, MountProber, SecretReader, SecretTraverser, TraversalStats
from .metrics import ExportMetrics


def export_mount(
    client,
    mount: str,
    output: TextIO,
    console: Optional[Console] = None,
    max_depth: int = 64,
    metrics: Optional[ExportMetrics] = None
) -> TraversalStats:
    """Write one JSON line per secret under ``mount`` to ``output``.

    Raises IncompatibleMountError before any list or read call when the
    mount is a KV v2 engine.
    """
    console = console or Console(stderr=True)
    mount = mount.strip("/")

    mount_info = MountProber(client, console).probe(mount)
    mount_info.require_compatible()

    traverser = SecretTraverser(
        KeyLister(client, mount),
        SecretReader(client, mount, console),
        max_depth=max_depth,
        console=console,
    )

    started = time.monotonic()
    for record in traverser.walk(""):
        output.write(record.to_jsonl() + "\n")
        output.flush()

    if metrics is not None:
        metrics.observe(traverser.stats, time.monotonic() - started)

    return traverser.stats
