"""Prometheus metrics for a kv1dump run."""

import time
from pathlib import Path
from typing import Optional

from prometheus_client import CollectorRegistry, Counter, Gauge, write_to_textfile

from .kv.traverser import TraversalStats


class ExportMetrics:
    """Run metrics on a private registry, written in textfile-collector format."""

    def __init__(self, mount: str, registry: Optional[CollectorRegistry] = None):
        self.mount = mount
        self.registry = registry or CollectorRegistry()

        self.records_total = Counter(
            'kv1dump_records_exported_total',
            'Total secrets exported',
            ['mount'],
            registry=self.registry
        )
        self.failures_total = Counter(
            'kv1dump_request_failures_total',
            'Total failed Vault requests during traversal',
            ['mount', 'operation'],
            registry=self.registry
        )
        self.namespaces_total = Counter(
            'kv1dump_namespaces_listed_total',
            'Total namespaces listed',
            ['mount'],
            registry=self.registry
        )
        self.skipped_namespaces_total = Counter(
            'kv1dump_namespaces_skipped_total',
            'Total namespaces skipped by the depth guard',
            ['mount'],
            registry=self.registry
        )
        self.duration_seconds = Gauge(
            'kv1dump_export_duration_seconds',
            'Duration of the last export in seconds',
            ['mount'],
            registry=self.registry
        )
        self.last_success_timestamp = Gauge(
            'kv1dump_last_success_timestamp_seconds',
            'Unix time the last export finished',
            ['mount'],
            registry=self.registry
        )

    def observe(self, stats: TraversalStats, duration: float) -> None:
        """Record the outcome of a finished traversal."""
        self.records_total.labels(mount=self.mount).inc(stats.records)
        self.failures_total.labels(mount=self.mount, operation="read").inc(stats.failed_reads)
        self.failures_total.labels(mount=self.mount, operation="list").inc(stats.failed_lists)
        self.namespaces_total.labels(mount=self.mount).inc(stats.namespaces)
        self.skipped_namespaces_total.labels(mount=self.mount).inc(stats.skipped_namespaces)
        self.duration_seconds.labels(mount=self.mount).set(duration)
        self.last_success_timestamp.labels(mount=self.mount).set(time.time())

    def write(self, path: Path) -> None:
        """Write all metrics to ``path`` atomically."""
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        write_to_textfile(str(path), self.registry)
