"""Depth-first traversal of a KV v1 namespace tree."""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from rich.console import Console
from rich.markup import escape

from ..types import SecretRecord
from .lister import KeyLister
from .reader import SecretReader

SEPARATOR = "/"


@dataclass
class TraversalStats:
    """Counters collected during one walk."""

    records: int = 0
    failed_reads: int = 0
    failed_lists: int = 0
    namespaces: int = 0
    skipped_namespaces: int = 0


class SecretTraverser:
    """Walks every namespace below a mount and yields one record per leaf.

    Sub-namespaces are expanded depth-first in the order the list endpoint
    returns them; a sub-namespace is fully drained before its next sibling.
    The walk keeps an explicit stack of key iterators instead of recursing,
    and refuses to descend past ``max_depth`` levels.
    """

    def __init__(
        self,
        lister: KeyLister,
        reader: SecretReader,
        max_depth: int = 64,
        console: Optional[Console] = None
    ):
        self.lister = lister
        self.reader = reader
        self.max_depth = max_depth
        self.console = console or Console(stderr=True)
        self.stats = TraversalStats()

    def walk(self, prefix: str = "") -> Iterator[SecretRecord]:
        """Yield records as they are read; nothing is buffered."""
        prefix = prefix.lstrip(SEPARATOR)
        stack: List[Tuple[str, int, Iterator[str]]] = [(prefix, 0, self._children(prefix))]

        while stack:
            current, depth, entries = stack[-1]
            entry = next(entries, None)
            if entry is None:
                stack.pop()
                continue

            path = current + entry
            if entry.endswith(SEPARATOR):
                if depth + 1 > self.max_depth:
                    self.stats.skipped_namespaces += 1
                    self.console.print(
                        f"[yellow]WARNING: not descending into {escape(path)} "
                        f"(deeper than {self.max_depth} levels)[/yellow]"
                    )
                    continue
                stack.append((path, depth + 1, self._children(path)))
                continue

            record = self.reader.read(path)
            if record is None:
                self.stats.failed_reads += 1
                continue
            self.stats.records += 1
            yield record

    def _children(self, prefix: str) -> Iterator[str]:
        failures_before = self.lister.failures
        keys = self.lister.list_keys(prefix)
        self.stats.namespaces += 1
        self.stats.failed_lists += self.lister.failures - failures_before
        return iter(keys)
