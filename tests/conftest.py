"""Shared fixtures for kv1dump tests."""

import io
from typing import Any, Dict, List, Optional, Tuple

import pytest
from rich.console import Console

from kv1dump.exceptions import RequestFailedError


class FakeVaultClient:
    """In-memory stand-in for VaultHTTPClient.

    ``mounts`` answers sys/mounts/ probes, ``lists`` answers ?list=true
    calls and ``reads`` answers plain reads, each keyed by API path. A
    missing path fails the way a 404 would.
    """

    def __init__(
        self,
        mounts: Optional[Dict[str, Any]] = None,
        lists: Optional[Dict[str, Any]] = None,
        reads: Optional[Dict[str, Any]] = None
    ):
        self.mounts = mounts or {}
        self.lists = lists or {}
        self.reads = reads or {}
        self.calls: List[Tuple[str, Optional[Dict[str, str]]]] = []

    def get(self, path: str, params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        self.calls.append((path, params))
        if params and params.get("list") == "true":
            table = self.lists
        elif path.startswith("sys/mounts/"):
            table = self.mounts
        else:
            table = self.reads

        if path not in table:
            raise RequestFailedError(f"http://vault.test:8200/v1/{path}", "InvalidPath")
        return table[path]

    def list_calls(self) -> List[str]:
        return [path for path, params in self.calls if params]

    def read_calls(self) -> List[str]:
        return [path for path, params in self.calls if not params and not path.startswith("sys/")]


def kv1_mount(mount: str = "secret") -> Dict[str, Any]:
    return {mount: {"type": "kv", "options": {"version": "1"}}}


@pytest.fixture
def console():
    """A rich console writing to a buffer instead of stderr."""
    return Console(file=io.StringIO(), width=200)


@pytest.fixture
def scenario_client():
    """root lists [a, b/]; b/ lists [c]."""
    return FakeVaultClient(
        mounts={"sys/mounts/secret/": {"type": "kv", "options": {"version": "1"}}},
        lists={
            "secret": {"data": {"keys": ["a", "b/"]}},
            "secret/b/": {"data": {"keys": ["c"]}},
        },
        reads={
            "secret/a": {"data": {"k": "v1"}},
            "secret/b/c": {"data": {"k": "v2"}},
        },
    )
