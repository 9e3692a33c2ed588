"""KV version 1 traversal components."""

from .prober import MountProber, extract_field
from .lister import KeyLister
from .reader import SecretReader
from .traverser import SecretTraverser, TraversalStats

__all__ = [
    "MountProber",
    "extract_field",
    "KeyLister",
    "SecretReader",
    "SecretTraverser",
    "TraversalStats",
]
