"""kv1dump - Export every secret from a HashiCorp Vault KV v1 mount."""

__version__ = "0.1.0"

from .export import export_mount
from .types import DumpConfig, SecretRecord, MountInfo, MountClassification

__all__ = [
    "export_mount",
    "DumpConfig",
    "SecretRecord",
    "MountInfo",
    "MountClassification",
]
