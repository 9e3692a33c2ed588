"""Core data models for kv1dump."""

import json
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from .exceptions import IncompatibleMountError


class DumpConfig(BaseModel):
    """Connection settings for a Vault server."""

    vault_addr: str = Field(..., description="Vault base address, e.g. https://vault:8200")
    vault_token: SecretStr = Field(..., description="Token with list/read permissions")
    namespace: Optional[str] = Field(None, description="Vault Enterprise namespace")
    verify: Union[bool, str] = Field(default=True, description="TLS verification flag or CA bundle path")
    timeout: int = Field(default=30, description="Per-request timeout in seconds")
    max_depth: int = Field(default=64, description="Deepest sub-namespace level to descend into")

    @field_validator("vault_addr")
    @classmethod
    def validate_vault_addr(cls, v: str) -> str:
        """Validate the address is an http(s) URL."""
        v = v.strip()
        if not v:
            raise ValueError("VAULT_ADDR cannot be empty")
        if not v.startswith(("http://", "https://")):
            raise ValueError("VAULT_ADDR must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("vault_token")
    @classmethod
    def validate_vault_token(cls, v: SecretStr) -> SecretStr:
        """Validate the token is not blank."""
        if not v.get_secret_value().strip():
            raise ValueError("VAULT_TOKEN cannot be empty")
        return v

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Timeout must be a positive number of seconds")
        return v

    @field_validator("max_depth")
    @classmethod
    def validate_max_depth(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Max depth must be at least 1")
        return v

    def api_url(self, path: str) -> str:
        """Full URL of an API path below /v1/."""
        return f"{self.vault_addr}/v1/{path}"


class SecretRecord(BaseModel):
    """One exported secret: its path below the mount and its payload."""

    model_config = ConfigDict(frozen=True)

    path: str
    secret: Any = None

    def to_jsonl(self) -> str:
        """Convert to a compact JSON line."""
        return json.dumps({"path": self.path, "secret": self.secret}, separators=(",", ":"))


class MountClassification(str, Enum):
    """Whether the traversal protocol applies to a mount."""

    COMPATIBLE = "compatible"
    INCOMPATIBLE = "incompatible"


class MountInfo(BaseModel):
    """What the mount configuration probe found."""

    mount: str
    engine_type: Optional[str] = None
    version: Optional[str] = None
    classification: MountClassification = MountClassification.COMPATIBLE
    probe_failed: bool = False

    @property
    def is_compatible(self) -> bool:
        return self.classification is MountClassification.COMPATIBLE

    def require_compatible(self) -> None:
        """Raise if the mount must not be traversed."""
        if not self.is_compatible:
            raise IncompatibleMountError(self.mount, self.version or "unknown")
