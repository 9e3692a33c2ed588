"""Tests for core types."""

import json
import subprocess
import sys

import pytest

from kv1dump.exceptions import IncompatibleMountError
from kv1dump.types import DumpConfig, MountClassification, MountInfo, SecretRecord


def test_dump_config_validation():
    """Test DumpConfig validation."""
    config = DumpConfig(vault_addr="https://vault.example.com:8200/", vault_token="s.abc")
    assert config.vault_addr == "https://vault.example.com:8200"
    assert config.timeout == 30
    assert config.max_depth == 64
    assert config.verify is True
    assert config.api_url("sys/mounts/secret/") == "https://vault.example.com:8200/v1/sys/mounts/secret/"

    with pytest.raises(ValueError, match="must start with http"):
        DumpConfig(vault_addr="vault.example.com", vault_token="s.abc")

    with pytest.raises(ValueError, match="VAULT_TOKEN cannot be empty"):
        DumpConfig(vault_addr="http://127.0.0.1:8200", vault_token="   ")

    with pytest.raises(ValueError, match="Timeout must be a positive"):
        DumpConfig(vault_addr="http://127.0.0.1:8200", vault_token="s.abc", timeout=0)

    with pytest.raises(ValueError, match="Max depth must be at least 1"):
        DumpConfig(vault_addr="http://127.0.0.1:8200", vault_token="s.abc", max_depth=0)


def test_dump_config_hides_token():
    """The token never shows up in reprs or dumps."""
    config = DumpConfig(vault_addr="http://127.0.0.1:8200", vault_token="s.topsecret")
    assert "s.topsecret" not in repr(config)
    assert "s.topsecret" not in str(config)
    assert "s.topsecret" not in config.model_dump_json()
    assert config.vault_token.get_secret_value() == "s.topsecret"


def test_secret_record_jsonl():
    """Test compact JSON line output."""
    record = SecretRecord(path="b/c", secret={"k": "v2", "n": [1, 2]})
    line = record.to_jsonl()
    assert line == '{"path":"b/c","secret":{"k":"v2","n":[1,2]}}'
    assert "\n" not in line

    assert json.loads(SecretRecord(path="x").to_jsonl()) == {"path": "x", "secret": None}


def test_secret_record_is_frozen():
    record = SecretRecord(path="a", secret={"k": "v"})
    with pytest.raises(Exception):
        record.path = "b"


def test_mount_info_require_compatible():
    """Test the incompatible mount gate."""
    MountInfo(mount="secret").require_compatible()

    info = MountInfo(
        mount="kv",
        engine_type="kv",
        version="2",
        classification=MountClassification.INCOMPATIBLE
    )
    assert not info.is_compatible
    with pytest.raises(IncompatibleMountError, match="KV version: v2") as exc_info:
        info.require_compatible()
    assert "/data/" in str(exc_info.value)
    assert exc_info.value.exit_code == 3


def test_models_use_current_pydantic_api():
    """Importing the models raises no pydantic deprecation warnings."""
    result = subprocess.run(
        [
            sys.executable,
            "-W", "error::pydantic.warnings.PydanticDeprecatedSince20",
            "-c", "import kv1dump.types",
        ],
        capture_output=True,
        text=True
    )
    assert result.returncode == 0, result.stderr
