"""Environment prerequisite checks."""

import importlib.util
from typing import Dict

from .exceptions import PrerequisiteMissingError

REQUIRED_MODULES: Dict[str, str] = {
    "hvac": "HTTP client for the Vault API",
    "requests": "HTTP transport used by hvac",
    "json": "JSON parsing",
}


def check_prerequisites(modules: Dict[str, str] = REQUIRED_MODULES) -> None:
    """Fail before any network activity if a required module is unavailable."""
    for module, purpose in modules.items():
        try:
            spec = importlib.util.find_spec(module)
        except (ImportError, ValueError):
            spec = None
        if spec is None:
            raise PrerequisiteMissingError(module, purpose)
