"""Mount configuration probe."""

from typing import Any, Optional
from urllib.parse import quote

from rich.console import Console
from rich.markup import escape

from ..exceptions import RequestFailedError
from ..types import MountClassification, MountInfo

# Some Vault versions wrap the mount config in a "data" envelope
TYPE_PATHS = ("type", "data.type")
VERSION_PATHS = ("options.version", "data.options.version")


def extract_field(document: Any, *paths: str) -> Optional[Any]:
    """Return the first non-null value found at any of the dotted paths."""
    for path in paths:
        value = document
        for part in path.split("."):
            if not isinstance(value, dict):
                value = None
                break
            value = value.get(part)
        if value is not None:
            return value
    return None


def classify(engine_type: Optional[str], version: Optional[str]) -> MountClassification:
    if engine_type == "kv" and version == "2":
        return MountClassification.INCOMPATIBLE
    return MountClassification.COMPATIBLE


class MountProber:
    """Decides whether a mount speaks the KV v1 protocol."""

    def __init__(self, client, console: Optional[Console] = None):
        self.client = client
        self.console = console or Console(stderr=True)

    def probe(self, mount: str) -> MountInfo:
        """Read sys/mounts/<mount>/ and classify the engine.

        A failed probe is not fatal: the mount is assumed to be KV v1 and
        only an explicit ``type=kv, options.version=2`` stops the export.
        """
        mount = mount.strip("/")
        try:
            document = self.client.get(quote(f"sys/mounts/{mount}/", safe="/"))
        except RequestFailedError as e:
            self.console.print(
                f"[dim]Could not read mount configuration ({escape(e.reason)}); assuming KV v1[/dim]"
            )
            return MountInfo(mount=mount, probe_failed=True)

        engine_type = extract_field(document, *TYPE_PATHS)
        version = extract_field(document, *VERSION_PATHS)
        engine_type = str(engine_type) if engine_type is not None else None
        version = str(version) if version is not None else None

        return MountInfo(
            mount=mount,
            engine_type=engine_type,
            version=version,
            classification=classify(engine_type, version),
        )
