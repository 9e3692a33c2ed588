"""Secret reads for KV v1 mounts."""

from typing import Optional
from urllib.parse import quote

from rich.console import Console
from rich.markup import escape

from ..exceptions import RequestFailedError
from ..types import SecretRecord


class SecretReader:
    """Reads one leaf secret and packages it as a record."""

    def __init__(self, client, mount: str, console: Optional[Console] = None):
        self.client = client
        self.mount = mount.strip("/")
        self.console = console or Console(stderr=True)
        self.failures = 0

    def read(self, path: str) -> Optional[SecretRecord]:
        """Read ``path`` below the mount; None when the read fails."""
        try:
            response = self.client.get(quote(f"{self.mount}/{path}", safe="/"))
        except RequestFailedError:
            self.failures += 1
            self.console.print(f"[yellow]WARNING: failed to read {escape(path)}[/yellow]")
            return None

        # For KV v1 the secret payload lives under "data"
        return SecretRecord(path=path, secret=response.get("data"))
