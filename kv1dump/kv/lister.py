"""Key listing for KV v1 mounts."""

from typing import List
from urllib.parse import quote

from ..exceptions import RequestFailedError


class KeyLister:
    """Lists the immediate children of a namespace prefix."""

    def __init__(self, client, mount: str):
        self.client = client
        self.mount = mount.strip("/")
        self.failures = 0

    def list_path(self, prefix: str) -> str:
        prefix = prefix.lstrip("/")
        if not prefix:
            return quote(self.mount, safe="/")
        return quote(f"{self.mount}/{prefix}", safe="/")

    def list_keys(self, prefix: str = "") -> List[str]:
        """Return child names in store order.

        A failed list call (404, 403, not listable, transport error) is
        reported as an empty namespace; the caller cannot tell the cases
        apart.
        """
        try:
            response = self.client.get(self.list_path(prefix), params={"list": "true"})
        except RequestFailedError:
            self.failures += 1
            return []

        data = response.get("data")
        keys = data.get("keys") if isinstance(data, dict) else None
        if not isinstance(keys, list):
            return []
        return [str(key) for key in keys if key is not None and str(key)]
