"""HTTP client for the Vault API."""

from typing import Any, Dict, Optional

from .exceptions import PrerequisiteMissingError, RequestFailedError
from .types import DumpConfig


class VaultHTTPClient:
    """Issues authenticated GET requests against a Vault server.

    The token travels in the ``X-Vault-Token`` header on every request.
    Any non-success status or transport error is raised as
    :class:`RequestFailedError`; nothing is retried.

    Requests go out on hvac's session with the exact URL built from the
    config, since hvac's adapter strips the trailing slash that
    ``sys/mounts/<mount>/`` and sub-namespace listings need.
    """

    def __init__(self, config: DumpConfig):
        # Lazy import so a missing dependency surfaces as a prerequisite error
        try:
            import hvac
            import requests
            from hvac.exceptions import VaultError
            from hvac.utils import raise_for_error
        except ImportError as e:
            raise PrerequisiteMissingError(e.name or "hvac", "HTTP client for the Vault API")

        self.config = config
        self._raise_for_error = raise_for_error
        self._vault_errors = (VaultError, requests.exceptions.RequestException)
        self._client = hvac.Client(
            url=config.vault_addr,
            token=config.vault_token.get_secret_value(),
            namespace=config.namespace,
            verify=config.verify,
            timeout=config.timeout,
        )

    def _headers(self) -> Dict[str, str]:
        headers = {
            "X-Vault-Token": self.config.vault_token.get_secret_value(),
            "X-Vault-Request": "true",
        }
        if self.config.namespace:
            headers["X-Vault-Namespace"] = self.config.namespace
        return headers

    def get(self, path: str, params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """GET an API path below /v1/ and return the decoded JSON body."""
        url = self.config.api_url(path)
        try:
            response = self._client.adapter.session.request(
                "GET",
                url,
                headers=self._headers(),
                params=params,
                timeout=self.config.timeout,
                verify=self.config.verify,
            )
            if not 200 <= response.status_code < 300:
                errors = None
                try:
                    errors = response.json().get("errors")
                except (ValueError, AttributeError):
                    pass
                self._raise_for_error("get", url, response.status_code, response.text, errors=errors)
                raise RequestFailedError(url, f"HTTP {response.status_code}")
        except self._vault_errors as e:
            reason = str(e) or type(e).__name__
            raise RequestFailedError(url, reason) from e

        if not response.content:
            return {}
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}
