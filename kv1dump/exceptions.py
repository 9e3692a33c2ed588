"""Exceptions for kv1dump."""

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INCOMPATIBLE_MOUNT = 3
EXIT_PREREQUISITE_MISSING = 4


class Kv1DumpError(Exception):
    """Base class for kv1dump errors."""

    exit_code = EXIT_FAILURE


class UsageError(Kv1DumpError):
    """Raised when arguments or configuration are missing or invalid."""

    exit_code = EXIT_USAGE


class PrerequisiteMissingError(Kv1DumpError):
    """Raised when a required module is not importable."""

    exit_code = EXIT_PREREQUISITE_MISSING

    def __init__(self, module: str, purpose: str = "required"):
        message = f"{module} is required ({purpose})"
        super().__init__(message)
        self.module = module
        self.purpose = purpose


class IncompatibleMountError(Kv1DumpError):
    """Raised when the mount is not a KV version 1 engine."""

    exit_code = EXIT_INCOMPATIBLE_MOUNT

    def __init__(self, mount: str, version: str):
        message = (
            f"Detected KV version: v{version} on mount '{mount}'. "
            "This tool is for KV v1 mounts only. "
            "For KV v2 you must read from the /data/ and /metadata/ endpoints "
            "(different API paths)."
        )
        super().__init__(message)
        self.mount = mount
        self.version = version


class RequestFailedError(Kv1DumpError):
    """Raised when a request to Vault fails at the transport or HTTP level."""

    def __init__(self, url: str, reason: str = "request failed"):
        message = f"HTTP request failed for {url}: {reason}"
        super().__init__(message)
        self.url = url
        self.reason = reason
