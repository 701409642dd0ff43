"""Exception types raised by babelsync."""

from typing import List, Optional

import requests


# Connection-level failures come straight from requests and are not wrapped.
TransportError = requests.RequestException


class BabelsyncError(Exception):
    """Base class for all babelsync errors."""


class ConfigError(BabelsyncError):
    """Required configuration is missing or invalid."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


class MalformedValueError(BabelsyncError, ValueError):
    """A localization value was built from a wire node without text."""


InvalidValueError = MalformedValueError


class ExtractionFailedError(BabelsyncError):
    """The external string extraction tool failed for a source file."""

    def __init__(
        self,
        path: str,
        returncode: Optional[int] = None,
        output: str = "",
        table: Optional[str] = None,
    ):
        self.path = path
        self.returncode = returncode
        self.output = output
        self.table = table
        if table is not None:
            message = f"could not read {table} produced by genstrings for {path}"
        elif returncode is None:
            message = f"genstrings could not be started for {path}"
        else:
            message = f"genstrings failed for {path} (exit code {returncode})"
        if output:
            message += f": {output.strip()}"
        super().__init__(message)


class ServiceError(BabelsyncError):
    """The translation service answered with a non-success status."""

    def __init__(
        self,
        message: str,
        method: Optional[str] = None,
        path: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.method = method
        self.path = path
        self.status_code = status_code

    def describe(self) -> str:
        """Message prefixed with the request that failed."""
        if self.method and self.path:
            return f"{self.method} {self.path} ({self.status_code}): {self.message}"
        return self.message


class MalformedResponseError(ServiceError):
    """A failed response whose body is not the expected <result><error> document."""

    def __init__(
        self,
        body: bytes,
        method: Optional[str] = None,
        path: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        self.body = body
        super().__init__(
            f"Unexpected error response (HTTP {status_code})",
            method=method,
            path=path,
            status_code=status_code,
        )
