"""
Error taxonomy for the downloader.

Every failure in the core is raised as a DownloaderError subclass and left
to propagate; the entrypoint is the only place that catches them.
"""
from typing import Optional


class DownloaderError(Exception):
    """Base class for all unrecoverable downloader failures."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.url = url

    def __str__(self) -> str:
        if self.url:
            return f"{self.message}, url: {self.url}"
        return self.message


class ConfigError(DownloaderError):
    """Bad input: unencodable query, missing key, broken config file."""


class TransportError(DownloaderError):
    """Network-level failure while sending a request or reading a body."""


class ProtocolError(DownloaderError):
    """Server answered with a non-200 status."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: int = 0):
        super().__init__(message, url)
        self.status_code = status_code


class DecodeError(DownloaderError):
    """Page body is not JSON of the expected shape."""

    def __init__(self, message: str, url: Optional[str] = None, body: bytes = b''):
        super().__init__(message, url)
        self.body = body


class StorageError(DownloaderError):
    """Destination file could not be created or fully written."""

    def __init__(self, message: str, path: Optional[str] = None, url: Optional[str] = None):
        super().__init__(message, url)
        self.path = path
