"""FTP client exceptions for curlftp.

Custom exception hierarchy for session, directive and transfer
failures so callers can tell configuration problems apart from
engine and network errors.
"""

from typing import Optional


class FTPError(Exception):
    """Base exception for all curlftp errors."""

    def __init__(self, message: str, original_error: Exception = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message


class ConfigurationError(FTPError):
    """Connection parameters are missing or invalid."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class TransportInitError(FTPError):
    """The transfer engine handle could not be allocated."""

    def __init__(self, original_error: Exception = None):
        super().__init__("Could not initialize transfer engine", original_error)


class DirectiveError(FTPError):
    """A directive could not be applied to the transfer engine."""

    def __init__(self, directive, code: int, original_error: Exception = None):
        self.directive = directive
        self.code = code
        name = getattr(directive, "name", directive)
        message = f"Could not set directive {name} ({code})"
        super().__init__(message, original_error)


class TransferError(FTPError):
    """The request/response exchange with the server failed."""

    def __init__(self, path: str, code: int, diagnostic: str):
        self.path = path
        self.code = code
        self.diagnostic = diagnostic
        message = f"Could not handle content in path: {path} ({code}: {diagnostic})"
        super().__init__(message)


class NotConnectedError(FTPError):
    """Operation attempted on a session without an open connection."""

    def __init__(self, operation: str = "Operation"):
        self.operation = operation
        message = f"{operation} requires an open FTP session"
        super().__init__(message)
