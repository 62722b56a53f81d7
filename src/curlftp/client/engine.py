"""Transfer engine adapter for curlftp.

Wraps a pycurl handle behind a closed set of directives so the session
never touches curl option constants directly. The engine owns the
libcurl handle: it is allocated in the constructor and released by
close().
"""

from enum import Enum
from io import BytesIO
from typing import Any, Callable, Dict, Optional
import logging

import pycurl

from curlftp.client.exceptions import DirectiveError, TransportInitError


logger = logging.getLogger("curlftp.engine")


class Directive(Enum):
    """Configuration units that can be applied to the engine."""
    PORT = "port"
    CREDENTIALS = "credentials"
    TIMEOUT = "timeout"
    HEADER_ECHO = "header_echo"
    UPLOAD_MODE = "upload_mode"
    RESPONSE_CAPTURE = "response_capture"
    FOLLOW_REDIRECTS = "follow_redirects"
    SECURE_TRANSPORT = "secure_transport"
    VERIFY_PEER = "verify_peer"
    VERIFY_HOST = "verify_host"
    AUTH_MODE = "auth_mode"
    ACTIVE_PORT = "active_port"
    LISTING_ONLY = "listing_only"
    TARGET_URL = "target_url"
    INPUT_SOURCE = "input_source"
    INPUT_SIZE = "input_size"
    PRE_TRANSFER_COMMANDS = "pre_transfer_commands"


class AuthMode(Enum):
    """FTPS authentication mode."""
    TLS = "tls"
    SSL = "ssl"


class EngineError(Exception):
    """An exchange failed inside the transfer engine."""

    def __init__(self, code: int, message: str):
        super().__init__(code, message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


def _flag(value: Any) -> int:
    return 1 if value else 0


def _empty_read(size: int) -> bytes:
    return b""


# Directive -> (curl option, value converter)
_CURL_OPTIONS: Dict[Directive, tuple] = {
    Directive.PORT: (pycurl.PORT, int),
    Directive.CREDENTIALS: (pycurl.USERPWD, str),
    Directive.TIMEOUT: (pycurl.TIMEOUT, int),
    Directive.HEADER_ECHO: (pycurl.HEADER, _flag),
    Directive.UPLOAD_MODE: (pycurl.UPLOAD, _flag),
    Directive.FOLLOW_REDIRECTS: (pycurl.FOLLOWLOCATION, _flag),
    Directive.SECURE_TRANSPORT: (
        pycurl.USE_SSL,
        lambda enabled: pycurl.USESSL_ALL if enabled else pycurl.USESSL_NONE,
    ),
    Directive.VERIFY_PEER: (pycurl.SSL_VERIFYPEER, _flag),
    Directive.VERIFY_HOST: (
        pycurl.SSL_VERIFYHOST,
        lambda enabled: 2 if enabled else 0,
    ),
    Directive.AUTH_MODE: (
        pycurl.FTPSSLAUTH,
        lambda mode: pycurl.FTPAUTH_TLS if mode == AuthMode.TLS else pycurl.FTPAUTH_SSL,
    ),
    Directive.ACTIVE_PORT: (pycurl.FTPPORT, str),
    Directive.LISTING_ONLY: (pycurl.DIRLISTONLY, _flag),
    Directive.TARGET_URL: (pycurl.URL, str),
    Directive.INPUT_SIZE: (
        pycurl.INFILESIZE,
        lambda size: -1 if size is None else int(size),
    ),
    Directive.PRE_TRANSFER_COMMANDS: (pycurl.QUOTE, list),
}


class TransferEngine:
    """Directive-driven FTP transfer engine backed by libcurl."""

    def __init__(self, curl_factory: Callable[[], Any] = pycurl.Curl):
        """
        Allocate the underlying curl handle.

        Args:
            curl_factory: Callable returning a new pycurl.Curl

        Raises:
            TransportInitError: If the handle cannot be allocated
        """
        try:
            self._curl = curl_factory()
        except pycurl.error as e:
            raise TransportInitError(e) from e
        self._capture_response = False

    @property
    def is_open(self) -> bool:
        """True until close() has been called."""
        return self._curl is not None

    def set_directive(self, directive: Directive, value: Any) -> None:
        """
        Apply a single directive to the handle.

        Args:
            directive: Directive to apply
            value: Directive value; None clears INPUT_SOURCE, INPUT_SIZE
                and PRE_TRANSFER_COMMANDS

        Raises:
            DirectiveError: If the value is rejected by the engine
        """
        if self._curl is None:
            raise DirectiveError(directive, -1)

        if directive == Directive.RESPONSE_CAPTURE:
            self._capture_response = bool(value)
            return

        try:
            if directive == Directive.INPUT_SOURCE:
                if value is None:
                    self._curl.setopt(pycurl.READFUNCTION, _empty_read)
                else:
                    self._curl.setopt(pycurl.READDATA, value)
            elif directive == Directive.PRE_TRANSFER_COMMANDS and not value:
                # An empty list leaves the previous quote list in place
                self._curl.unsetopt(pycurl.QUOTE)
            else:
                option, convert = _CURL_OPTIONS[directive]
                self._curl.setopt(option, convert(value))
        except pycurl.error as e:
            raise DirectiveError(directive, e.args[0], e) from e
        except (TypeError, ValueError) as e:
            raise DirectiveError(directive, 0, e) from e

    def exchange(self) -> bytes:
        """
        Perform one request/response exchange.

        Returns:
            Response payload (empty when response capture is disabled)

        Raises:
            EngineError: If the transfer fails
        """
        if self._curl is None:
            raise EngineError(-1, "Transfer engine is closed")

        buffer = BytesIO()
        if self._capture_response:
            self._curl.setopt(pycurl.WRITEDATA, buffer)

        try:
            self._curl.perform()
        except pycurl.error as e:
            code, message = e.args[0], e.args[1] if len(e.args) > 1 else ""
            logger.debug(f"Exchange failed ({code}): {message}")
            raise EngineError(code, message) from e

        return buffer.getvalue()

    def close(self) -> None:
        """Release the curl handle. Safe to call more than once."""
        curl, self._curl = self._curl, None
        if curl is not None:
            curl.close()
