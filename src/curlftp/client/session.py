"""FTP session management for curlftp.

Provides ConnectionState enum, ConnectionParams dataclass, ListingEntry
and the FTPSession class that owns a transfer engine for the lifetime
of a connection.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Callable, List, Mapping, Optional, Union
import logging

from curlftp.client.engine import AuthMode, Directive, TransferEngine
from curlftp.client.exceptions import ConfigurationError, NotConnectedError, TransferError
from curlftp.client.executor import OperationExecutor
from curlftp.client.resolver import resolve_path
from curlftp.utils.validators import validate_host, validate_port, validate_timeout


logger = logging.getLogger("curlftp.session")

ANONYMOUS_USER = "anonymous"
ANONYMOUS_PASSWORD = "anonymous@noserver.com"
ROOT_PATH = "/"
# FTPPORT value asking the engine to pick a local port for active mode
ACTIVE_MODE_ANY_PORT = "-"


class ConnectionState(Enum):
    """FTP session state."""
    UNOPENED = "unopened"
    CONNECTED = "connected"
    CLOSED = "closed"


@dataclass
class ConnectionParams:
    """Connection parameters consumed by FTPSession.open()."""
    host: str = ""
    port: int = 21
    user: str = ANONYMOUS_USER
    password: Optional[str] = None
    tls: bool = False
    ssl: bool = False
    passive: bool = False
    timeout: int = 30
    verify_certificates: bool = False

    def __post_init__(self):
        """Fill in the password default for the chosen user."""
        if self.user is None:
            self.user = ANONYMOUS_USER
        if self.password is None:
            self.password = ANONYMOUS_PASSWORD if self.user == ANONYMOUS_USER else ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ConnectionParams":
        """Create parameters from a mapping, ignoring unknown keys."""
        valid_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in data.items() if k in valid_fields and v is not None}
        return cls(**filtered)

    def validate(self) -> None:
        """
        Check the parameters before any network activity.

        Raises:
            ConfigurationError: If a parameter is missing or invalid
        """
        for field_name, (is_valid, error) in (
            ("host", validate_host(self.host)),
            ("port", validate_port(self.port)),
            ("timeout", validate_timeout(self.timeout)),
        ):
            if not is_valid:
                raise ConfigurationError(error, field_name)


@dataclass(frozen=True)
class ListingEntry:
    """One line of a directory listing."""
    text: str
    id: str


EngineFactory = Callable[[], TransferEngine]


class FTPSession:
    """Owns one transfer engine and the working path of an FTP connection."""

    def __init__(self, engine_factory: EngineFactory = TransferEngine, encoding: str = "utf-8"):
        """
        Initialize an unopened session.

        Args:
            engine_factory: Callable allocating a transfer engine
            encoding: Text encoding for listings, reads and string uploads
        """
        self._engine_factory = engine_factory
        self._engine: Optional[TransferEngine] = None
        self._executor: Optional[OperationExecutor] = None
        self._host_name: Optional[str] = None
        self._path = ROOT_PATH
        self._use_secure_transport = False
        self._state = ConnectionState.UNOPENED
        self.encoding = encoding

    def __enter__(self) -> "FTPSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __del__(self):
        engine = getattr(self, "_engine", None)
        self._engine = None
        if engine is not None:
            engine.close()

    @property
    def state(self) -> ConnectionState:
        """Current session state."""
        return self._state

    @property
    def is_connected(self) -> bool:
        """True while an engine handle is held."""
        return self._engine is not None

    @property
    def host_name(self) -> Optional[str]:
        """Host given at connect time, None when not connected."""
        return self._host_name

    @property
    def use_secure_transport(self) -> bool:
        """True when URLs use the ftps scheme."""
        return self._use_secure_transport

    def open(self, params: Union[ConnectionParams, Mapping[str, Any], None] = None) -> None:
        """
        Open the session from connection parameters.

        Args:
            params: ConnectionParams or a mapping with the same keys
                (host, port, user, password, tls, ssl, passive, timeout)

        Raises:
            ConfigurationError: If the parameters are invalid
            TransportInitError: If the engine cannot be allocated
            DirectiveError: If the engine rejects a directive
            TransferError: If the initial listing fails
        """
        if params is None:
            params = ConnectionParams()
        elif not isinstance(params, ConnectionParams):
            params = ConnectionParams.from_dict(params)

        params.validate()

        self.connect(
            params.host,
            params.port,
            params.user,
            params.password,
            use_tls=params.tls,
            use_ssl=params.ssl,
            use_passive_mode=params.passive,
            timeout=params.timeout,
            verify_certificates=params.verify_certificates,
        )

    def connect(
        self,
        host: str,
        port: int,
        user: str,
        password: str,
        use_tls: bool = False,
        use_ssl: bool = False,
        use_passive_mode: bool = True,
        timeout: int = 30,
        verify_certificates: bool = False
    ) -> None:
        """
        Allocate an engine, configure it and confirm the connection.

        Certificate verification is off by default under TLS/SSL so that
        servers with self-signed certificates keep working.

        Raises:
            TransportInitError: If the engine cannot be allocated
            DirectiveError: If the engine rejects a directive
            TransferError: If the initial listing fails
        """
        if self._engine is not None:
            self.close()

        self._engine = self._engine_factory()
        self._host_name = host
        self._use_secure_transport = bool(use_tls or use_ssl)
        self._path = ROOT_PATH

        directives = [
            (Directive.PORT, port),
            (Directive.CREDENTIALS, f"{user}:{password}"),
            (Directive.TIMEOUT, timeout),
            (Directive.HEADER_ECHO, False),
            (Directive.UPLOAD_MODE, False),
            (Directive.RESPONSE_CAPTURE, True),
            (Directive.FOLLOW_REDIRECTS, True),
        ]
        if use_tls or use_ssl:
            directives += [
                (Directive.SECURE_TRANSPORT, True),
                (Directive.VERIFY_PEER, verify_certificates),
                (Directive.VERIFY_HOST, verify_certificates),
                (Directive.AUTH_MODE, AuthMode.TLS if use_tls else AuthMode.SSL),
            ]
        if not use_passive_mode:
            directives.append((Directive.ACTIVE_PORT, ACTIVE_MODE_ANY_PORT))

        logger.info(f"Connecting to {host}:{port} as {user}")
        try:
            for directive, value in directives:
                self._engine.set_directive(directive, value)

            self._executor = OperationExecutor(
                self._engine,
                host,
                self._use_secure_transport,
                lambda: self._path,
            )
            self._executor.execute_exchange()
        except Exception as e:
            logger.warning(f"Connection to {host}:{port} failed: {e}")
            self._release()
            raise

        self._state = ConnectionState.CONNECTED
        logger.info(f"Connected to {host}:{port}")

    def close(self) -> None:
        """Release the engine and reset the session. Safe to call repeatedly."""
        if self._engine is not None:
            logger.info(f"Closing session to {self._host_name}")
        self._release()
        self._state = ConnectionState.CLOSED

    def _release(self) -> None:
        engine, self._engine = self._engine, None
        self._executor = None
        self._host_name = None
        self._path = ROOT_PATH
        self._use_secure_transport = False
        if engine is not None:
            engine.close()

    def _require_executor(self, operation: str) -> OperationExecutor:
        if self._executor is None:
            raise NotConnectedError(operation)
        return self._executor

    def cd(self, path: str) -> None:
        """
        Change the working path.

        Only the local path changes; an invalid path surfaces on the
        next operation.
        """
        self._require_executor("Change directory")
        self._path = path

    def pwd(self) -> str:
        """Current working path."""
        return self._path

    def ls(self) -> List[ListingEntry]:
        """
        List names in the working path.

        Returns:
            Entries in server order; empty when the server returns nothing

        Raises:
            NotConnectedError: If the session is not open
            TransferError: If the listing fails
        """
        result = self._require_executor("List").execute_exchange()
        # Names outside the session encoding are kept with replacement characters
        text = result.decode(self.encoding, errors="replace").strip()
        if not text:
            return []

        prefix = self._path.rstrip("/")
        return [
            ListingEntry(text=line, id=f"{prefix}/{line}")
            for line in (raw.rstrip("\r") for raw in text.split("\n"))
        ]

    def read_bytes(self, file_name: str) -> bytes:
        """Download a file in the working path as raw bytes."""
        return self._require_executor("Read").execute_exchange(file_name)

    def read(self, file_name: str) -> str:
        """
        Download a file in the working path as text.

        Raises:
            NotConnectedError: If the session is not open
            TransferError: If the download fails or is not valid text
        """
        content = self.read_bytes(file_name)
        try:
            return content.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise TransferError(resolve_path(self._path, file_name), 0, str(e)) from e

    def write(self, file_name: str, content: Union[str, bytes]) -> None:
        """
        Upload content to a file in the working path.

        Raises:
            NotConnectedError: If the session is not open
            DirectiveError: If an upload directive cannot be applied
            TransferError: If the upload fails
        """
        executor = self._require_executor("Write")
        if isinstance(content, str):
            content = content.encode(self.encoding)
        executor.upload(file_name, content)
        logger.debug(f"Wrote {len(content)} bytes to {file_name}")

    def rm(self, file_name: str) -> str:
        """
        Delete a file in the working path.

        Returns:
            The server response to the exchange carrying the delete

        Raises:
            NotConnectedError: If the session is not open
            TransferError: If the delete fails
        """
        result = self._require_executor("Delete").delete(file_name)
        logger.info(f"Deleted {file_name} in {self._path}")
        return result.decode(self.encoding, errors="replace")
