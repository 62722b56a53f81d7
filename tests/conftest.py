"""Pytest configuration and shared fixtures for curlftp tests."""

import pytest
from typing import Any, Dict, List, Optional, Tuple

from curlftp.client.engine import Directive, EngineError
from curlftp.client.exceptions import DirectiveError
from curlftp.client.session import FTPSession


# Test constants
TEST_FTP_HOST = "ftp.example.com"
TEST_FTP_USER = "testuser"
TEST_FTP_PASS = "testpass"


class FakeEngine:
    """
    In-memory transfer engine that behaves like an FTP server.

    Files live in a dict keyed by absolute path. Directives are recorded
    in order so tests can assert on the exact configuration sequence.
    """

    def __init__(self, files: Optional[Dict[str, bytes]] = None):
        self.files: Dict[str, bytes] = dict(files or {})
        self.directives: Dict[Directive, Any] = {}
        self.history: List[Tuple[Directive, Any]] = []
        self.exchanges: List[Dict[Directive, Any]] = []
        self.closed = 0
        self.fail_directives: Dict[Directive, int] = {}
        self.fail_exchange: Optional[Tuple[int, str]] = None

    @property
    def is_open(self) -> bool:
        return self.closed == 0

    def set_directive(self, directive: Directive, value: Any) -> None:
        if directive in self.fail_directives:
            raise DirectiveError(directive, self.fail_directives[directive])
        self.history.append((directive, value))
        self.directives[directive] = value

    def _target(self) -> str:
        url = self.directives[Directive.TARGET_URL]
        _, _, rest = url.partition("://")
        _, _, path = rest.partition("/")
        return "/" + path

    def exchange(self) -> bytes:
        self.exchanges.append(dict(self.directives))
        if self.fail_exchange is not None:
            code, message = self.fail_exchange
            raise EngineError(code, message)

        for command in self.directives.get(Directive.PRE_TRANSFER_COMMANDS) or []:
            verb, _, argument = command.partition(" ")
            if verb != "DELE" or argument not in self.files:
                raise EngineError(21, "QUOTE command returned error")
            del self.files[argument]

        target = self._target()
        if self.directives.get(Directive.UPLOAD_MODE):
            source = self.directives[Directive.INPUT_SOURCE]
            self.files[target] = source.read(self.directives[Directive.INPUT_SIZE])
            return b""

        if self.directives.get(Directive.LISTING_ONLY):
            prefix = target if target.endswith("/") else target + "/"
            names = [
                path[len(prefix):]
                for path in self.files
                if path.startswith(prefix) and "/" not in path[len(prefix):]
            ]
            return "\r\n".join(names).encode() + (b"\r\n" if names else b"")

        if target not in self.files:
            raise EngineError(78, "The file does not exist")
        return self.files[target]

    def close(self) -> None:
        self.closed += 1


@pytest.fixture
def engine() -> FakeEngine:
    """Provide an in-memory engine with a small /pub directory."""
    return FakeEngine({
        "/pub/a.txt": b"alpha",
        "/pub/b.txt": b"bravo",
        "/readme.txt": b"welcome",
    })


@pytest.fixture
def session(engine: FakeEngine) -> FTPSession:
    """Provide a session wired to the fake engine (not yet opened)."""
    return FTPSession(engine_factory=lambda: engine)


@pytest.fixture
def connected_session(session: FTPSession) -> FTPSession:
    """Provide a session opened against the fake engine."""
    session.open({"host": TEST_FTP_HOST, "user": TEST_FTP_USER, "password": TEST_FTP_PASS})
    return session
