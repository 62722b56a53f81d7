"""Operation executor for curlftp sessions.

Translates logical operations (list, read, write, delete) into directive
sequences on the transfer engine followed by a single exchange.
"""

from typing import Callable, Optional, Tuple
import logging

from curlftp.client.engine import Directive, EngineError, TransferEngine
from curlftp.client.exceptions import DirectiveError, TransferError
from curlftp.client.resolver import resolve_path, resolve_url
from curlftp.client.staging import StagingBuffer


logger = logging.getLogger("curlftp.executor")


class OperationExecutor:
    """Applies operation directives and runs exchanges on one engine."""

    def __init__(
        self,
        engine: TransferEngine,
        host: str,
        secure: bool,
        current_path: Callable[[], str]
    ):
        """
        Initialize the executor.

        Args:
            engine: Engine owned by the session
            host: Remote host name
            secure: True for ftps URLs
            current_path: Callable returning the session's working path
        """
        self._engine = engine
        self._host = host
        self._secure = secure
        self._current_path = current_path

    def execute_exchange(self, file_name: Optional[str] = None) -> bytes:
        """
        Run one exchange against the current path or a file in it.

        Without a file name the exchange lists the current directory.

        Args:
            file_name: Optional target file name

        Returns:
            Raw response payload

        Raises:
            DirectiveError: If a directive cannot be applied
            TransferError: If the exchange fails
        """
        path = self._current_path()
        url = resolve_url(self._host, path, file_name, self._secure)

        self._engine.set_directive(Directive.LISTING_ONLY, not file_name)
        self._engine.set_directive(Directive.TARGET_URL, url)

        logger.debug(f"Exchange: {url}")
        try:
            return self._engine.exchange()
        except EngineError as e:
            logger.warning(f"Exchange failed for {url}: {e}")
            raise TransferError(resolve_path(path, file_name), e.code, e.message) from e

    def upload(self, file_name: str, data: bytes) -> bytes:
        """
        Upload bytes to a file in the current path.

        Upload directives are cleared and the staging buffer released
        whether or not the exchange succeeds.
        """
        cleanup = (
            (Directive.UPLOAD_MODE, False),
            (Directive.INPUT_SOURCE, None),
            (Directive.INPUT_SIZE, None),
        )
        with StagingBuffer.from_bytes(data) as buffer:
            try:
                self._engine.set_directive(Directive.UPLOAD_MODE, True)
                self._engine.set_directive(Directive.INPUT_SOURCE, buffer.handle)
                self._engine.set_directive(Directive.INPUT_SIZE, buffer.size)
                result = self.execute_exchange(file_name)
            except Exception:
                self._run_cleanup(cleanup, strict=False)
                raise
            self._run_cleanup(cleanup)
        return result

    def delete(self, file_name: str) -> bytes:
        """Delete a file in the current path via a pre-transfer DELE."""
        remote = resolve_path(self._current_path(), file_name).lstrip("/")
        cleanup = ((Directive.PRE_TRANSFER_COMMANDS, None),)
        try:
            self._engine.set_directive(Directive.PRE_TRANSFER_COMMANDS, [f"DELE /{remote}"])
            result = self.execute_exchange()
        except Exception:
            self._run_cleanup(cleanup, strict=False)
            raise
        self._run_cleanup(cleanup)
        return result

    def _run_cleanup(self, directives: Tuple[tuple, ...], strict: bool = True) -> None:
        """
        Apply every cleanup directive even if an earlier one fails.

        Args:
            directives: (directive, value) pairs to apply
            strict: Raise the first cleanup failure once all were attempted
        """
        failure: Optional[DirectiveError] = None
        for directive, value in directives:
            try:
                self._engine.set_directive(directive, value)
            except DirectiveError as e:
                logger.warning(f"Cleanup of {directive.name} failed: {e}")
                if failure is None:
                    failure = e
        if failure is not None and strict:
            raise failure
