"""Temporary staging storage for uploads.

The engine reads upload data from a file-like source, so content is
written to an anonymous temporary file first.
"""

import tempfile
from typing import BinaryIO, Optional


class StagingBuffer:
    """Temporary file holding bytes for a single upload."""

    def __init__(self, data: bytes):
        self._file: Optional[BinaryIO] = tempfile.TemporaryFile()
        self._file.write(data)
        self._file.flush()
        self._file.seek(0)
        self._size = len(data)

    @classmethod
    def from_bytes(cls, data: bytes) -> "StagingBuffer":
        """Create a buffer staged with the given bytes."""
        return cls(data)

    @property
    def handle(self) -> BinaryIO:
        """Readable handle positioned at the start of the data."""
        if self._file is None:
            raise ValueError("Staging buffer already released")
        return self._file

    @property
    def size(self) -> int:
        """Number of staged bytes."""
        return self._size

    @property
    def released(self) -> bool:
        return self._file is None

    def release(self) -> None:
        """Close and delete the backing file."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "StagingBuffer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
