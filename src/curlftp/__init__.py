"""curlftp: FTP/FTPS client sessions driven through libcurl.

Typical use:

    with FTPSession() as session:
        session.open({"host": "ftp.example.com", "passive": True})
        session.cd("/pub/")
        names = [entry.text for entry in session.ls()]
"""

import logging

from curlftp.client.exceptions import (
    ConfigurationError,
    DirectiveError,
    FTPError,
    NotConnectedError,
    TransferError,
    TransportInitError,
)
from curlftp.client.session import (
    ConnectionParams,
    ConnectionState,
    FTPSession,
    ListingEntry,
)

logging.getLogger("curlftp").addHandler(logging.NullHandler())

__version__ = "1.0.0"

__all__ = [
    "ConfigurationError",
    "ConnectionParams",
    "ConnectionState",
    "DirectiveError",
    "FTPError",
    "FTPSession",
    "ListingEntry",
    "NotConnectedError",
    "TransferError",
    "TransportInitError",
]
