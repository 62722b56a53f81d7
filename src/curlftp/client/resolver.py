"""URL and path resolution for FTP sessions.

Pure helpers that turn the session's current path and an optional
file name into the remote path and the URL handed to the engine.
Components are used as given; no percent-encoding is applied.
"""

from typing import Optional

FTP_SCHEME = "ftp"
FTPS_SCHEME = "ftps"


def resolve_path(current_path: str, file_name: Optional[str] = None) -> str:
    """
    Build the remote path for a file relative to the current path.

    Args:
        current_path: Session working path, e.g. "/pub/"
        file_name: Optional file name to append

    Returns:
        Path without a leading "/", e.g. "pub/x.txt" or "pub/"
    """
    directory = (current_path or "").strip("/")
    if directory:
        directory += "/"
    return f"{directory}{file_name or ''}"


def resolve_url(
    host: str,
    current_path: str,
    file_name: Optional[str] = None,
    secure: bool = False
) -> str:
    """
    Build the fully qualified URL for a resource.

    Args:
        host: Remote host name
        current_path: Session working path
        file_name: Optional file name; None targets the directory itself
        secure: True selects the ftps scheme

    Returns:
        URL such as "ftp://example.com/pub/x.txt"
    """
    scheme = FTPS_SCHEME if secure else FTP_SCHEME
    return f"{scheme}://{host}/{resolve_path(current_path, file_name)}"
