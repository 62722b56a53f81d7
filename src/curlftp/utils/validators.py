"""Input validators for curlftp.

Provides validation functions for connection parameters like hosts,
ports and timeouts.
"""

import re
from typing import Optional, Tuple


# Characters that would change the meaning of the generated URL
HOST_FORBIDDEN_PATTERN = re.compile(r'[\s/?#@]')


def validate_host(host: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a host name or address.

    Args:
        host: Host string to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not host or not str(host).strip():
        return False, "The specified host is empty. Set the host and try again."

    if HOST_FORBIDDEN_PATTERN.search(str(host)):
        return False, f"Invalid host: {host}"

    return True, None


def validate_port(port: int) -> Tuple[bool, Optional[str]]:
    """
    Validate a port number.

    Args:
        port: Port number to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(port, int):
        try:
            port = int(port)
        except (ValueError, TypeError):
            return False, "Port must be a number"

    if port < 1 or port > 65535:
        return False, f"Port must be between 1 and 65535, got {port}"

    return True, None


def validate_timeout(timeout: int) -> Tuple[bool, Optional[str]]:
    """
    Validate a timeout value in seconds.

    Args:
        timeout: Timeout in seconds

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(timeout, int):
        try:
            timeout = int(timeout)
        except (ValueError, TypeError):
            return False, "Timeout must be a number"

    if timeout < 1:
        return False, f"Timeout must be a positive number of seconds, got {timeout}"

    return True, None
