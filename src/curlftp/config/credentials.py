"""Secure credential storage for curlftp.

Uses the system keyring (Windows Credential Manager, macOS Keychain,
Linux Secret Service) to store FTP passwords outside profile files.
"""

from typing import Optional

import keyring
from keyring.errors import KeyringError

from curlftp.client.session import ConnectionParams
from curlftp.config.settings import ConnectionProfile


class CredentialManager:
    """Secure credential storage using system keyring."""

    SERVICE_NAME = "curlftp"

    def _make_key(self, host: str, username: str) -> str:
        return f"{host}:{username}"

    def save_password(self, host: str, username: str, password: str) -> bool:
        """
        Save FTP password securely.

        Returns:
            True if saved successfully, False otherwise
        """
        try:
            keyring.set_password(self.SERVICE_NAME, self._make_key(host, username), password)
            return True
        except KeyringError:
            return False

    def get_password(self, host: str, username: str) -> Optional[str]:
        """
        Retrieve saved password.

        Returns:
            Password string or None if not found
        """
        try:
            return keyring.get_password(self.SERVICE_NAME, self._make_key(host, username))
        except KeyringError:
            return None

    def delete_password(self, host: str, username: str) -> bool:
        """
        Remove saved password.

        Returns:
            True if deleted successfully, False otherwise
        """
        try:
            keyring.delete_password(self.SERVICE_NAME, self._make_key(host, username))
            return True
        except KeyringError:
            return False

    def params_for(self, profile: ConnectionProfile) -> ConnectionParams:
        """
        Build connection parameters for a profile using the stored password.

        Anonymous defaults apply when no password is stored.
        """
        return profile.to_params(self.get_password(profile.host, profile.user))
