"""Connection profile persistence for curlftp.

Provides the ConnectionProfile dataclass and ProfileManager, which keeps
named profiles in a JSON file. Passwords are never written here; see
CredentialManager.
"""

import json
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Dict, List, Optional

from curlftp.client.session import ConnectionParams
from curlftp.config.paths import get_profiles_path


@dataclass
class ConnectionProfile:
    """Saved connection settings for one server."""

    host: str = ""
    port: int = 21
    user: str = "anonymous"
    tls: bool = False
    ssl: bool = False
    passive: bool = False
    timeout: int = 30
    verify_certificates: bool = False

    def to_dict(self) -> dict:
        """Convert profile to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "ConnectionProfile":
        """Create profile from dictionary, ignoring unknown keys."""
        valid_fields = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        return cls(**filtered)

    def to_params(self, password: Optional[str] = None) -> ConnectionParams:
        """
        Build connection parameters for FTPSession.open().

        Args:
            password: Password to use; None applies the default for the user

        Returns:
            ConnectionParams for this profile
        """
        return ConnectionParams(password=password, **self.to_dict())


class ProfileManager:
    """Manages named connection profiles on disk."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize profile manager.

        Args:
            config_path: Optional custom path, defaults to platform standard
        """
        self._config_path = config_path or get_profiles_path()
        self._profiles: Optional[Dict[str, ConnectionProfile]] = None

    @property
    def config_path(self) -> Path:
        """Path to profiles file."""
        return self._config_path

    def load(self) -> Dict[str, ConnectionProfile]:
        """
        Load profiles from disk.

        Returns:
            Profiles by name (empty if file not found or unreadable)
        """
        profiles: Dict[str, ConnectionProfile] = {}
        if self._config_path.exists():
            try:
                with open(self._config_path, "r", encoding="utf-8") as f:
                    data = json.load(f)
                profiles = {
                    name: ConnectionProfile.from_dict(entry)
                    for name, entry in data.items()
                }
            except (json.JSONDecodeError, IOError, AttributeError, TypeError):
                # Invalid or unreadable file, start empty
                profiles = {}

        self._profiles = profiles
        return self._profiles

    def _save_all(self) -> None:
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        data = {name: profile.to_dict() for name, profile in self._profiles.items()}
        with open(self._config_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def get(self, name: str) -> Optional[ConnectionProfile]:
        """Return a profile by name, or None."""
        if self._profiles is None:
            self.load()
        return self._profiles.get(name)

    def names(self) -> List[str]:
        """Sorted names of saved profiles."""
        if self._profiles is None:
            self.load()
        return sorted(self._profiles)

    def save(self, name: str, profile: ConnectionProfile) -> None:
        """
        Persist a profile under a name, replacing any existing one.

        Args:
            name: Profile name
            profile: Profile to save
        """
        if self._profiles is None:
            self.load()
        self._profiles[name] = profile
        self._save_all()

    def remove(self, name: str) -> bool:
        """
        Delete a saved profile.

        Returns:
            True if a profile was removed
        """
        if self._profiles is None:
            self.load()
        if name not in self._profiles:
            return False
        del self._profiles[name]
        self._save_all()
        return True
