"""Configuration module for curlftp.

- ProfileManager: JSON-based connection profile persistence
- CredentialManager: Secure password storage via keyring
- Paths: Application data locations
"""
