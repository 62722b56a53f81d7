"""Utility module for curlftp.

- Logging: Configured logging with credential redaction
- Validators: Input validation for host, port, timeout
"""
