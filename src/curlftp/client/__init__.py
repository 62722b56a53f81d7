"""FTP client module for curlftp.

This module drives FTP/FTPS transfers:
- FTPSession: Session lifecycle and caller-facing operations
- OperationExecutor: Directive sequences and exchanges per operation
- TransferEngine: Directive-keyed adapter over pycurl
- Resolver: URL and path construction
- Exceptions: Typed error hierarchy
"""
