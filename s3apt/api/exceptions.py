"""Exception definitions for s3apt"""

from ..constants import ErrorCode


class S3AptError(Exception):
    """Base exception for s3apt"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.error_code = error_code


class ParseError(S3AptError):
    """Malformed control text or package file"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.PARSE_ERROR)


class ConfigError(S3AptError):
    """Configuration error"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CONFIG_ERROR)


class StorageError(S3AptError):
    """Object store operation error"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.STORAGE_ERROR)


class ConflictError(S3AptError):
    """An object or package already exists with different content"""

    def __init__(self, message: str, key: str = None):
        super().__init__(message, ErrorCode.ALREADY_EXISTS)
        self.key = key


class SigningError(S3AptError):
    """Signing the release descriptor failed"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.SIGNING_FAILED)


class PackageNotFoundError(S3AptError):
    """No package matched a delete request"""

    def __init__(self, name: str, versions=None):
        if versions:
            message = f"Package not found: {name} (versions: {', '.join(versions)})"
        else:
            message = f"Package not found: {name}"
        super().__init__(message, ErrorCode.PACKAGE_NOT_FOUND)
        self.name = name
        self.versions = versions
