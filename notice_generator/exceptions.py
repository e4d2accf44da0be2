"""Custom exceptions for notice-file-generator."""


class NoticeError(Exception):
    """Base exception for all notice generation operations."""


class ConfigurationError(NoticeError):
    """Raised when configuration loading or validation fails."""


class ManifestError(NoticeError):
    """Raised when a dependency manifest cannot be read or parsed."""


class ResolutionError(NoticeError):
    """Raised when metadata for a single dependency cannot be resolved."""


class FileProcessingError(NoticeError):
    """Raised when notice files or directories cannot be written."""
