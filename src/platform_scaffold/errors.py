"""Exceptions that abort a scaffolding run."""


class ScaffoldError(Exception):
    """Base exception for fatal scaffolding failures."""


class ConfigError(ScaffoldError):
    """Raised when scaffold options are missing or invalid."""


class DownloadError(ScaffoldError):
    """Raised when the artifact or a remote patch cannot be fetched."""


class ExtractionError(ScaffoldError):
    """Raised when the artifact archive cannot be extracted."""
