"""Exception hierarchy for staticcache.

All exceptions inherit from :class:`StaticCacheError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`staticcache.exit_codes`.
The CLI entry point in :func:`staticcache.app.main` catches
``StaticCacheError`` and exits with the appropriate code.

Subclass hierarchy::

    StaticCacheError (exit 1)
    +-- ConfigError        (exit 2, also a TypeError)
    +-- CacheWriteError    (exit 5)

Only :class:`ConfigError` ever reaches the caller of the middleware.
:class:`CacheWriteError` is raised by :mod:`staticcache.storage` and caught
by :class:`~staticcache.cacher.RequestCacher`, which logs it and carries on
so that the real response is always delivered.
"""

from staticcache.exit_codes import (
    EXIT_FILESYSTEM_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
)


class StaticCacheError(Exception):
    """Base exception for all staticcache errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(StaticCacheError, TypeError):
    """Raised for missing or invalid cache options (e.g. no ``root``)."""

    exit_code = EXIT_INVALID_USAGE


class CacheWriteError(StaticCacheError):
    """Raised when the cache root or an artifact cannot be written or removed.

    Args:
        message: Human-readable error description.
        path: The filesystem path the failed operation targeted.
    """

    exit_code = EXIT_FILESYSTEM_ERROR

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path
