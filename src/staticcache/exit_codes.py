"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~staticcache.exceptions.StaticCacheError` subclass.
Shell wrappers and deploy scripts can inspect the exit code to tell a bad
configuration apart from a filesystem failure without parsing stderr.

Example::

    $ staticcache clean --root /var/www/cache
    $ echo $?
    5   # EXIT_FILESYSTEM_ERROR -- the root could not be recreated
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or an invalid configuration."""

EXIT_FILESYSTEM_ERROR = 5
"""A cache directory or artifact could not be removed, created, or written."""
