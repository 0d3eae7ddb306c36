"""Pydantic models shared across staticcache modules.

:class:`CacheOptions` is the configuration a
:class:`~staticcache.cacher.RequestCacher` holds for its whole lifetime. It
is frozen so that the root cannot drift under a running cacher.

:class:`CachedArtifact` is never tracked in memory by the middleware; it only
describes files found on disk by :func:`~staticcache.storage.list_artifacts`.
"""

from __future__ import annotations

import os
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from staticcache.exceptions import ConfigError

DEFAULT_INDEX_FILE = "index.html"


class CacheOptions(BaseModel):
    """Options for a :class:`~staticcache.cacher.RequestCacher`.

    Example::

        CacheOptions(root="/var/www/cache", clean=True)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    root: str = Field(
        min_length=1, description="Directory under which cached files are written"
    )
    clean: bool = Field(
        default=False,
        description="Remove and recreate the root directory when the cacher is created",
    )
    index_file: str = Field(
        default=DEFAULT_INDEX_FILE,
        description="Filename written for URL paths without an extension",
    )

    @field_validator("root", mode="before")
    @classmethod
    def _fspath_root(cls, value: Any) -> Any:
        if isinstance(value, os.PathLike):
            return os.fspath(value)
        return value

    @field_validator("index_file")
    @classmethod
    def _bare_filename(cls, value: str) -> str:
        if not value or value in (".", "..") or "/" in value or "\\" in value:
            raise ValueError("index_file must be a bare filename")
        return value

    @classmethod
    def parse(cls, options: Optional[CacheOptions | Mapping[str, Any]]) -> CacheOptions:
        """Validate *options* and return a :class:`CacheOptions`.

        Args:
            options: An existing ``CacheOptions`` (returned unchanged) or a
                mapping with at least a ``root`` key.

        Raises:
            ConfigError: If *options* is ``None``, not a mapping, lacks a
                ``root``, or fails field validation.
        """
        if isinstance(options, cls):
            return options
        if options is None:
            raise ConfigError("An options object must be passed")
        if not isinstance(options, Mapping):
            raise ConfigError(
                f"Options must be a mapping, got {type(options).__name__}"
            )
        if not options.get("root"):
            raise ConfigError("Options must contain a root")
        try:
            return cls.model_validate(dict(options))
        except ValidationError as exc:
            raise ConfigError(f"Invalid cache options: {exc}") from exc


class CachedArtifact(BaseModel):
    """A cached response body found on disk under the root."""

    url_path: str = Field(description="URL path the file would be served for")
    path: str = Field(description="Filesystem path of the cached file")
    size: int = Field(description="File size in bytes")
