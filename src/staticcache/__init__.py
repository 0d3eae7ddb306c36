"""staticcache -- write GET responses to disk as static files.

A request-caching middleware: it watches outgoing responses to GET requests
and persists their bodies under a root directory, keyed by URL path, so that
a static-file server can answer the next request for that path without
running the dynamic handler again.

Typical use::

    import staticcache

    cacher = staticcache.cache({"root": "public/cache", "clean": True})
    cacher(request, send, call_next)

Modules:
    cacher: :class:`RequestCacher` and the :func:`cache` factory.
    asgi: Starlette/FastAPI middleware built on the cacher.
    paths: URL to file path derivation.
    storage: Cleaning the root, writing and listing cached files.
    models: Pydantic models (:class:`CacheOptions`).
    exceptions: Exception hierarchy with exit-code mapping.
    app: The ``staticcache`` maintenance CLI.
"""

__version__ = "0.1.0"

from staticcache.cacher import RequestCacher, cache  # noqa: E402
from staticcache.exceptions import CacheWriteError, ConfigError, StaticCacheError  # noqa: E402
from staticcache.models import CacheOptions  # noqa: E402

__all__ = [
    "CacheOptions",
    "CacheWriteError",
    "ConfigError",
    "RequestCacher",
    "StaticCacheError",
    "cache",
]
