"""The request cacher: writes GET response bodies to static files.

A :class:`RequestCacher` sits in a request pipeline. For every GET request it
hands the rest of the pipeline a wrapped ``send`` function; when a body is
finally sent through it, the body is written to the file derived from the
request URL (see :mod:`staticcache.paths`) and then passed on, unchanged, to
the original ``send``. A separate static-file layer can later serve those
files without running the dynamic handler again.

Nothing is mutated in place: ``send`` is an ordinary function value and the
cacher returns a new one that composes the write with the original. Writes
are best-effort. Any error raised while deriving the path or writing the
file is logged and swallowed so the real response is always delivered.

Example::

    import staticcache

    cacher = staticcache.cache({"root": "/var/www/cache", "clean": True})

    def handler(send):
        return send("<h1>Hello</h1>")

    cacher(request, send=transmit, call_next=handler)
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, Future
from typing import Any, Callable, Mapping, Optional, Protocol, TypeVar

from staticcache.exceptions import CacheWriteError
from staticcache.models import CacheOptions
from staticcache.paths import is_within, target_path
from staticcache.storage import clean_root, write_artifact

Body = str | bytes
SendFn = Callable[[Body], Any]
T = TypeVar("T")


class Request(Protocol):
    """What the cacher needs to know about an inbound request."""

    method: str
    url: str


class RequestCacher:
    """Caches GET response bodies as static files under a root directory.

    If ``options.clean`` is set, the root is removed and recreated
    synchronously in the constructor, so no artifact write can ever land in
    a directory that is about to be wiped.

    Args:
        options: A :class:`~staticcache.models.CacheOptions` or a mapping
            with at least a ``root`` key.
        logger: Logger for cache diagnostics. Defaults to the
            ``staticcache`` logger.
        executor: When given, artifact writes are submitted to it and not
            awaited, so the response is sent without waiting on disk I/O.
            Without one, writes happen inline before the body is passed on.

    Raises:
        ConfigError: If *options* is missing or has no ``root``.
    """

    def __init__(
        self,
        options: CacheOptions | Mapping[str, Any] | None,
        *,
        logger: Optional[logging.Logger] = None,
        executor: Optional[Executor] = None,
    ) -> None:
        self.options = CacheOptions.parse(options)
        self._logger = logger or logging.getLogger("staticcache")
        self._executor = executor

        if self.options.clean:
            self.clean()

    @property
    def root(self) -> str:
        return self.options.root

    def __call__(
        self, request: Request, send: SendFn, call_next: Callable[[SendFn], T]
    ) -> T:
        return self.handle(request, send, call_next)

    def handle(
        self, request: Request, send: SendFn, call_next: Callable[[SendFn], T]
    ) -> T:
        """Run *call_next* with a ``send`` that caches GET response bodies.

        Non-GET requests are never cached: *call_next* receives the original
        *send*. For GET requests it receives :meth:`wrap_send` of it. Either
        way *call_next* is invoked immediately and its result returned.

        Args:
            request: The inbound request (``method`` and ``url``).
            send: The function that transmits the response body.
            call_next: Continuation for the rest of the pipeline.
        """
        if request.method.upper() != "GET":
            self._logger.debug("Skipping non-GET request at `%s`", request.url)
            return call_next(send)

        self._logger.debug("Received request at `%s`", request.url)
        return call_next(self.wrap_send(request.url, send))

    def wrap_send(self, url: str, send: SendFn) -> SendFn:
        """Return a ``send`` that caches the body for *url*, then calls *send*."""

        def send_and_cache(body: Body) -> Any:
            self._logger.debug("Response send intercepted at `%s`", url)
            self.cache(url, body)
            return send(body)

        return send_and_cache

    def cache(self, url: str, body: Body) -> None:
        """Write *body* to the target file for *url*.

        Failures are logged and never raised, so a caller wrapping ``send``
        always gets to send the body.
        """
        try:
            self._cache(url, body)
        except Exception as exc:
            self._logger.warning("Failed to cache response for `%s`: %s", url, exc)

    def _cache(self, url: str, body: Body) -> None:
        target = self.target(url)
        if not is_within(self.options.root, target):
            self._logger.warning("Refusing to cache `%s` outside root at `%s`", url, target)
            return

        self._logger.debug(
            "Writing file for `%s` with length %d to `%s`", url, len(body), target
        )

        if self._executor is None:
            self._write(target, body)
            return

        try:
            future = self._executor.submit(write_artifact, target, body)
        except RuntimeError as exc:
            # Executor already shut down.
            self._logger.warning("Write executor unavailable (%s), writing inline", exc)
            self._write(target, body)
            return
        future.add_done_callback(lambda f: self._log_failure(f, target))

    def target(self, url: str) -> str:
        """Return the file path that caches the response for *url*."""
        return target_path(self.options.root, url, self.options.index_file)

    def clean(self) -> None:
        """Remove the root directory and create a new empty one in its place."""
        try:
            clean_root(self.options.root)
        except CacheWriteError as exc:
            self._logger.warning("Failed to clean cache root: %s", exc)

    def _write(self, target: str, body: Body) -> None:
        try:
            write_artifact(target, body)
        except CacheWriteError as exc:
            self._logger.warning("Failed to cache response: %s", exc)

    def _log_failure(self, future: Future, target: str) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            self._logger.warning("Failed to cache response at `%s`: %s", target, exc)


def cache(
    options: CacheOptions | Mapping[str, Any] | None,
    *,
    logger: Optional[logging.Logger] = None,
    executor: Optional[Executor] = None,
) -> RequestCacher:
    """Validate *options* and return a callable :class:`RequestCacher`.

    Raises:
        ConfigError: If *options* is missing or has no ``root``.
    """
    logger = logger or logging.getLogger("staticcache")
    cacher = RequestCacher(options, logger=logger, executor=executor)
    logger.debug("Request cacher initialized for `%s`", cacher.root)
    return cacher
