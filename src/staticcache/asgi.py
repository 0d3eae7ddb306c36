"""ASGI middleware that caches GET responses as static files.

Works with any ASGI application (Starlette, FastAPI)::

    from fastapi import FastAPI
    from staticcache.asgi import StaticCacheMiddleware

    app = FastAPI()
    app.add_middleware(StaticCacheMiddleware, root="/var/www/cache", clean=True)

The ASGI ``send`` callable is wrapped rather than the response object, so
the application never sees a difference. Body chunks are forwarded as they
arrive. The complete body of a 2xx GET response is written through
:meth:`RequestCacher.wrap_send <staticcache.cacher.RequestCacher.wrap_send>`
just before the final chunk goes out. Non-2xx responses, non-GET requests and
non-HTTP scopes pass straight through.

Writes run in Starlette's threadpool so the event loop never blocks on disk
I/O. Bodies are buffered in memory until complete; ``text/event-stream``
responses are never buffered or cached since they may not end.
"""

from __future__ import annotations

from concurrent.futures import Executor
from dataclasses import dataclass
from typing import Any, Optional

from starlette.concurrency import run_in_threadpool
from starlette.datastructures import URL, Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from staticcache.cacher import Body, RequestCacher, SendFn
from staticcache.models import DEFAULT_INDEX_FILE

_UNCACHEABLE_MEDIA_TYPES = ("text/event-stream",)


@dataclass(frozen=True)
class ScopeRequest:
    """The method and full URL of an ASGI HTTP scope."""

    method: str
    url: str

    @classmethod
    def from_scope(cls, scope: Scope) -> ScopeRequest:
        return cls(method=scope["method"], url=str(URL(scope=scope)))


def _passthrough(body: Body) -> None:
    """Body-level send for uncached requests; the ASGI send does the work."""


class StaticCacheMiddleware:
    """Write 2xx GET response bodies under ``root`` as static files.

    Args:
        app: The wrapped ASGI application.
        root: Cache root directory. Ignored when *cacher* is given.
        clean: Remove and recreate *root* on startup.
        index_file: Filename for URL paths without an extension.
        executor: Hand writes to this executor instead of waiting for them
            in the threadpool. Ignored when *cacher* is given.
        cacher: A preconfigured :class:`~staticcache.cacher.RequestCacher`.

    Raises:
        ConfigError: If neither *root* nor *cacher* is given.
    """

    def __init__(
        self,
        app: ASGIApp,
        root: Optional[str] = None,
        *,
        clean: bool = False,
        index_file: str = DEFAULT_INDEX_FILE,
        executor: Optional[Executor] = None,
        cacher: Optional[RequestCacher] = None,
    ) -> None:
        self.app = app
        if cacher is None:
            cacher = RequestCacher(
                {"root": root, "clean": clean, "index_file": index_file},
                executor=executor,
            )
        self.cacher = cacher

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        def run_app(send_body: SendFn) -> Any:
            if send_body is _passthrough:
                return self.app(scope, receive, send)
            return self.app(scope, receive, _send_with_cache(send, send_body))

        await self.cacher.handle(ScopeRequest.from_scope(scope), _passthrough, run_app)


def _is_cacheable(message: Message) -> bool:
    if not 200 <= message["status"] < 300:
        return False
    content_type = Headers(raw=message.get("headers", [])).get("content-type", "")
    return not content_type.lower().startswith(_UNCACHEABLE_MEDIA_TYPES)


def _send_with_cache(send: Send, send_body: SendFn) -> Send:
    caching = False
    chunks: list[bytes] = []

    async def wrapped(message: Message) -> None:
        nonlocal caching
        if message["type"] == "http.response.start":
            caching = _is_cacheable(message)
        elif message["type"] == "http.response.body" and caching:
            chunks.append(message.get("body", b""))
            if not message.get("more_body", False):
                await run_in_threadpool(send_body, b"".join(chunks))
                chunks.clear()
        await send(message)

    return wrapped
