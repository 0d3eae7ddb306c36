"""Mapping between request URLs and cached file paths.

:func:`target_path` decides where the body of a GET response is written:

1. The URL path is extracted (scheme, host, query string and fragment are
   discarded) and percent-escapes are decoded.
2. The path is canonicalised as a rooted POSIX path, so ``.`` and ``..``
   segments are resolved and can never climb above ``/``.
3. If the path names a directory (it is ``/``, ends in a slash, or its last
   segment has no ``.``), the index filename is appended.
4. The result is joined onto the cache root.

Example::

    >>> target_path("./", "http://example.com/foo")
    'foo/index.html'
    >>> target_path("./", "http://example.com/foo/bar.txt")
    'foo/bar.txt'
    >>> target_path("/srv/cache", "/../../secret.txt")
    '/srv/cache/secret.txt'

:func:`url_path_for` is the inverse, used when listing what is on disk.
"""

from __future__ import annotations

import os
import posixpath
from urllib.parse import unquote, urlsplit

from staticcache.models import DEFAULT_INDEX_FILE


def url_path(url: str) -> str:
    """Return the canonical, rooted path component of *url*.

    Args:
        url: An absolute URL (``http://host/a/b?q=1``) or a bare path
            (``/a/b``).

    Returns:
        The decoded path with dot-segments resolved, always starting with
        ``/``. A trailing slash on the original path is preserved.
    """
    raw = unquote(urlsplit(url).path)
    canonical = posixpath.normpath("/" + raw.lstrip("/"))
    if raw.endswith("/") and canonical != "/":
        canonical += "/"
    return canonical


def target_path(root: str, url: str, index_file: str = DEFAULT_INDEX_FILE) -> str:
    """Return the file under *root* that caches the response for *url*.

    Args:
        root: The cache root directory.
        url: Request URL, absolute or path-only.
        index_file: Filename used when the URL names a directory.

    Returns:
        A normalised path, absolute when *root* is absolute and relative to
        the working directory otherwise.
    """
    path = url_path(url)
    segments = [segment for segment in path.split("/") if segment]

    if path.endswith("/") or not segments or "." not in segments[-1]:
        segments.append(index_file)

    return os.path.normpath(os.path.join(root, *segments))


def is_within(root: str, path: str) -> bool:
    """Return True if *path* is *root* itself or lies beneath it."""
    root_abs = os.path.abspath(root)
    path_abs = os.path.abspath(path)
    return os.path.commonpath([root_abs, path_abs]) == root_abs


def url_path_for(root: str, path: str, index_file: str = DEFAULT_INDEX_FILE) -> str:
    """Return the URL path that :func:`target_path` maps onto *path*.

    Index files map back to their directory, so ``root/foo/index.html``
    yields ``/foo/``.
    """
    relative = os.path.relpath(path, root).replace(os.sep, "/")
    if relative == index_file:
        return "/"
    if relative.endswith("/" + index_file):
        return "/" + relative[: -len(index_file)]
    return "/" + relative
