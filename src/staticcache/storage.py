"""Filesystem operations on the cache root.

These helpers raise :class:`~staticcache.exceptions.CacheWriteError` on
failure. The middleware treats them as best-effort and logs the error; the
CLI surfaces it as an exit code.

Artifact writes use a temp-file-then-rename strategy in the target directory,
so a concurrent reader sees either the previous body or the new one, and two
racing writes for the same path leave whichever finished last.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Iterator, Optional

from staticcache.exceptions import CacheWriteError
from staticcache.models import DEFAULT_INDEX_FILE, CachedArtifact
from staticcache.paths import url_path_for

logger = logging.getLogger(__name__)

_TMP_SUFFIX = ".tmp"


def clean_root(root: str | Path) -> None:
    """Remove *root* and everything beneath it, then recreate it empty.

    A root that does not exist yet is simply created.

    Raises:
        CacheWriteError: If the directory cannot be removed or recreated.
    """
    path = Path(root)
    logger.debug("Removing root directory `%s`", path)
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        pass
    except OSError as exc:
        raise CacheWriteError(f"Could not remove {path}: {exc}", str(path)) from exc

    logger.debug("Creating root directory `%s`", path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise CacheWriteError(f"Could not create {path}: {exc}", str(path)) from exc


def write_artifact(path: str | Path, body: str | bytes) -> int:
    """Write *body* to *path*, replacing any previous content.

    Parent directories are created as needed. ``str`` bodies are encoded as
    UTF-8.

    Returns:
        The number of bytes written.

    Raises:
        CacheWriteError: If the file cannot be written.
    """
    target = Path(path)
    data = body.encode("utf-8") if isinstance(body, str) else bytes(body)

    fd = None
    tmp_path: Optional[str] = None
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd = tempfile.NamedTemporaryFile(
            mode="wb",
            dir=target.parent,
            prefix=f".{target.name}.",
            suffix=_TMP_SUFFIX,
            delete=False,
        )
        tmp_path = fd.name
        fd.write(data)
        fd.close()
        fd = None
        os.replace(tmp_path, target)
    except (OSError, ValueError) as exc:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise CacheWriteError(f"Could not write {target}: {exc}", str(target)) from exc

    return len(data)


def list_artifacts(
    root: str | Path, index_file: str = DEFAULT_INDEX_FILE
) -> Iterator[CachedArtifact]:
    """Yield every cached file under *root*, sorted by path.

    In-flight temp files from :func:`write_artifact` are skipped. A missing
    root yields nothing.
    """
    base = Path(root)
    if not base.is_dir():
        return

    for file in sorted(p for p in base.rglob("*") if p.is_file()):
        if file.name.startswith(".") and file.name.endswith(_TMP_SUFFIX):
            continue
        yield CachedArtifact(
            url_path=url_path_for(str(base), str(file), index_file),
            path=str(file),
            size=file.stat().st_size,
        )
