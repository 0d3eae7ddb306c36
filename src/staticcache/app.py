"""Typer application and CLI entry point for staticcache.

The CLI is a maintenance companion to the middleware: it shows where a URL
would be cached, lists what has been cached, and wipes the cache root. It
never serves or fetches anything.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``.

See Also:
    :mod:`staticcache.config`: How ``--root`` and ``staticcache.json`` combine.
    :mod:`staticcache.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import sys
from typing import Any, Optional

import typer

from staticcache import __version__
from staticcache.config import resolve_options
from staticcache.exceptions import StaticCacheError
from staticcache.exit_codes import EXIT_GENERIC_FAILURE
from staticcache.models import CacheOptions
from staticcache.output import (
    OutputFormat,
    OutputManager,
    configure_logging,
    error,
    get_output,
    info,
    print_data,
    print_json,
    print_table,
    set_output,
    success,
)
from staticcache.storage import clean_root, list_artifacts

app = typer.Typer(
    name="staticcache",
    help="Inspect and manage a static response cache directory.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

_ROOT_OPTION = typer.Option(None, "--root", "-r", help="Cache root directory.")
_INDEX_OPTION = typer.Option(
    None, "--index-file", help="Filename for URL paths without an extension."
)
_CONFIG_OPTION = typer.Option(
    None, "--config", "-c", help="Path to a staticcache.json options file."
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"staticcache {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Install the output manager and log handler before every sub-command."""
    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    output = OutputManager(format=fmt, no_color=no_color, quiet=quiet)
    set_output(output)
    configure_logging(verbose, output)


def _options(
    root: Optional[str], index_file: Optional[str], config_file: Optional[str]
) -> CacheOptions:
    try:
        return resolve_options(root, index_file, config_file)
    except StaticCacheError as exc:
        _fail(exc)


def _fail(exc: StaticCacheError) -> Any:
    error(str(exc))
    raise typer.Exit(code=exc.exit_code)


@app.command("target")
def target_command(
    url: str = typer.Argument(help="Request URL or path, e.g. /blog/post."),
    root: Optional[str] = _ROOT_OPTION,
    index_file: Optional[str] = _INDEX_OPTION,
    config_file: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Print the file a GET response for URL would be cached in.

    Example::

        staticcache target http://example.com/foo --root public
        # public/foo/index.html
    """
    from staticcache.paths import target_path

    options = _options(root, index_file, config_file)
    path = target_path(options.root, url, options.index_file)
    if get_output().format == OutputFormat.JSON:
        print_json({"url": url, "path": path})
    else:
        print_data(path)


@app.command("clean")
def clean_command(
    root: Optional[str] = _ROOT_OPTION,
    config_file: Optional[str] = _CONFIG_OPTION,
) -> None:
    """Remove the cache root and recreate it empty."""
    options = _options(root, None, config_file)
    try:
        clean_root(options.root)
    except StaticCacheError as exc:
        _fail(exc)
    success(f"Cleaned {options.root}")


@app.command("list")
def list_command(
    root: Optional[str] = _ROOT_OPTION,
    index_file: Optional[str] = _INDEX_OPTION,
    config_file: Optional[str] = _CONFIG_OPTION,
) -> None:
    """List the cached files under the cache root."""
    options = _options(root, index_file, config_file)
    artifacts = list(list_artifacts(options.root, options.index_file))
    if not artifacts:
        info(f"No cached files under {options.root}")
        return

    print_table(
        ["url", "path", "bytes"],
        [[a.url_path, a.path, str(a.size)] for a in artifacts],
        title="Cached responses",
    )


def main() -> None:
    """CLI entry point invoked by the ``staticcache`` console script.

    :class:`~staticcache.exceptions.StaticCacheError` instances escaping a
    command cause a clean exit with the error's ``exit_code``; anything else
    is reported and exits with :data:`EXIT_GENERIC_FAILURE`.
    """
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except StaticCacheError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception as exc:
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
