"""
clientdata/tools/asset_loader.py   •   bundled asset -> text

`read_asset()` opens a packaged asset, reads it line by line and returns
the lines joined with no separator (the terminators are dropped).  Pass
`preserve_newlines=True` to get the exact decoded text instead.

`read_asset_data(promise)` is the bridge-facing entry point: the read runs
on a worker thread and the promise is settled exactly once.
"""

from __future__ import annotations

import asyncio
import logging
import os
import pathlib
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from .. import context

ASSET_NAME = "ClientData.json"
DEFAULT_ENCODING = "utf-8"

ENCODING_ENV = "CLIENTDATA_ENCODING"
PRESERVE_ENV = "CLIENTDATA_PRESERVE_NEWLINES"


# ─────────────────────────── errors ─────────────────────────────────
class AssetError(RuntimeError):
    """Base for loader failures.  `str(err)` is the underlying message."""

    def __init__(self, name: str, cause: Union[BaseException, str]):
        super().__init__(str(cause))
        self.name = name
        self.cause = cause


class AssetNotFound(AssetError):
    pass


class AssetReadError(AssetError):
    pass


# ─────────────────────────── results ────────────────────────────────
@dataclass(frozen=True)
class AssetReadResult:
    text: Optional[str] = None
    error: Optional[AssetError] = None

    def __post_init__(self) -> None:
        if (self.text is None) == (self.error is None):
            raise ValueError("AssetReadResult needs exactly one of text / error")

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> str:
        if self.error is not None:
            raise self.error
        return self.text


class Promise:
    """
    Single-resolution result channel.

    Settled by `resolve(value)` or `reject(error)`, never both; a second
    settle raises RuntimeError.  The backing Future is exposed so callers
    can block on it or hand it to `asyncio.wrap_future`.
    """

    def __init__(self) -> None:
        self._future: Future = Future()
        self._lock = threading.RLock()

    @property
    def future(self) -> Future:
        return self._future

    @property
    def settled(self) -> bool:
        return self._future.done()

    def _settle(self, fn: Callable[[Any], None], arg: Any) -> None:
        with self._lock:
            if self._future.done():
                raise RuntimeError("Promise already settled")
            fn(arg)

    def resolve(self, value: Any) -> None:
        self._settle(self._future.set_result, value)

    def reject(self, error: BaseException) -> None:
        self._settle(self._future.set_exception, error)

    def result(self, timeout: Optional[float] = None) -> Any:
        return self._future.result(timeout)

    def add_done_callback(self, fn: Callable[["Promise"], None]) -> None:
        self._future.add_done_callback(lambda _f: fn(self))


# ─────────────────────────── helpers ────────────────────────────────
def env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


def _resolve(name: str, root: Optional[Union[str, pathlib.Path]]) -> pathlib.Path:
    """Map *name* onto the asset root, refusing anything outside it."""
    base = pathlib.Path(root) if root is not None else context.asset_root()
    base = base.resolve()
    p = (base / name).resolve()
    try:
        p.relative_to(base)
    except ValueError:
        raise AssetNotFound(name, f"Asset path escapes asset root: {name}")
    if not p.is_file():
        raise AssetNotFound(name, f"No such asset: {name}")
    return p


def _open_asset(path: pathlib.Path, encoding: str, newline: Optional[str]):
    return open(path, "r", encoding=encoding, newline=newline)


def _join_lines(stream) -> str:
    buf = []
    for line in stream:
        buf.append(line.rstrip("\n"))
    return "".join(buf)


# ────────────────────────── public API ──────────────────────────────
def read_asset(
    name: str = ASSET_NAME,
    root: Optional[Union[str, pathlib.Path]] = None,
    *,
    preserve_newlines: Optional[bool] = None,
    encoding: Optional[str] = None,
) -> str:
    """
    Read the asset *name* and return its text.

    Raises AssetNotFound when the asset is missing and AssetReadError for
    any failure while opening, decoding, reading or closing it.  The handle
    is always closed.
    """
    path = _resolve(name, root)
    if preserve_newlines is None:
        preserve_newlines = env_flag(PRESERVE_ENV)
    encoding = encoding or os.getenv(ENCODING_ENV) or DEFAULT_ENCODING

    logging.debug("📄 reading asset %s (%s)", path, encoding)
    try:
        # newline="" disables translation so \r\n survives verbatim
        stream = _open_asset(path, encoding, "" if preserve_newlines else None)
    except FileNotFoundError as exc:
        raise AssetNotFound(name, exc) from exc
    except (OSError, LookupError) as exc:
        raise AssetReadError(name, exc) from exc

    try:
        with stream:
            return stream.read() if preserve_newlines else _join_lines(stream)
    except (OSError, UnicodeError) as exc:
        raise AssetReadError(name, exc) from exc


def load_asset(
    name: str = ASSET_NAME,
    root: Optional[Union[str, pathlib.Path]] = None,
    **kw,
) -> AssetReadResult:
    """Like read_asset(), but the failure comes back inside the result."""
    try:
        return AssetReadResult(text=read_asset(name, root, **kw))
    except AssetError as exc:
        return AssetReadResult(error=exc)


async def read_asset_async(
    name: str = ASSET_NAME,
    root: Optional[Union[str, pathlib.Path]] = None,
    **kw,
) -> str:
    return await asyncio.to_thread(read_asset, name, root, **kw)


_executor: Optional[ThreadPoolExecutor] = None
_executor_lock = threading.Lock()


def _get_executor() -> ThreadPoolExecutor:
    global _executor
    with _executor_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="clientdata")
        return _executor


def _settle(promise, name: str, root) -> None:
    try:
        text = read_asset(name, root)
    except Exception as exc:
        logging.debug("asset %s rejected: %s", name, exc)
        settle, value = promise.reject, exc
    else:
        settle, value = promise.resolve, text

    # the executor future is never collected
    try:
        settle(value)
    except Exception:
        logging.exception("Failed to settle promise for asset %s", name)


def read_asset_data(
    promise,
    name: str = ASSET_NAME,
    root: Optional[Union[str, pathlib.Path]] = None,
) -> None:
    """
    Read the asset off the caller's thread and settle *promise* with the
    text or the error.  *promise* is anything with resolve()/reject().
    """
    _get_executor().submit(_settle, promise, name, root)

