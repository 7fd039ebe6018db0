"""
Central place to discover the asset root for the loader.

An embedding runtime sets `context.ACTIVE_ROOT` when it knows where its
package assets live.  Everything else calls `asset_root()`.
"""
from __future__ import annotations
import os
import pathlib
from importlib import resources

ACTIVE_ROOT: pathlib.Path | None = None        # set by the host at runtime

ROOT_ENV = "CLIENTDATA_ASSET_ROOT"


def bundled_root() -> pathlib.Path:
    return pathlib.Path(str(resources.files("clientdata") / "assets"))


def asset_root() -> pathlib.Path:
    if ACTIVE_ROOT is not None:
        root = pathlib.Path(ACTIVE_ROOT)
    elif os.getenv(ROOT_ENV):
        root = pathlib.Path(os.environ[ROOT_ENV])
    else:
        return bundled_root()
    if not root.is_dir():
        raise RuntimeError(f"Asset root '{root}' does not exist")
    return root
