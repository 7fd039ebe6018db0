"""
modules.py  •  Native module table for an embedding runtime

The host looks modules up by name and calls a method with a promise-like
object (anything with resolve()/reject()).  Every call settles the promise
exactly once, including lookups of names that do not exist.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict

from .tools import asset_loader


def read_asset_data(promise) -> None:
    asset_loader.read_asset_data(promise)


# ─────────────────────────── module registry ─────────────────────────
MODULES: Dict[str, Dict[str, Callable]] = {
    "ClientData": {
        "readAssetData": read_asset_data,
    },
}


def invoke(module: str, method: str, promise) -> None:
    methods = MODULES.get(module)
    if methods is None:
        promise.reject(LookupError(f"No native module named '{module}'"))
        return
    impl = methods.get(method)
    if impl is None:
        promise.reject(LookupError(f"Module '{module}' has no method '{method}'"))
        return

    logging.info("🔧 %s.%s", module, method)
    impl(promise)
