from .tools.asset_loader import (
    ASSET_NAME,
    AssetError,
    AssetNotFound,
    AssetReadError,
    AssetReadResult,
    Promise,
    load_asset,
    read_asset,
    read_asset_async,
    read_asset_data,
)

__version__ = "0.1.0"
