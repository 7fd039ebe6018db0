from . import asset_loader
