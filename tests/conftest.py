import pytest
from clientdata import context
from clientdata.tools import asset_loader


# Keep host / env configuration from leaking between tests
@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch):
    monkeypatch.setattr(context, "ACTIVE_ROOT", None)
    for var in (context.ROOT_ENV, asset_loader.ENCODING_ENV, asset_loader.PRESERVE_ENV):
        monkeypatch.delenv(var, raising=False)
    yield


@pytest.fixture
def asset_dir(tmp_path):
    root = tmp_path / "assets"
    root.mkdir()
    return root
