import asyncio
import logging
from unittest import mock

import pytest
from clientdata.tools import asset_loader
from clientdata.tools.asset_loader import AssetNotFound, Promise


def test_promise_settles_once():
    p = Promise()
    assert not p.settled
    p.resolve("done")
    assert p.settled
    assert p.result() == "done"
    with pytest.raises(RuntimeError):
        p.resolve("again")
    with pytest.raises(RuntimeError):
        p.reject(ValueError("late"))


def test_promise_reject_surfaces_error():
    p = Promise()
    p.reject(AssetNotFound("x.json", "gone"))
    with pytest.raises(AssetNotFound, match="gone"):
        p.result()


def test_promise_done_callback():
    seen = []
    p = Promise()
    p.add_done_callback(seen.append)
    p.resolve(1)
    assert seen == [p]


def test_read_asset_data_resolves(asset_dir):
    (asset_dir / "ClientData.json").write_text('{"a":1,\n"b":2}\n')
    p = Promise()
    asset_loader.read_asset_data(p, root=asset_dir)
    assert p.result(timeout=5) == '{"a":1,"b":2}'


def test_read_asset_data_rejects_missing(asset_dir):
    p = Promise()
    asset_loader.read_asset_data(p, "Missing.json", root=asset_dir)
    with pytest.raises(AssetNotFound):
        p.result(timeout=5)


def test_read_asset_data_rejects_bad_root(tmp_path, monkeypatch):
    from clientdata import context
    monkeypatch.setattr(context, "ACTIVE_ROOT", tmp_path / "nowhere")
    p = Promise()
    asset_loader.read_asset_data(p)
    with pytest.raises(RuntimeError, match="does not exist"):
        p.result(timeout=5)


def test_promise_future_is_awaitable(asset_dir):
    (asset_dir / "ClientData.json").write_text("{}")

    async def go():
        p = Promise()
        asset_loader.read_asset_data(p, root=asset_dir)
        return await asyncio.wrap_future(p.future)

    assert asyncio.run(go()) == "{}"


def test_failing_host_promise_is_logged(asset_dir, caplog):
    (asset_dir / "ClientData.json").write_text("{}")
    host_promise = mock.Mock()
    host_promise.resolve.side_effect = RuntimeError("host promise already settled")
    with mock.patch.object(asset_loader, "_get_executor") as get_exec:
        get_exec.return_value.submit.side_effect = lambda fn, *a: fn(*a)
        with caplog.at_level(logging.ERROR):
            asset_loader.read_asset_data(host_promise, root=asset_dir)
    host_promise.resolve.assert_called_once_with("{}")
    assert "Failed to settle promise" in caplog.text
    assert "host promise already settled" in caplog.text
