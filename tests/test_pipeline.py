"""Tests for reference data download and the pipeline entrypoint."""

from pathlib import Path

import pytest
import requests

from functions import http
from src.download_sources import download_all
from src.run_pipeline import run


class FakeResponse:
    def __init__(self, content, status=200):
        self.content = content
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class TestDownload:
    def test_fetches_every_file(self, workspace, monkeypatch):
        calls = []

        def fake_get(url, timeout, headers):
            calls.append((url, headers["User-Agent"]))
            return FakeResponse(b"[]")

        monkeypatch.setattr(http.requests, "get", fake_get)
        workspace["api"]["files"] = ["channels.json", "blocklist.json"]

        files = download_all(workspace)

        assert [url for url, _ in calls] == [
            "https://iptv-org.github.io/api/channels.json",
            "https://iptv-org.github.io/api/blocklist.json",
        ]
        assert calls[0][1] == "ChannelLedger/1.0"
        assert all(Path(f).read_bytes() == b"[]" for f in files)

    def test_cached_file_reused_unless_forced(self, workspace, data_dir, monkeypatch):
        calls = []
        monkeypatch.setattr(http.requests, "get", lambda url, **kw: calls.append(url) or FakeResponse(b"[]"))
        workspace["api"]["files"] = ["channels.json"]

        download_all(workspace)
        assert calls == []

        download_all(workspace, force=True)
        assert len(calls) == 1

    def test_http_error_propagates(self, workspace, monkeypatch):
        monkeypatch.setattr(http.requests, "get", lambda url, **kw: FakeResponse(b"", status=404))
        workspace["api"]["files"] = ["channels.json"]
        with pytest.raises(requests.HTTPError):
            download_all(workspace)


class TestRunPipeline:
    def test_generates_when_valid(self, workspace, data_dir, write_playlist, capsys):
        write_playlist("us.m3u", '#EXTM3U\n#EXTINF:-1 tvg-id="CNN.us",CNN\nhttp://a/cnn\n')
        assert run(workspace) == 0
        assert (Path(workspace["paths"]["outputs_dir"]) / "index.m3u").exists()

    def test_stops_on_validation_errors(self, workspace, data_dir, write_playlist, capsys):
        write_playlist("us.m3u", '#EXTM3U\n#EXTINF:-1,CNN International\nhttp://a/cnn\n')
        assert run(workspace) == 1
        assert not Path(workspace["paths"]["outputs_dir"]).exists()
