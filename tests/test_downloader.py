import asyncio
import logging

import aiohttp
import pytest
from aioresponses import aioresponses

from config.settings import Settings
from services.downloader import HttpDownloader

URL = "https://files.example.com/report.csv"


@pytest.mark.asyncio
async def test_fetch_writes_file(tmp_path):
    with aioresponses() as mocked:
        mocked.get(URL, body=b"id,total\n1,19.90\n")
        path = await HttpDownloader(tmp_path).fetch(URL, "report.csv")

    assert path == tmp_path / "report.csv"
    assert path.read_bytes() == b"id,total\n1,19.90\n"


@pytest.mark.asyncio
async def test_fetch_http_error_is_raised(tmp_path):
    with aioresponses() as mocked:
        mocked.get(URL, status=404)
        with pytest.raises(aiohttp.ClientResponseError):
            await HttpDownloader(tmp_path).fetch(URL, "report.csv")

    assert not (tmp_path / "report.csv").exists()


def test_target_path_stays_in_directory(tmp_path):
    downloader = HttpDownloader(tmp_path)
    assert downloader.target_path("../../etc/passwd") == tmp_path / "passwd"
    with pytest.raises(ValueError):
        downloader.target_path("..")


@pytest.mark.asyncio
async def test_trigger_inside_loop_runs_in_background(tmp_path):
    downloader = HttpDownloader(tmp_path)
    with aioresponses() as mocked:
        mocked.get(URL, body=b"data")
        downloader.trigger(URL, "bg.csv")
        await downloader.wait()

    assert (tmp_path / "bg.csv").read_bytes() == b"data"


def test_trigger_without_loop_blocks(tmp_path):
    with aioresponses() as mocked:
        mocked.get(URL, body=b"data")
        HttpDownloader(tmp_path).trigger(URL, "sync.csv")

    assert (tmp_path / "sync.csv").read_bytes() == b"data"


@pytest.mark.asyncio
async def test_background_failure_is_logged(tmp_path, caplog):
    downloader = HttpDownloader(tmp_path)
    with aioresponses() as mocked, caplog.at_level(logging.ERROR, logger="services.downloader"):
        mocked.get(URL, status=500)
        downloader.trigger(URL, "broken.csv")
        await downloader.wait()
        # Let the done callback run
        await asyncio.sleep(0)

    assert "Background download failed" in caplog.text
    assert not (tmp_path / "broken.csv").exists()


def test_defaults_are_read_when_constructed(monkeypatch, tmp_path):
    monkeypatch.setattr(Settings, "DOWNLOADS_DIR", tmp_path / "later")
    monkeypatch.setattr(Settings, "DOWNLOAD_TIMEOUT", 2.5)

    downloader = HttpDownloader()

    assert downloader.target_dir == tmp_path / "later"
    assert downloader.timeout == 2.5


@pytest.mark.asyncio
async def test_target_dir_is_created_on_fetch(tmp_path):
    target = tmp_path / "nested" / "downloads"
    with aioresponses() as mocked:
        mocked.get(URL, body=b"x")
        await HttpDownloader(target).fetch(URL, "a.csv")

    assert (target / "a.csv").read_bytes() == b"x"
