import logging
import time

from services.downloader import NullDownloader
from utils import download_file


def test_missing_url_fails_without_downloading(recorder, caplog):
    with caplog.at_level(logging.ERROR):
        assert download_file(downloader=recorder) is False
        assert download_file("", "report.pdf", downloader=recorder) is False
    assert recorder.calls == []
    assert "Set URL" in caplog.text


def test_generated_file_name_is_timestamp(recorder):
    before = int(time.time() * 1000)
    name = download_file("https://example.com/export.csv", downloader=recorder)
    after = int(time.time() * 1000)

    assert recorder.calls == [("https://example.com/export.csv", name)]
    assert before <= int(name) <= after


def test_explicit_file_name(recorder):
    assert download_file("https://example.com/a", "invoice.pdf", downloader=recorder) == "invoice.pdf"
    assert recorder.calls == [("https://example.com/a", "invoice.pdf")]


def test_null_downloader_only_logs(caplog):
    with caplog.at_level(logging.INFO):
        assert download_file("https://example.com/a", "a.txt", downloader=NullDownloader()) == "a.txt"
    assert "skipped" in caplog.text
