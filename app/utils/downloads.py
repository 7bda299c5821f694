"""
Download trigger helper.

The actual transfer is delegated to a services.downloader.Downloader so
callers without network access can plug in NullDownloader or their own.
"""

import time
import logging
from typing import Optional, Union
from services.downloader import Downloader, HttpDownloader

logger = logging.getLogger(__name__)


def download_file(
    url: Optional[str] = None,
    file_name: Optional[str] = None,
    downloader: Optional[Downloader] = None
) -> Union[str, bool]:
    """
    Start the download of a file.

    Args:
        url: URL of the file to download
        file_name: Name of the downloaded file (default: epoch milliseconds)
        downloader: Downloader doing the transfer (default: HttpDownloader())

    Returns:
        The file name handed to the downloader, or False when no URL was given

    Example:
        >>> download_file("https://example.com/a.csv", downloader=NullDownloader())
        '1760745600000'
    """
    if not url:
        logger.error("Set URL")
        return False

    if not file_name:
        file_name = str(time.time_ns() // 1_000_000)

    if downloader is None:
        downloader = HttpDownloader()

    downloader.trigger(url, file_name)
    return file_name
