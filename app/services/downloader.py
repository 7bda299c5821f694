"""
File download services.

A Downloader receives a URL and a file name and starts the download,
the way a browser does when a hidden anchor with a download attribute
is clicked. HttpDownloader fetches with aiohttp into a local directory;
NullDownloader only logs the request.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Set
import aiohttp
from config.settings import Settings

logger = logging.getLogger(__name__)

HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
}
CHUNK_SIZE = 64 * 1024


class Downloader(ABC):
    """Capability to start a download of a URL under a given file name."""

    @abstractmethod
    def trigger(self, url: str, file_name: str) -> None:
        """Start downloading url as file_name. May return before it finishes."""


class NullDownloader(Downloader):
    """Downloader for environments where nothing should be fetched."""

    def trigger(self, url: str, file_name: str) -> None:
        logger.info(f"Download of {url} as '{file_name}' skipped")


class HttpDownloader(Downloader):
    """
    Downloader saving files fetched over HTTP(S) with aiohttp.

    Inside a running event loop trigger() schedules the transfer and
    returns at once; failures of such background transfers are logged.
    Outside a loop it runs the transfer to completion and lets errors
    propagate.

    Attributes:
        target_dir (Path): Directory receiving downloaded files (default: Settings.DOWNLOADS_DIR)
        timeout (float): Total request timeout in seconds (default: Settings.DOWNLOAD_TIMEOUT)

    Example:
        >>> downloader = HttpDownloader(Path("/tmp"))
        >>> await downloader.fetch("https://example.com/report.pdf", "report.pdf")
        PosixPath('/tmp/report.pdf')
    """

    def __init__(
        self,
        target_dir: Optional[Path] = None,
        timeout: Optional[float] = None
    ) -> None:
        self.target_dir = Path(target_dir if target_dir is not None else Settings.DOWNLOADS_DIR)
        self.timeout = timeout if timeout is not None else Settings.DOWNLOAD_TIMEOUT
        self._tasks: Set[asyncio.Task] = set()

    def target_path(self, file_name: str) -> Path:
        """Path a file name is written to; directory parts are dropped."""
        name = Path(file_name).name
        if not name or name in (".", ".."):
            raise ValueError(f"Invalid file name: '{file_name}'")
        return self.target_dir / name

    async def fetch(self, url: str, file_name: str) -> Path:
        """
        Download url into target_dir under file_name.

        Args:
            url: Address of the file
            file_name: Name of the saved file

        Returns:
            Path of the written file

        Raises:
            aiohttp.ClientError: Request failed or returned 4xx/5xx
        """
        path = self.target_path(file_name)
        try:
            # Configure per-request timeout; rely on raise_for_status to catch 4xx/5xx
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            async with aiohttp.ClientSession(timeout=timeout, headers=HEADERS) as session:
                async with session.get(url) as response:
                    response.raise_for_status()
                    self.target_dir.mkdir(parents=True, exist_ok=True)
                    with open(path, "wb") as fh:
                        async for chunk in response.content.iter_chunked(CHUNK_SIZE):
                            fh.write(chunk)
        except aiohttp.ClientError as error:
            logger.error(f"Download of {url} failed: {error}", exc_info=True)
            raise

        logger.info(f"Downloaded {url} to {path}")
        return path

    def trigger(self, url: str, file_name: str) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop is None:
            asyncio.run(self.fetch(url, file_name))
            return

        task = loop.create_task(self.fetch(url, file_name))
        self._tasks.add(task)
        task.add_done_callback(self._on_done)

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error: Optional[BaseException] = task.exception()
        if error is not None:
            logger.error(f"Background download failed: {error}")

    async def wait(self) -> None:
        """Wait for downloads started by trigger() on the running loop."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
