"""
Services package.

This package provides the download services used by the
download_file helper.
"""

from .downloader import Downloader, HttpDownloader, NullDownloader

__all__ = [
    'Downloader',
    'HttpDownloader',
    'NullDownloader',
]
