"""
Core utilities package.

This package provides the logging configuration used by applications
that embed the helpers.
"""

from .logger import setup_logger

__all__ = ['setup_logger']
