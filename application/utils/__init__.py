"""
Utils package initialization.
"""

from .logger import AppLogger, ColoredFormatter
