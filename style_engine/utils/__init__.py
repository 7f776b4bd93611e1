"""
Utility modules for the style engine.
"""

from style_engine.utils.config import Config
from style_engine.utils.logging import setup_logging, log_exception

__all__ = [
    'Config',
    'setup_logging',
    'log_exception',
]
