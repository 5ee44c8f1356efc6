"""Configuration and logging utilities"""

from .config import Config, FluidParameters
from .logging_config import setup_logging

__all__ = [
    'Config',
    'FluidParameters',
    'setup_logging'
]
