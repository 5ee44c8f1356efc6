"""Simulation domain geometry"""

from .bounding_box import BoundingBox

__all__ = [
    'BoundingBox'
]
