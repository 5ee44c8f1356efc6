"""Visualization tools"""

from .flow_viz import FlowVisualizer

__all__ = [
    'FlowVisualizer'
]
