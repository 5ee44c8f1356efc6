"""
Low-Reynolds-number flow toolkit

Fixed-size vector and matrix types, an axis-aligned simulation box with
random point injection, and closed-form Stokes-flow kernels (translating
sphere, sphere in shear, Blake wall tensor).
"""

__version__ = "0.1.0"
