"""Stokes-flow kernels and physical constants"""

from .constants import PI, BOLTZMANN, AVOGADRO
from .fluid_kernels import (
    stokes_drag,
    translating_flow_at,
    strain_tensor_shear,
    rotation_vector_shear,
    shear_flow_at,
    oseen_tensor,
    blake_tensor_at,
    blake_flow_at
)

__all__ = [
    'PI',
    'BOLTZMANN',
    'AVOGADRO',
    'stokes_drag',
    'translating_flow_at',
    'strain_tensor_shear',
    'rotation_vector_shear',
    'shear_flow_at',
    'oseen_tensor',
    'blake_tensor_at',
    'blake_flow_at'
]
