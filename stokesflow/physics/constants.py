"""
Physical constants used by the fluid kernels (SI units)
"""

from scipy import constants as _scipy_constants

PI = _scipy_constants.pi
BOLTZMANN = _scipy_constants.k        # J / K
AVOGADRO = _scipy_constants.N_A       # 1 / mol
