"""
Closed-form low-Reynolds-number flow kernels

Stokes drag, the flow around a translating sphere, a sphere held in simple
shear, and the Blake tensor for a point force above a plane no-slip wall.

All kernels are pure functions of their arguments. Evaluating exactly at a
singular point (the sphere centre, or its wall image) divides by zero; the
resulting inf/NaN is handed back to the caller rather than raised.
"""

import logging
import numpy as np
from typing import Union

from ..core.fixed_array import FixedArray, ArrayLike, as_fixed_array, magnitude
from ..core.fixed_tensor import FixedTensor
from ..core.mathutils import delta
from ..geometry.bounding_box import BoundingBox
from .constants import PI

logger = logging.getLogger(__name__)

# A wall is either its z coordinate or a box whose lower z face is the wall
Wall = Union[float, BoundingBox]


def _vector(values: ArrayLike) -> FixedArray:
    return as_fixed_array(values, dtype=np.float64)


def _distance(x: FixedArray, kernel: str) -> np.float64:
    # numpy float so that r == 0 yields inf/NaN instead of ZeroDivisionError
    r = np.float64(magnitude(x))
    if r == 0:
        logger.warning("%s evaluated at its singular point; result is not finite", kernel)
    return r


def stokes_drag(velocity: ArrayLike, viscosity: float, radius: float) -> FixedArray:
    """
    Stokes drag force on a sphere

    Args:
        velocity: Sphere velocity relative to the fluid
        viscosity: Shear viscosity
        radius: Sphere radius

    Returns:
        6 pi mu a v
    """
    return (6 * PI * viscosity * radius) * _vector(velocity)


def translating_flow_at(position: ArrayLike,
                        sphere_position: ArrayLike,
                        translation_velocity: ArrayLike,
                        sphere_radius: float) -> FixedArray:
    """
    Flow past a sphere in a uniform stream (sphere rest frame)

    Far from the sphere the fluid moves with ``translation_velocity`` U; on the
    sphere surface it is at rest. With x the offset from the sphere centre and
    r = |x|:

        u_i = U_i - 3a/4 (delta_ij/r + x_i x_j/r^3) U_j
                  - a^3/4 (delta_ij/r^3 - 3 x_i x_j/r^5) U_j

    A zero radius leaves U untouched.
    """
    x = _vector(position) - _vector(sphere_position)
    velocity = _vector(translation_velocity)
    r = _distance(x, 'translating_flow_at')
    a = sphere_radius

    perturbation = FixedTensor.zeros(3, 3)
    with np.errstate(divide='ignore', invalid='ignore'):
        for i in range(3):
            for j in range(3):
                stokeslet = delta(i, j) / r + x[i] * x[j] / r ** 3
                dipole = delta(i, j) / (3.0 * r ** 3) - x[i] * x[j] / r ** 5
                perturbation[i, j] = -0.75 * a * stokeslet - 0.75 * a ** 3 * dipole

    return velocity + perturbation @ velocity


def strain_tensor_shear(shear_rate: float) -> FixedTensor:
    """Symmetric strain-rate tensor of the ambient flow (shear_rate * z, 0, 0)"""
    strain = FixedTensor.zeros(3, 3)
    strain[0, 2] = 0.5 * shear_rate
    strain[2, 0] = 0.5 * shear_rate
    return strain


def rotation_vector_shear(shear_rate: float) -> FixedArray:
    """Angular velocity of the ambient flow (shear_rate * z, 0, 0)"""
    return FixedArray([0.0, 0.5 * shear_rate, 0.0])


def shear_flow_at(position: ArrayLike,
                  sphere_position: ArrayLike,
                  sphere_radius: float,
                  shear_rate: float) -> FixedArray:
    """
    Flow around a sphere held in simple shear (shear_rate * z, 0, 0)

    Sum of the straining disturbance, the rotational disturbance and the
    translating-sphere solution for the ambient velocity at ``position``.
    Points inside the sphere get the zero vector.
    """
    position = _vector(position)
    x = position - _vector(sphere_position)
    r = _distance(x, 'shear_flow_at')
    a = sphere_radius

    if r < a:
        # TODO: confirm whether the ambient shear should still be returned here
        logger.debug("shear_flow_at inside sphere (r=%g < a=%g), returning zero", r, a)
        return FixedArray.zeros(3)

    strain = strain_tensor_shear(shear_rate)
    strain_x = strain @ x
    x_strain_x = x.dot(strain_x)

    with np.errstate(divide='ignore', invalid='ignore'):
        ratio = a / r
        flow = (-2.5 * a ** 3 / r ** 5 * x_strain_x) * x
        flow -= (0.5 * ratio ** 5) * (strain_x + strain.transpose() @ x)
        flow += (2.5 * ratio ** 5 * x_strain_x / r ** 2) * x
        flow -= rotation_vector_shear(shear_rate).cross(x) * ratio ** 3

    ambient = FixedArray([shear_rate * position[2], 0.0, 0.0])
    flow += translating_flow_at(position, sphere_position, ambient, a)

    return flow


def oseen_tensor(separation: ArrayLike, viscosity: float) -> FixedTensor:
    """
    Free-space Stokeslet (Oseen tensor)

    G_ij = (delta_ij/r + r_i r_j/r^3) / (8 pi mu); the flow due to a point
    force F is G @ F.
    """
    r_vec = _vector(separation)
    r = _distance(r_vec, 'oseen_tensor')
    prefactor = 1.0 / (8 * PI * viscosity)

    tensor = FixedTensor.zeros(3, 3)
    with np.errstate(divide='ignore', invalid='ignore'):
        for i in range(3):
            for j in range(3):
                tensor[i, j] = prefactor * (delta(i, j) / r + r_vec[i] * r_vec[j] / r ** 3)
    return tensor


def _wall_height(wall: Wall) -> float:
    if isinstance(wall, BoundingBox):
        return wall.get_zmin()
    return float(wall)


def blake_tensor_at(position: ArrayLike,
                    sphere_position: ArrayLike,
                    wall: Wall,
                    viscosity: float,
                    include_translation_terms: bool = True) -> FixedTensor:
    """
    Blake tensor: Green's function for a point force above a no-slip plane

    The wall is the plane z = z_min, given directly or as the lower z face of
    a BoundingBox. The tensor is the Stokeslet at the force location minus the
    Stokeslet at its mirror image, plus the Stokes-doublet and source-dipole
    image terms that restore no-slip on the wall. Contract with a force to get
    the flow (see blake_flow_at).

    Args:
        position: Evaluation point
        sphere_position: Location of the point force
        wall: z coordinate of the wall, or a BoundingBox
        viscosity: Shear viscosity
        include_translation_terms: Drop the direct Stokeslet when False,
            leaving only the wall correction

    Returns:
        3x3 FixedTensor
    """
    z_wall = _wall_height(wall)
    point = _vector(position).copy_add_index(2, -z_wall)
    source = _vector(sphere_position).copy_add_index(2, -z_wall)
    image = source.copy_set(2, -source[2])

    h = source[2]
    R = point - image
    R_mag = _distance(R, 'blake_tensor_at')

    tensor = -oseen_tensor(R, viscosity)
    if include_translation_terms:
        tensor = tensor + oseen_tensor(point - source, viscosity)

    prefactor = 1.0 / (8 * PI * viscosity)
    with np.errstate(divide='ignore', invalid='ignore'):
        R3 = R_mag ** 3
        R5 = R_mag ** 5
        for i in range(3):
            for j in range(3):
                derivative = (delta(i, j) * h / R3
                              - 3 * R[i] * R[j] * h / R5
                              + R[j] * delta(i, 2) / R3
                              - R[i] * delta(j, 2) / R3
                              - delta(i, j) * R[2] / R3
                              + 3 * R[i] * R[2] * R[j] / R5)
                sign = -1 if j == 2 else 1
                tensor[i, j] += 2 * sign * h * prefactor * derivative

    return tensor


def blake_flow_at(position: ArrayLike,
                  sphere_position: ArrayLike,
                  force: ArrayLike,
                  wall: Wall,
                  viscosity: float,
                  include_translation_terms: bool = True) -> FixedArray:
    """Flow at ``position`` due to ``force`` applied at ``sphere_position`` above the wall"""
    tensor = blake_tensor_at(position, sphere_position, wall, viscosity,
                             include_translation_terms=include_translation_terms)
    return tensor @ _vector(force)
