"""
Axis-aligned 3D bounding box

Used as the simulation domain: containment tests, elastic wall reflection and
random injection of points inside the box or on its faces.
"""

import logging
import numpy as np
from typing import Tuple

from ..core.fixed_array import (
    FixedArray,
    ArrayLike,
    as_fixed_array,
    elementwise_min,
    elementwise_max
)
from ..numerics.random_sampling import weighted_index

logger = logging.getLogger(__name__)


class BoundingBox:
    """
    Immutable box spanned by ``lower_bounds`` and ``upper_bounds``

    The constructor takes two arbitrary opposite corners and sorts them per
    axis, so ``lower <= upper`` always holds and argument order does not
    matter. ``from_extents`` and ``from_dimensions`` cover the other ways of
    describing a box.
    """

    __slots__ = ('_lower', '_upper')

    def __init__(self, corner_1: ArrayLike, corner_2: ArrayLike):
        corner_1 = as_fixed_array(corner_1, dtype=np.float64)
        corner_2 = as_fixed_array(corner_2, dtype=np.float64)
        if len(corner_1) != 3:
            raise ValueError(f"BoundingBox corners need 3 coordinates, got {len(corner_1)}")

        self._lower = elementwise_min(corner_1, corner_2)
        self._upper = elementwise_max(corner_1, corner_2)

        if (corner_1 > corner_2).any():
            logger.debug("Reordered box corners %s / %s", corner_1, corner_2)

    @classmethod
    def from_extents(cls, x_min: float, x_max: float,
                     y_min: float, y_max: float,
                     z_min: float, z_max: float) -> 'BoundingBox':
        """Box from explicit per-axis limits"""
        return cls((x_min, y_min, z_min), (x_max, y_max, z_max))

    @classmethod
    def from_dimensions(cls, x_dim: float, y_dim: float, z_dim: float) -> 'BoundingBox':
        """Box of the given size centred on the origin"""
        half = FixedArray([x_dim, y_dim, z_dim], dtype=np.float64) / 2.0
        return cls(-half, half)

    # ------------------------------------------------------------------ geometry

    def in_bounds(self, position: ArrayLike) -> bool:
        """True if every coordinate lies in [lower, upper], bounds included"""
        position = as_fixed_array(position)
        return ((position >= self._lower) & (position <= self._upper)).all()

    def reflect(self, position: ArrayLike) -> FixedArray:
        """Copy of position reflected back through any violated wall"""
        return self.reflect_situ(FixedArray(position))

    def reflect_situ(self, position: FixedArray) -> FixedArray:
        """
        Reflect position in place through any violated wall

        Each coordinate below its lower bound (or above its upper bound) becomes
        ``2*bound - coordinate``. Only one bounce is applied; the result is not
        re-checked.

        Returns:
            The same FixedArray, modified
        """
        for i in range(3):
            position[i] = self._reflect_through_index(position[i], i)
        return position

    def reflect_x(self, x):
        return self._reflect_through_index(x, 0)

    def reflect_y(self, y):
        return self._reflect_through_index(y, 1)

    def reflect_z(self, z):
        return self._reflect_through_index(z, 2)

    def _reflect_through_index(self, coordinate, index: int):
        if coordinate > self._upper[index]:
            return type(coordinate)(2 * self._upper[index] - coordinate)
        elif coordinate < self._lower[index]:
            return type(coordinate)(2 * self._lower[index] - coordinate)
        return coordinate

    def random_point_in_bounds(self, rng: np.random.Generator) -> FixedArray:
        """Uniform point inside the box, one independent draw per axis"""
        output = FixedArray.zeros(3)
        for i in range(3):
            output[i] = rng.uniform(self._lower[i], self._upper[i])
        return output

    def random_point_on_surface(self, rng: np.random.Generator) -> FixedArray:
        """
        Random point on the box surface, weighted by face area

        A long thin box gets most of its points on the long faces and very few
        on the small end faces. The six faces are listed in the order
        x, x, y, y, z, z with their areas as weights; the drawn face index i
        selects axis ``i // 2`` and the upper bound when ``i % 3 == 1``. A
        uniform interior point is then projected onto that face.

        Raises:
            ValueError: If every face has zero area
        """
        surface_areas = [
            self.get_xsurface(), self.get_xsurface(),
            self.get_ysurface(), self.get_ysurface(),
            self.get_zsurface(), self.get_zsurface()
        ]
        if sum(surface_areas) <= 0:
            raise ValueError(f"Cannot sample the surface of {self!r}: total face area is zero")
        surface_index = weighted_index(surface_areas, rng)
        axis = surface_index // 2
        upper = (surface_index % 3) == 1

        bound = self._upper[axis] if upper else self._lower[axis]
        return self.random_point_in_bounds(rng).set(axis, bound)

    def volume(self) -> float:
        return float((self._upper - self._lower).prod())

    # ------------------------------------------------------------------ getters

    @property
    def lower_bounds(self) -> FixedArray:
        return self._lower.copy()

    @property
    def upper_bounds(self) -> FixedArray:
        return self._upper.copy()

    def get_lower_bounds(self) -> FixedArray:
        return self._lower.copy()

    def get_upper_bounds(self) -> FixedArray:
        return self._upper.copy()

    def get_ith_size(self, i: int) -> float:
        return float(self._upper[i] - self._lower[i])

    def get_xmin(self) -> float:
        return float(self._lower[0])

    def get_xmax(self) -> float:
        return float(self._upper[0])

    def get_ymin(self) -> float:
        return float(self._lower[1])

    def get_ymax(self) -> float:
        return float(self._upper[1])

    def get_zmin(self) -> float:
        return float(self._lower[2])

    def get_zmax(self) -> float:
        return float(self._upper[2])

    def get_xsize(self) -> float:
        return self.get_ith_size(0)

    def get_ysize(self) -> float:
        return self.get_ith_size(1)

    def get_zsize(self) -> float:
        return self.get_ith_size(2)

    def get_xsurface(self) -> float:
        """Area of each face with an x normal"""
        return self.get_ysize() * self.get_zsize()

    def get_ysurface(self) -> float:
        return self.get_zsize() * self.get_xsize()

    def get_zsurface(self) -> float:
        return self.get_xsize() * self.get_ysize()

    # ------------------------------------------------------------------ value semantics

    def _key(self) -> Tuple[float, ...]:
        return tuple(self._lower.tolist() + self._upper.tolist())

    def __eq__(self, other):
        if not isinstance(other, BoundingBox):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __repr__(self):
        return f"BoundingBox(lower={self._lower}, upper={self._upper})"
