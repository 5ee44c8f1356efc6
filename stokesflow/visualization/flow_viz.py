"""
Flow visualization for Stokes-flow kernels
"""

import numpy as np
import matplotlib.pyplot as plt
from typing import Callable, Tuple

from ..core.fixed_array import FixedArray
from ..geometry.bounding_box import BoundingBox

_AXES = {'x': 0, 'y': 1, 'z': 2}


class FlowVisualizer:
    """
    Plot velocity fields and sampled points inside a BoundingBox
    """

    def __init__(self, box: BoundingBox, figsize: Tuple[int, int] = (10, 8)):
        """
        Initialize flow visualizer

        Args:
            box: Domain to draw
            figsize: Figure size
        """
        self.box = box
        self.figsize = figsize

    def _plane_axes(self, plane: str) -> Tuple[int, int, int]:
        if len(plane) != 2 or any(c not in _AXES for c in plane) or plane[0] == plane[1]:
            raise ValueError(f"plane must name two distinct axes, e.g. 'xz', got {plane!r}")
        first, second = _AXES[plane[0]], _AXES[plane[1]]
        normal = 3 - first - second
        return first, second, normal

    def sample_slice(self, flow: Callable[[FixedArray], FixedArray],
                     plane: str = 'xz',
                     offset: float = 0.0,
                     resolution: int = 20):
        """
        Evaluate a flow on a regular grid over one slice of the box

        Args:
            flow: Callable mapping a position to a velocity
            plane: Two axis letters spanning the slice
            offset: Coordinate of the slice along the remaining axis
            resolution: Grid points per side

        Returns:
            (grid_a, grid_b, vel_a, vel_b) 2D arrays, non-finite velocities masked
        """
        first, second, normal = self._plane_axes(plane)
        lower = self.box.get_lower_bounds()
        upper = self.box.get_upper_bounds()

        a = np.linspace(lower[first], upper[first], resolution)
        b = np.linspace(lower[second], upper[second], resolution)
        grid_a, grid_b = np.meshgrid(a, b, indexing='ij')

        vel_a = np.empty_like(grid_a)
        vel_b = np.empty_like(grid_b)
        position = FixedArray.zeros(3)
        position[normal] = offset
        for i in range(resolution):
            for j in range(resolution):
                position[first] = grid_a[i, j]
                position[second] = grid_b[i, j]
                velocity = flow(position.copy())
                vel_a[i, j] = velocity[first]
                vel_b[i, j] = velocity[second]

        return grid_a, grid_b, np.ma.masked_invalid(vel_a), np.ma.masked_invalid(vel_b)

    def plot_flow_slice(self, flow: Callable[[FixedArray], FixedArray],
                        plane: str = 'xz',
                        offset: float = 0.0,
                        resolution: int = 20,
                        title: str = 'Flow field') -> plt.Figure:
        """
        Quiver plot of the in-plane velocity, coloured by in-plane speed

        Returns:
            Figure object
        """
        grid_a, grid_b, vel_a, vel_b = self.sample_slice(flow, plane, offset, resolution)
        speed = np.ma.sqrt(vel_a ** 2 + vel_b ** 2)

        fig, ax = plt.subplots(figsize=self.figsize)
        quiver = ax.quiver(grid_a, grid_b, vel_a, vel_b, speed, cmap='viridis')
        plt.colorbar(quiver, ax=ax, label='Speed')

        ax.set_xlabel(plane[0])
        ax.set_ylabel(plane[1])
        normal = "xyz"[self._plane_axes(plane)[2]]
        ax.set_title(f'{title} ({plane} plane, {normal}={offset:g})')
        ax.set_aspect('equal')

        return fig

    def plot_surface_samples(self, rng: np.random.Generator,
                             n_samples: int = 2000) -> plt.Figure:
        """
        Scatter points drawn with BoundingBox.random_point_on_surface

        Denser faces should match larger face areas.

        Returns:
            Figure object
        """
        points = np.array([self.box.random_point_on_surface(rng).to_numpy()
                           for _ in range(n_samples)])

        fig = plt.figure(figsize=self.figsize)
        ax = fig.add_subplot(111, projection='3d')
        ax.scatter(points[:, 0], points[:, 1], points[:, 2], s=2, alpha=0.5)

        ax.set_xlabel('x')
        ax.set_ylabel('y')
        ax.set_zlabel('z')
        ax.set_title(f'Surface samples (n={n_samples})')

        return fig
