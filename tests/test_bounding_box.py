import copy

import numpy as np
import pytest
from scipy import stats

from stokesflow.core import FixedArray
from stokesflow.geometry import BoundingBox


class ScriptedRng:
    """Replays fixed uniform draws in place of a numpy Generator"""

    def __init__(self, uniforms):
        self._uniforms = list(uniforms)

    def uniform(self, low, high):
        return self._uniforms.pop(0)


@pytest.fixture
def box():
    return BoundingBox.from_dimensions(96, 100, 98)


@pytest.mark.parametrize("position, expected", [
    ((53.0, 0.0, 0.0), (43.0, 0.0, 0.0)),
    ((-57.0, 0.0, 0.0), (-39.0, 0.0, 0.0)),
    ((0.0, 51.0, 0.0), (0.0, 49.0, 0.0)),
    ((0.0, -51.0, 0.0), (0.0, -49.0, 0.0)),
    ((0.0, 0.0, 51.0), (0.0, 0.0, 47.0)),
    ((0.0, 0.0, -52.0), (0.0, 0.0, -46.0)),
    ((3.0, -51.0, 51.0), (3.0, -49.0, 47.0)),
    ((1.0, 2.0, 3.0), (1.0, 2.0, 3.0)),
])
def test_reflect(box, position, expected):
    before = FixedArray(position)

    reflected = box.reflect(before)

    assert reflected.tolist() == list(expected)
    assert before.tolist() == list(position)


def test_reflect_situ_modifies_argument(box):
    position = FixedArray([53.0, -51.0, 0.0])

    result = box.reflect_situ(position)

    assert result is position
    assert position.tolist() == [43.0, -49.0, 0.0]


def test_reflect_single_axis(box):
    assert box.reflect_x(53.0) == 43.0
    assert box.reflect_y(-51.0) == -49.0
    assert box.reflect_z(10.0) == 10.0


def test_in_bounds_is_inclusive(box):
    assert box.in_bounds((0.0, 0.0, 0.0))
    assert box.in_bounds((48.0, -50.0, 49.0))
    assert not box.in_bounds((48.1, 0.0, 0.0))
    assert not box.in_bounds((0.0, 0.0, -49.5))


def test_volume_and_sizes(box):
    assert box.volume() == 96 * 100 * 98
    assert box.get_xsize() == 96
    assert box.get_ysize() == 100
    assert box.get_zsize() == 98
    assert box.get_ith_size(1) == 100


def test_surface_areas():
    box = BoundingBox.from_dimensions(13, 17, 23)

    assert box.get_xsurface() == 17 * 23
    assert box.get_ysurface() == 23 * 13
    assert box.get_zsurface() == 13 * 17


def test_constructors_agree():
    assert BoundingBox.from_extents(-5, 5, -10, 10, -15, 15) == BoundingBox.from_dimensions(10, 20, 30)
    assert BoundingBox((-5, -10, -15), (5, 10, 15)) == BoundingBox.from_dimensions(10, 20, 30)


def test_corners_are_normalized():
    box = BoundingBox((1.0, -2.0, 3.0), (-1.0, 2.0, -3.0))

    assert box.get_lower_bounds().tolist() == [-1.0, -2.0, -3.0]
    assert box.get_upper_bounds().tolist() == [1.0, 2.0, 3.0]
    assert box == BoundingBox.from_extents(1.0, -1.0, 2.0, -2.0, 3.0, -3.0)


def test_getters(box):
    assert (box.get_xmin(), box.get_xmax()) == (-48.0, 48.0)
    assert (box.get_ymin(), box.get_ymax()) == (-50.0, 50.0)
    assert (box.get_zmin(), box.get_zmax()) == (-49.0, 49.0)


def test_bounds_are_copies(box):
    lower = box.lower_bounds
    lower[0] = 1000.0
    box.get_upper_bounds()[0] = -1000.0

    assert box.get_xmin() == -48.0
    assert box.get_xmax() == 48.0


def test_value_semantics(box):
    same = BoundingBox.from_dimensions(96, 100, 98)

    assert box == same
    assert hash(box) == hash(same)
    assert box != BoundingBox.from_dimensions(96, 100, 97)
    assert copy.deepcopy(box) == box
    assert len({box, same}) == 1


def test_bad_corner_length():
    with pytest.raises(ValueError):
        BoundingBox((0.0, 0.0), (1.0, 1.0))


def test_random_point_in_bounds(rng, box):
    for _ in range(1000):
        assert box.in_bounds(box.random_point_in_bounds(rng))


def test_random_point_on_surface_lies_on_a_face(rng, box):
    lower = box.get_lower_bounds()
    upper = box.get_upper_bounds()

    for _ in range(500):
        point = box.random_point_on_surface(rng)

        assert box.in_bounds(point)
        assert ((point == lower) | (point == upper)).any()


@pytest.mark.parametrize("face, axis, upper", [
    (0, 0, False),
    (1, 0, True),
    (2, 1, False),
    (3, 1, False),
    (4, 2, True),
    (5, 2, False),
])
def test_surface_face_decoding(face, axis, upper):
    box = BoundingBox.from_dimensions(2, 2, 2)
    # Each face has area 4, so a draw of 4*face + 1 selects that face
    rng = ScriptedRng([4 * face + 1, 0.1, 0.2, 0.3])

    point = box.random_point_on_surface(rng)

    expected = [0.1, 0.2, 0.3]
    expected[axis] = 1.0 if upper else -1.0
    assert point.tolist() == expected


def test_surface_axis_frequency_follows_area(rng):
    box = BoundingBox.from_dimensions(13, 17, 23)
    n = 20000
    lower = box.get_lower_bounds()
    upper = box.get_upper_bounds()

    counts = np.zeros(3)
    for _ in range(n):
        point = box.random_point_on_surface(rng)
        on_face = ((point == lower) | (point == upper)).to_numpy()
        counts[np.flatnonzero(on_face)[0]] += 1

    areas = np.array([box.get_xsurface(), box.get_ysurface(), box.get_zsurface()])
    expected = n * areas / areas.sum()
    _, p_value = stats.chisquare(counts, expected)

    assert p_value > 1e-3


def test_extents_match_dimensions(box):
    assert BoundingBox.from_extents(-48, 48, -50, 50, -49, 49) == box
    assert box.in_bounds((1.0, 1.0, 1.0))
    assert not box.in_bounds((53.0, 0.0, 0.0))


@pytest.mark.parametrize("dimensions", [(0, 0, 0), (5, 0, 0)])
def test_surface_sampling_needs_area(rng, dimensions):
    box = BoundingBox.from_dimensions(*dimensions)

    with pytest.raises(ValueError, match="total face area is zero"):
        box.random_point_on_surface(rng)


def test_flat_box_samples_its_faces(rng):
    box = BoundingBox.from_dimensions(4, 2, 0)

    for _ in range(50):
        point = box.random_point_on_surface(rng)
        assert point[2] == 0.0
