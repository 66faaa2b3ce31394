import numpy as np
import pytest

import GreyMorph.ImageProcessing.Morphology.BresenhamLine as bl
from GreyMorph.Utils.exceptions import GeometryError


@pytest.mark.parametrize("direction, length, expected", [
    ((1, 0), 4, [[0, 0], [1, 0], [2, 0], [3, 0]]),
    ((0, -1), 3, [[0, 0], [0, -1], [0, -2]]),
    ((1, 1), 3, [[0, 0], [1, 1], [2, 2]]),
    ((2, 1), 5, [[0, 0], [1, 1], [2, 1], [3, 2], [4, 2]]),
    ((3,), 3, [[0], [1], [2]]),
])
def test_rasterize(direction, length, expected):
    assert bl.rasterize(direction, length).tolist() == expected


@pytest.mark.parametrize("direction", [(0, 0), (0,), (0, 0, 0)])
def test_zero_direction_raises(direction):
    with pytest.raises(GeometryError):
        bl.rasterize(direction, 5)


@pytest.mark.parametrize("direction", [(1, 0), (1, 1), (2, 1), (1, -2), (3, 1, 2), (-1, 4, 2), (5, -3)])
def test_reversed_direction_negates(direction):
    forward = bl.rasterize(direction, 20)
    backward = bl.rasterize(tuple(-d for d in direction), 20)
    assert np.array_equal(backward, -forward)


@pytest.mark.parametrize("direction", [(1, 0), (1, 1), (2, 1), (1, -2), (3, 1, 2), (-1, 4, 2), (5, -3)])
def test_unit_steps_along_dominant_axis(direction):
    offsets = bl.rasterize(direction, 30)
    steps = np.diff(offsets, axis=0)
    main = bl.dominant_axis(direction)
    assert np.all(np.abs(steps[:, main]) == 1)
    assert np.all(np.abs(steps) <= 1)
    # the line stays close to the continuous line
    d = np.array(direction, dtype=float)
    expected = np.outer(np.arange(30), d / abs(d[main]))
    assert np.all(np.abs(offsets - expected) <= 0.5 + 1e-9)


def test_deterministic():
    assert np.array_equal(bl.rasterize((3, 2), 50), bl.rasterize((3, 2), 50))


@pytest.mark.parametrize("direction, period", [
    ((1, 0), 1), ((0, -1), 1), ((1, -1), 1), ((2, 1), 2), ((4, 2), 2), ((5, -3), 5), ((1, 3, 2), 3),
])
def test_line_period(direction, period):
    assert bl.line_period(direction) == period
    offsets = bl.rasterize(direction, 4 * period + 1)
    reduced = np.array(direction) // np.gcd.reduce(np.abs(direction))
    assert np.array_equal(offsets[period:], offsets[:-period] + reduced)


def test_line_period_zero_direction():
    with pytest.raises(GeometryError):
        bl.line_period((0, 0))


def test_line_footprint_of_axes_and_diagonals():
    assert bl.line_footprint((1, 1), 5).tolist() == [[-2, -2], [-1, -1], [0, 0], [1, 1], [2, 2]]
    assert bl.line_footprint((0, 1), 3).tolist() == [[0, -1], [0, 0], [0, 1]]
    with pytest.raises(GeometryError):
        bl.line_footprint((1, 0), 4)


@pytest.mark.parametrize("direction, length", [((2, 1), 5), ((3, 1), 3), ((5, -3), 7), ((1, 2, 3), 5)])
def test_line_footprint_covers_every_window(direction, length):
    footprint = {tuple(o) for o in bl.line_footprint(direction, length)}
    assert footprint == {tuple(-o) for o in footprint}
    half = length // 2
    offsets = bl.rasterize(direction, 40)
    for k in range(half, 40 - half):
        window = offsets[k - half:k + half + 1] - offsets[k]
        assert {tuple(o) for o in window} <= footprint
