import math

import numpy as np
import pytest

import control_points as cp


def test_heart_is_closed():
    pts = cp.heart_points(20)
    assert pts.shape == (20, 3)
    assert np.array_equal(pts[0], pts[19])


def test_heart_first_point():
    # t = 0: x = 0, y = (13 - 5 - 2 - 1) / 16 + 0.15
    assert np.allclose(cp.heart_points(20)[0], [0.0, 5.0 / 16.0 + 0.15, 0.0])


def test_heart_stays_in_unit_box():
    pts = cp.heart_points(200)
    assert np.all(np.abs(pts[:, :2]) <= 1.0)


def test_closed_parametric_circle():
    pts = cp.closed_parametric_points(math.cos, math.sin, 9, scale=(2.0, 2.0), offset=(1.0, 0.0))
    assert len(pts) == 9
    r = np.hypot(pts[:, 0] - 1.0, pts[:, 1])
    assert np.allclose(r, 2.0)
    assert np.array_equal(pts[0], pts[-1])


@pytest.mark.parametrize("bad", [1, 0, -5, 2.0, True])
def test_closed_parametric_bad_count(bad):
    with pytest.raises(ValueError):
        cp.closed_parametric_points(math.cos, math.sin, bad)


def test_duplicate_endpoints():
    base = cp.preset_points('arch')
    out = cp.duplicate_endpoints(base)
    assert len(out) == len(base) + 2
    assert np.array_equal(out[0], base[0])
    assert np.array_equal(out[1:-1], base)
    assert np.array_equal(out[-1], base[-1])


def test_duplicate_endpoints_single_point():
    out = cp.duplicate_endpoints([(1.0, 2.0, 3.0)])
    assert out.shape == (3, 3)
    assert np.all(out == [1.0, 2.0, 3.0])


def test_duplicate_endpoints_empty():
    with pytest.raises(ValueError):
        cp.duplicate_endpoints([])


def test_presets():
    assert cp.preset_points('zigzag').shape == (7, 3)
    assert cp.preset_points('arch').shape == (4, 3)
    pts = cp.preset_points('arch')
    pts[0, 0] = 5.0
    assert cp.preset_points('arch')[0, 0] == -0.8
    with pytest.raises(KeyError):
        cp.preset_points('spiral')


def test_get_control_points():
    assert len(cp.get_control_points('heart', 12)) == 12
    assert len(cp.get_control_points('zigzag')) == 7
    assert set(cp.SOURCES) == {'heart', 'zigzag', 'arch'}


def test_numpy_integer_count_accepted():
    pts = cp.heart_points(np.int64(20))
    assert pts.shape == (20, 3)
    assert np.array_equal(pts, cp.heart_points(20))
