import numpy as np
import pytest

import curve_eval as ce
from basis import basis_matrix

ZIGZAG = [
    (-0.6, -0.4, 0.0),
    (-0.4, -0.6, 0.0),
    (-0.2, -0.2, 0.0),
    (0.0, 0.0, 0.0),
    (0.2, 0.2, 0.0),
    (0.4, 0.6, 0.0),
    (0.6, 0.4, 0.0),
]


def test_bezier_single_window():
    pts = ce.sample_bezier_segments(ZIGZAG[:4], 10)
    assert pts.shape == (10, 3)
    assert np.allclose(pts[0], ZIGZAG[0])


def test_bezier_segments_share_boundary_point():
    n = 8
    pts = ce.sample_bezier_segments(ZIGZAG, n)
    assert pts.shape == (2 * n, 3)
    # t=0 of the second piece is the shared control point
    assert np.allclose(pts[n], ZIGZAG[3])


def test_bezier_include_end():
    n = 5
    pts = ce.sample_bezier_segments(ZIGZAG, n, include_end=True)
    assert len(pts) == 2 * (n + 1)
    assert np.allclose(pts[n], ZIGZAG[3])
    assert np.allclose(pts[n + 1], ZIGZAG[3])
    assert np.allclose(pts[-1], ZIGZAG[6])


def test_bezier_trailing_points_dropped():
    assert len(ce.sample_bezier_segments(ZIGZAG[:6], 4)) == 4
    extra = [(0.8, 0.2, 0.0), (1.0, 0.0, 0.0), (1.2, 0.2, 0.0)]
    # windows start at 0 and 3 while i + 3 < len(points)
    assert len(ce.sample_bezier_segments(ZIGZAG + extra[:1], 4)) == 8
    assert len(ce.sample_bezier_segments(ZIGZAG + extra[:2], 4)) == 8
    # a third window opens at 6 once there are 10 points
    assert len(ce.sample_bezier_segments(ZIGZAG + extra, 4)) == 12


def test_too_few_points_gives_empty():
    assert ce.sample_bezier_segments(ZIGZAG[:3], 10).shape == (0, 3)
    assert ce.sample_catmull_rom(ZIGZAG[:3], 10).shape == (0, 3)
    assert ce.sample_global_bezier(ZIGZAG[:1], 10).shape == (0, 3)
    assert ce.sample_global_bezier([], 10).shape == (0, 3)


@pytest.mark.parametrize("bad", [0, -3, 2.5, True, None])
def test_bad_sample_count_rejected(bad):
    with pytest.raises(ValueError):
        ce.sample_bezier_segments(ZIGZAG, bad)
    with pytest.raises(ValueError):
        ce.sample_global_bezier(ZIGZAG, bad)


def test_bad_stride_and_matrix_rejected():
    with pytest.raises(ValueError):
        ce.sample_segments(ZIGZAG, 4, basis_matrix('bezier'), 0)
    with pytest.raises(ValueError):
        ce.sample_segments(ZIGZAG, 4, np.eye(3), 3)


def test_bad_point_shape_rejected():
    with pytest.raises(ValueError):
        ce.as_points([(1.0, 2.0, 3.0, 4.0)])


def test_2d_points_lifted_to_z0():
    pts = ce.as_points([(1.0, 2.0), (3.0, 4.0)])
    assert pts.shape == (2, 3)
    assert np.all(pts[:, 2] == 0.0)


def test_eval_segment_at_t_endpoints():
    M = basis_matrix('bezier')
    assert np.allclose(ce.eval_segment_at_t(ZIGZAG[:4], 0.0, M), ZIGZAG[0])
    assert np.allclose(ce.eval_segment_at_t(ZIGZAG[:4], 1.0, M), ZIGZAG[3])
    with pytest.raises(ValueError):
        ce.eval_segment_at_t(ZIGZAG[:3], 0.5, M)


def test_ascending_order_same_curve():
    M_asc = basis_matrix('bezier', 'ascending')
    asc = ce.sample_segments(ZIGZAG, 7, M_asc, 3, order='ascending')
    assert np.allclose(asc, ce.sample_bezier_segments(ZIGZAG, 7))


def test_global_bezier_endpoints_and_count():
    n = 50
    pts = ce.sample_global_bezier(ZIGZAG, n)
    assert pts.shape == (n + 1, 3)
    assert np.allclose(pts[0], ZIGZAG[0], atol=1e-12)
    assert np.allclose(pts[-1], ZIGZAG[-1], atol=1e-12)


def test_global_bezier_degree_one_is_linear():
    p0 = np.array([-1.0, 0.5, 0.0])
    p1 = np.array([2.0, -1.5, 1.0])
    n = 16
    pts = ce.sample_global_bezier([p0, p1], n)
    t = np.arange(n + 1)[:, None] / n
    assert np.allclose(pts, (1 - t) * p0 + t * p1)


def test_global_bezier_cubic_matches_segment():
    pts = ce.sample_global_bezier(ZIGZAG[:4], 10)
    seg = ce.sample_bezier_segments(ZIGZAG[:4], 10, include_end=True)
    assert np.allclose(pts, seg)


def test_global_bezier_high_degree_is_finite():
    t = np.linspace(0.0, 2.0 * np.pi, 200)
    cps = np.column_stack([np.cos(t), np.sin(t), np.zeros_like(t)])
    pts = ce.sample_global_bezier(cps, 100)
    assert np.all(np.isfinite(pts))
    assert np.allclose(pts[0], cps[0])
    assert np.allclose(pts[-1], cps[-1])
    B = ce.bernstein_basis(199, np.linspace(0.0, 1.0, 33))
    assert np.allclose(B.sum(axis=1), 1.0)


def test_bernstein_paths_agree():
    t = np.linspace(0.05, 0.95, 7)
    assert np.allclose(ce._bernstein_pascal(15, t), ce._bernstein_log(15, t))


def test_binomial_rows():
    assert list(ce.binomial_row(5)) == [1.0, 5.0, 10.0, 10.0, 5.0, 1.0]
    assert np.allclose(np.exp(ce.log_binomial_row(5)), ce.binomial_row(5))
    assert list(ce.binomial_row(0)) == [1.0]


def test_catmull_rom_spans_pass_through_points():
    base = np.array(ZIGZAG)
    k = len(base)
    n = 6
    padded = np.concatenate([base[:1], base, base[-1:]])
    pts = ce.sample_catmull_rom(padded, n)
    assert pts.shape == ((k - 1) * n, 3)
    for span in range(k - 1):
        assert np.allclose(pts[span * n], base[span])


def test_catmull_rom_duplicate_flag():
    base = np.array(ZIGZAG)
    padded = np.concatenate([base[:1], base, base[-1:]])
    assert np.allclose(ce.sample_catmull_rom(base, 4, duplicate_endpoints=True),
                       ce.sample_catmull_rom(padded, 4))


@pytest.mark.parametrize("mode", ce.MODES)
@pytest.mark.parametrize("count", [1, 3, 4, 7, 10])
def test_curve_point_count_matches_regeneration(mode, count):
    cps = np.random.default_rng(count).random((count, 3))
    curve = ce.make_curve('c', cps, mode=mode)
    pts = ce.regenerate_curve(curve, 9, include_end=True)
    assert len(pts) == ce.curve_point_count(count, 9, mode, include_end=True)


def test_regenerate_swaps_in_new_points():
    curve = ce.make_curve('z', ZIGZAG, mode='bezier')
    assert curve['curve_points'].shape == (0, 3)
    first = ce.regenerate_curve(curve, 4)
    snapshot = first.copy()
    second = ce.regenerate_curve(curve, 8)
    assert curve['curve_points'] is second
    assert second is not first
    assert np.array_equal(first, snapshot)
    assert len(second) == 16
    assert curve['samples'] == 8


def test_control_points_frozen():
    src = np.array(ZIGZAG)
    curve = ce.make_curve('z', src, mode='global')
    src[0, 0] = 99.0
    assert curve['control_points'][0, 0] == -0.6
    with pytest.raises(ValueError):
        curve['control_points'][0, 0] = 1.0


def test_make_curve_unknown_mode():
    with pytest.raises(ValueError):
        ce.make_curve('x', ZIGZAG, mode='nurbs')


@pytest.mark.parametrize("t", [-0.1, 1.5, float('nan')])
def test_bernstein_parameter_out_of_range(t):
    with pytest.raises(ValueError):
        ce.bernstein_basis(3, [0.0, t, 1.0])
