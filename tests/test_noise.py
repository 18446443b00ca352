import numpy as np
import pytest

from flowfield import noise as N


@pytest.fixture
def points():
    rng = np.random.default_rng(7)
    return rng.uniform(-50.0, 50.0, size=(200, 2))


def test_hash_in_unit_interval(points):
    h = N.hash(points)
    assert h.shape == (200,)
    assert np.all(h >= 0.0) and np.all(h < 1.0)


def test_hash_deterministic(points):
    a = N.hash(points)
    b = N.hash(points.copy())
    assert np.array_equal(a, b)
    assert N.hash((3.0, 4.0)) == N.hash(np.array([3.0, 4.0]))


def test_hash_of_origin_is_zero():
    # sin(0) == 0, which the grain term relies on at t == 0
    assert N.hash((0.0, 0.0)) == 0.0


def test_fract_never_returns_one():
    x = np.array([-1e-20, -0.0, 2.0, -3.25])
    f = N.fract(x)
    assert np.all(f >= 0.0) and np.all(f < 1.0)
    assert f[3] == pytest.approx(0.75)


@pytest.mark.parametrize("n, m", [(0, 0), (1, 2), (-3, 5), (17, -8), (100, 100)])
def test_noise_matches_hash_at_lattice_corners(n, m):
    assert N.noise((float(n), float(m))) == N.hash((float(n), float(m)))


def test_noise_is_continuous_across_cell_edges():
    eps = 1e-9
    for edge in (1.0, 2.0, -4.0):
        left = N.noise((edge - eps, 0.3))
        right = N.noise((edge + eps, 0.3))
        assert left == pytest.approx(right, abs=1e-6)


def test_noise_range(points):
    v = N.noise(points)
    assert np.all(v >= 0.0) and np.all(v <= 1.0)


def test_fbm_octave_law(points):
    expected = (
        0.5 * N.noise(points) + 0.25 * N.noise(2.0 * points) + 0.125 * N.noise(4.0 * points)
    )
    assert np.allclose(N.fbm(points), expected, rtol=0.0, atol=1e-12)


def test_fbm_bounded(points):
    v = N.fbm(points)
    assert np.all(v >= 0.0) and np.all(v <= 0.875)


def test_rejects_wrong_trailing_axis():
    with pytest.raises(ValueError):
        N.noise(np.zeros((4, 3)))
