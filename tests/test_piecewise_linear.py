#fft-option-pricing/tests/test_piecewise_linear.py
import numpy as np
import pytest

from fft_pricing import PiecewiseLinearFunction, span


@pytest.fixture
def tent():
    # 0 -> 1 -> 0 on [0, 2]
    return PiecewiseLinearFunction([0.0, 1.0, 2.0], [0.0, 1.0, 0.0])


def test_at_interpolates_inside(tent):
    assert tent.at(0.5) == pytest.approx(0.5)
    assert tent.at(1.0) == pytest.approx(1.0)
    assert tent.at(1.75) == pytest.approx(0.25)


def test_at_is_zero_outside_domain():
    f = PiecewiseLinearFunction([1.0, 2.0, 3.0], [5.0, 6.0, 7.0])
    assert f.at(0.999) == 0.0
    assert f.at(3.001) == 0.0
    assert f.at(1.0) == pytest.approx(5.0)
    assert f.at(3.0) == pytest.approx(7.0)


def test_at_accepts_arrays(tent):
    x = np.array([-1.0, 0.25, 1.5, 3.0])
    assert np.allclose(tent(x), [0.0, 0.25, 0.5, 0.0])


def test_area(tent):
    assert tent.area() == pytest.approx(1.0)


@pytest.mark.parametrize("x,expected", [
    (-1.0, 0.0),
    (0.0, 0.0),
    (0.5, 0.125),
    (1.0, 0.5),
    (1.5, 0.875),
    (2.0, 1.0),
    (10.0, 1.0),
])
def test_area_up_to(tent, x, expected):
    assert tent.area_up_to(x) == pytest.approx(expected)


def test_invalid_construction():
    with pytest.raises(ValueError):
        PiecewiseLinearFunction([0.0, 1.0], [1.0])
    with pytest.raises(ValueError):
        PiecewiseLinearFunction([0.0], [1.0])


def test_span():
    pts = span(3.0, 1.0, 5)
    assert np.allclose(pts, [1.0, 1.5, 2.0, 2.5, 3.0])
