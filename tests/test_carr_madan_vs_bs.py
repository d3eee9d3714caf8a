#fft-option-pricing/tests/test_carr_madan_vs_bs.py
import numpy as np
import pytest

from fft_pricing import (
    BlackScholesModel,
    CarrMadanModel,
    FullAxisGridConfig,
    HalfAxisGridConfig,
    InvalidGridParameters,
    PriceGrid,
    bs_call_price,
    call_price_fft_full_axis,
    call_price_fft_half_axis,
    call_transform,
    price_call_grid,
)
from fft_pricing.BlackScholesModel import (
    bs_call_prices_fft_full_axis,
    bs_call_prices_fft_half_axis,
    bs_characteristic_function,
)
from fft_pricing.carr_madan import discounted_intrinsic


@pytest.fixture(scope="module")
def half_axis_grid():
    return bs_call_prices_fft_half_axis(0.0, 0.5, 1.0)


@pytest.fixture(scope="module")
def full_axis_grid():
    return bs_call_prices_fft_full_axis(0.0, 0.5, 1.0)


def _bs_zeta(r, sigma, T):
    return call_transform(lambda u: bs_characteristic_function(u, sigma, T), r, T)


def test_half_axis_atm_vs_bs():
    S = 100.0; K = 100.0; r = 0.0; sigma = 0.1; T = 1.0
    grid = bs_call_prices_fft_half_axis(r, sigma, T)
    fft_price = grid.price_at(K, spot=S)
    bs = BlackScholesModel(S, K, T, r, sigma).calculate_option_price('Call Option')
    assert abs(fft_price - bs) < 1e-2


def test_both_schemes_one_value_with_rates():
    sigma = 0.5; r = 0.05; T = 1.0; K = 0.8
    bs = bs_call_price(1.0, K, r, sigma, T)
    half = bs_call_prices_fft_half_axis(r, sigma, T).to_function().at(K)
    full = bs_call_prices_fft_full_axis(r, sigma, T).to_function().at(K)
    assert abs(half - bs) < 1e-3
    assert abs(full - bs) < 1e-3


def test_half_axis_all_strikes(half_axis_grid):
    strikes, prices = half_axis_grid
    bs = bs_call_price(1.0, strikes, 0.0, 0.5, 1.0)
    assert np.max(np.abs(bs[1:] - prices[1:])) < 4e-3


def test_full_axis_all_strikes(full_axis_grid):
    strikes, prices = full_axis_grid
    bs = bs_call_price(1.0, strikes, 0.0, 0.5, 1.0)
    assert np.max(np.abs(bs[1:] - prices[1:])) < 2.8e-5


@pytest.mark.parametrize("fixture_name,config", [
    ("half_axis_grid", HalfAxisGridConfig()),
    ("full_axis_grid", FullAxisGridConfig()),
])
def test_truncated_grid_is_monotone(request, fixture_name, config):
    grid = request.getfixturevalue(fixture_name)
    assert len(grid) == config.n - config.little_n
    assert np.all(np.diff(grid.strikes) > 0)
    f = grid.to_function()
    assert f.at(grid.strikes[0] * 0.5) == 0.0
    assert f.at(grid.strikes[-1] * 2.0) == 0.0


def test_coarse_full_axis_grid():
    config = FullAxisGridConfig(log2_n=15, log2_little_n=12)
    grid = bs_call_prices_fft_full_axis(0.0, 0.3, 0.5, config=config)
    assert len(grid) == 2 ** 15 - 2 ** 12
    K = np.array([0.5, 0.9, 1.0, 1.1, 2.0])
    assert np.allclose(grid.to_function().at(K), bs_call_price(1.0, K, 0.0, 0.3, 0.5), atol=1e-4)


@pytest.mark.parametrize("scheme,config", [
    ('half-axis', HalfAxisGridConfig(log2_n=12, min_strike=1e-4, log2_little_n=5)),
    ('full-axis', FullAxisGridConfig(log2_n=12, log2_little_n=5, truncation_width=400.0)),
])
def test_pricing_is_idempotent(scheme, config):
    r, T = 0.01, 0.5
    zeta = _bs_zeta(r, 0.2, T)
    if scheme == 'half-axis':
        price = lambda: call_price_fft_half_axis(zeta, r, T, config=config)
    else:
        price = lambda: call_price_fft_full_axis(zeta, discounted_intrinsic(r, T), config=config)
    first = price()
    second = price()
    assert np.array_equal(first.strikes, second.strikes)
    assert np.array_equal(first.prices, second.prices)


def test_scheme_dispatch_matches_entry_points():
    r, sigma, T = 0.02, 0.25, 1.0
    zeta = _bs_zeta(r, sigma, T)
    config = FullAxisGridConfig(log2_n=14, log2_little_n=10)
    via_dispatch = price_call_grid(zeta, scheme='full-axis', r=r, T=T, config=config)
    direct = bs_call_prices_fft_full_axis(r, sigma, T, config=config)
    assert np.array_equal(via_dispatch.prices, direct.prices)

    explicit = price_call_grid(zeta, correction=discounted_intrinsic(r, T), scheme='full-axis', config=config)
    assert np.array_equal(explicit.prices, direct.prices)


def test_invalid_grid_parameters_propagate():
    zeta = _bs_zeta(0.0, 0.2, 1.0)
    with pytest.raises(InvalidGridParameters):
        call_price_fft_half_axis(zeta, 0.0, 1.0, config=HalfAxisGridConfig(min_strike=2.0))
    with pytest.raises(InvalidGridParameters):
        call_price_fft_half_axis(zeta, 0.0, 1.0, config=HalfAxisGridConfig(min_strike=0.0))
    with pytest.raises(InvalidGridParameters):
        call_price_fft_half_axis(zeta, 0.0, 1.0, config=HalfAxisGridConfig(log2_n=8, log2_little_n=8))
    with pytest.raises(InvalidGridParameters):
        price_call_grid(zeta, scheme='full-axis', config=FullAxisGridConfig(truncation_width=-1.0))
    with pytest.raises(InvalidGridParameters):
        call_price_fft_half_axis(zeta, 0.0, 1.0,
                                 config=HalfAxisGridConfig(log2_n=10, min_strike=1e-3, log2_little_n=-1))
    with pytest.raises(InvalidGridParameters):
        price_call_grid(zeta, scheme='full-axis', config=FullAxisGridConfig(log2_n=-2))
    with pytest.raises(ValueError):
        price_call_grid(zeta, scheme='quarter-axis')


def test_price_grid_validation_and_series():
    with pytest.raises(ValueError):
        PriceGrid(strikes=[1.0, 2.0], prices=[0.5])
    with pytest.raises(ValueError):
        PriceGrid(strikes=[1.0, 1.0, 2.0], prices=[0.5, 0.4, 0.1])

    grid = PriceGrid(strikes=[0.5, 1.0, 2.0], prices=[0.55, 0.1, 0.01])
    with pytest.raises(ValueError):
        grid.prices[0] = 1.0
    series = grid.to_series()
    assert list(series.index) == [0.5, 1.0, 2.0]
    assert series.loc[1.0] == pytest.approx(0.1)


def test_carr_madan_model_put_call_parity():
    S = 100.0; K = 95.0; r = 0.03; sigma = 0.2; T = 0.75
    grid = bs_call_prices_fft_half_axis(r, sigma, T)
    cm = CarrMadanModel(S, K, T, r, grid)
    bsm = BlackScholesModel(S, K, T, r, sigma)
    assert cm.calculate_option_price('call') == pytest.approx(bsm.calculate_option_price('call'), abs=1e-2)
    assert cm.calculate_option_price('put') == pytest.approx(bsm.calculate_option_price('put'), abs=1e-2)
