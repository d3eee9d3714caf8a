# fft_pricing/carr_madan.py
"""
Carr-Madan style FFT call pricer.

References:
Carr, Madan (1999), "Option Valuation Using the Fast Fourier Transform"
Cont, Tankov (2004), "Financial Modelling with Jump Processes", section 11.1.3

For unit spot and log-moneyness k, the call price C(k) minus a reference price
has Fourier transform

    zeta(v) = e^{i v r T} (phi(v - i) - phi_ref(v - i)) / (i v (1 + i v))

where phi is the characteristic function of log(S_T / S_0) - rT. With
phi_ref = 1 the reference price is the discounted intrinsic max(1 - e^{k - rT}, 0).
Inverting zeta with the FFT and adding the reference back gives call prices
for "all" strikes at once.

Usage:
 - build zeta with call_transform(phi, r, T) (or supply your own)
 - call_price_fft_half_axis(zeta, r, T) or call_price_fft_full_axis(zeta, correction)
 - query the returned PriceGrid, e.g. grid.price_at(K, spot=S)
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Union

import numpy as np
import pandas as pd

from .base import (
    CharacteristicFunction,
    INTEGRATION_SCHEME,
    InvalidGridParameters,
    OptionPricingModel,
)
from .config import (
    DEFAULT_FULL_AXIS,
    DEFAULT_HALF_AXIS,
    FullAxisGridConfig,
    HalfAxisGridConfig,
)
from .grid import fourier_transform_even_in_real_part, full_axis_transform
from .piecewise_linear import PiecewiseLinearFunction

logger = logging.getLogger(__name__)

CorrectionFunction = Callable[[np.ndarray], np.ndarray]


@dataclass(frozen=True, eq=False)
class PriceGrid:
    """
    Call prices for unit spot on a strictly increasing grid of strike/spot ratios.
    """
    strikes: np.ndarray
    prices: np.ndarray

    def __post_init__(self):
        strikes = np.array(self.strikes, dtype=float)
        prices = np.array(self.prices, dtype=float)
        if strikes.ndim != 1 or strikes.shape != prices.shape:
            raise ValueError(f"strikes and prices must be 1-d and of equal length, "
                             f"got {strikes.shape} and {prices.shape}")
        if strikes.size > 1 and not np.all(np.diff(strikes) > 0):
            raise ValueError("strikes must be strictly increasing")
        strikes.setflags(write=False)
        prices.setflags(write=False)
        object.__setattr__(self, "strikes", strikes)
        object.__setattr__(self, "prices", prices)

    def __len__(self):
        return self.strikes.size

    def __iter__(self):
        # allows: strikes, prices = grid
        yield self.strikes
        yield self.prices

    def to_function(self) -> PiecewiseLinearFunction:
        return PiecewiseLinearFunction(self.strikes, self.prices)

    def price_at(self, strike, spot: float = 1.0):
        """Call price for an arbitrary spot, using homogeneity C(S, K) = S * C(1, K/S)."""
        return spot * self.to_function().at(np.asarray(strike, dtype=float) / spot)

    def to_series(self) -> pd.Series:
        return pd.Series(self.prices, index=pd.Index(self.strikes, name="strike"), name="call_price")


def call_transform(phi: CharacteristicFunction,
                   r: float,
                   T: float,
                   reference_phi: Optional[CharacteristicFunction] = None) -> CharacteristicFunction:
    """
    Damped call-price transform zeta(v) for the characteristic function phi of
    log(S_T/S_0) - rT. With reference_phi the transform is of the difference
    between the model price and the reference model's price.
    """
    def zeta(v):
        v = np.asarray(v, dtype=float)
        shifted = v - 1j
        ref = 1.0 if reference_phi is None else reference_phi(shifted)
        return np.exp(1j * v * r * T) * (phi(shifted) - ref) / (1j * v * (1.0 + 1j * v))
    return zeta


def discounted_intrinsic(r: float, T: float) -> CorrectionFunction:
    """Correction max(1 - e^{u - rT}, 0) as a function of log-moneyness u."""
    def correction(u):
        return np.maximum(1.0 - np.exp(np.asarray(u, dtype=float) - r * T), 0.0)
    return correction


def _truncate(log_moneyness: np.ndarray, prices: np.ndarray, little_n: int) -> PriceGrid:
    # the lowest-strike end of the grid is dominated by cancellation error
    return PriceGrid(strikes=np.exp(log_moneyness[little_n:]), prices=prices[little_n:])


def _check_truncation(n: int, little_n: int):
    if not isinstance(little_n, (int, np.integer)) or little_n < 0 or little_n >= n:
        raise InvalidGridParameters(f"littleN must be in [0, N), got littleN={little_n}, N={n}")


def call_price_fft_half_axis(zeta: CharacteristicFunction,
                             r: float,
                             T: float,
                             config: Optional[HalfAxisGridConfig] = None) -> PriceGrid:
    """
    Call prices for S = 1 and "all" strikes from the half-axis transform of zeta.

    Args:
      zeta: damped call transform, even in real part / odd in imaginary part,
        evaluated once on the whole numpy frequency grid (wrap scalar-only
        callables with numpy.vectorize)
      r, T: rate and maturity baked into zeta, used for the intrinsic term
      config: grid settings, DEFAULT_HALF_AXIS when omitted

    Returns:
      PriceGrid with N - littleN strictly increasing strikes.
    """
    config = config or DEFAULT_HALF_AXIS
    n, little_n = config.n, config.little_n
    _check_truncation(n, little_n)

    k_grid, f_hat = fourier_transform_even_in_real_part(config.xi_min, n, zeta)
    prices = np.real(f_hat) + np.maximum(1.0 - np.exp(k_grid - r * T), 0.0)

    logger.debug(f"half-axis pricing: r={r}, T={T}, dropping {little_n} of {n} points")
    return _truncate(k_grid, prices, little_n)


def call_price_fft_full_axis(zeta: CharacteristicFunction,
                             correction: CorrectionFunction,
                             config: Optional[FullAxisGridConfig] = None) -> PriceGrid:
    """
    Call prices for S = 1 and "all" strikes from the full-axis transform of zeta.

    Args:
      zeta: transform of (call price - reference price) in log-moneyness,
        evaluated once on the whole numpy frequency grid (wrap scalar-only
        callables with numpy.vectorize)
      correction: the reference price as a function of log-moneyness u,
        e.g. a Black-Scholes call at strike e^u or discounted_intrinsic(r, T)
      config: grid settings, DEFAULT_FULL_AXIS when omitted

    Returns:
      PriceGrid with N - littleN strictly increasing strikes.
    """
    config = config or DEFAULT_FULL_AXIS
    n, little_n = config.n, config.little_n
    _check_truncation(n, little_n)

    u_grid, fk = full_axis_transform(zeta, n,
                                     truncation_width=config.truncation_width,
                                     min_log_moneyness=config.min_log_moneyness)
    retained = u_grid[little_n:]
    prices = np.real(fk[little_n:]) + np.asarray(correction(retained), dtype=float)

    logger.debug(f"full-axis pricing: dropping {little_n} of {n} points")
    return PriceGrid(strikes=np.exp(retained), prices=prices)


def price_call_grid(zeta: CharacteristicFunction,
                    correction: Optional[CorrectionFunction] = None,
                    scheme: Union[INTEGRATION_SCHEME, str] = INTEGRATION_SCHEME.HALF_AXIS,
                    r: float = 0.0,
                    T: float = 0.0,
                    config=None) -> PriceGrid:
    """
    Dispatch to the half-axis or full-axis pipeline. For the full-axis scheme a
    missing correction defaults to the discounted intrinsic value.
    """
    scheme = INTEGRATION_SCHEME(scheme)
    if scheme is INTEGRATION_SCHEME.HALF_AXIS:
        return call_price_fft_half_axis(zeta, r, T, config=config)
    if correction is None:
        correction = discounted_intrinsic(r, T)
    return call_price_fft_full_axis(zeta, correction, config=config)


class CarrMadanModel(OptionPricingModel):
    """
    Prices a single (spot, strike) pair off a PriceGrid computed for unit spot.
    Puts come from put-call parity.
    """

    def __init__(self, underlying_spot_price, strike_price, T, risk_free_rate, price_grid: PriceGrid):
        self.S = float(underlying_spot_price)
        self.K = float(strike_price)
        self.T = float(T)
        self.r = float(risk_free_rate)
        self.grid = price_grid

    def _calculate_call_option_price(self):
        return float(self.grid.price_at(self.K, spot=self.S))

    def _calculate_put_option_price(self):
        return self._calculate_call_option_price() - self.S + self.K * np.exp(-self.r * self.T)
