# Third party imports
import numpy as np
from scipy.stats import norm

# Local package imports
from .base import OptionPricingModel
from .carr_madan import (
    call_price_fft_full_axis,
    call_price_fft_half_axis,
    call_transform,
    discounted_intrinsic,
)


def _d1_d2(S, K, r, sigma, T):
    sqrt_T = np.sqrt(T)
    d1 = (np.log(S / K) + (r + 0.5 * sigma ** 2) * T) / (sigma * sqrt_T)
    return d1, d1 - sigma * sqrt_T


def bs_call_price(S, K, r, sigma, T):
    """
    Black-Scholes call price. K may be a numpy array of strikes.
    For T <= 0 or sigma <= 0 the discounted intrinsic value is returned.
    """
    K = np.asarray(K, dtype=float)
    if T <= 0 or sigma <= 0:
        price = np.maximum(S - K * np.exp(-r * max(T, 0.0)), 0.0)
    else:
        with np.errstate(divide='ignore'):
            d1, d2 = _d1_d2(S, K, r, sigma, T)
        price = S * norm.cdf(d1) - K * np.exp(-r * T) * norm.cdf(d2)
    return float(price) if price.ndim == 0 else price


def bs_put_price(S, K, r, sigma, T):
    """Black-Scholes put price from put-call parity."""
    K = np.asarray(K, dtype=float)
    price = bs_call_price(S, K, r, sigma, T) - S + K * np.exp(-r * T)
    return float(price) if np.ndim(price) == 0 else price


def bs_characteristic_function(u, sigma, T):
    """
    Characteristic function of log(S_T/S_0) - rT under Black-Scholes:
    a normal variable with mean -sigma^2 T/2 and variance sigma^2 T.
    """
    half_var = 0.5 * sigma ** 2 * T
    return np.exp(-half_var * 1j * u - half_var * u ** 2)


def bs_call_prices_fft_half_axis(r, sigma, T, config=None):
    """Black-Scholes call prices for S = 1 and "all" strikes via the half-axis FFT."""
    phi = lambda u: bs_characteristic_function(u, sigma, T)
    return call_price_fft_half_axis(call_transform(phi, r, T), r, T, config=config)


def bs_call_prices_fft_full_axis(r, sigma, T, config=None):
    """Black-Scholes call prices for S = 1 and "all" strikes via the full-axis FFT."""
    phi = lambda u: bs_characteristic_function(u, sigma, T)
    return call_price_fft_full_axis(call_transform(phi, r, T), discounted_intrinsic(r, T), config=config)


class BlackScholesModel(OptionPricingModel):
    """
    Black-Scholes closed-form pricing + Greeks for European options (no dividends).
    T is the time to maturity in years.
    """

    def __init__(self, underlying_spot_price, strike_price, T, risk_free_rate, sigma):
        self.S = float(underlying_spot_price)
        self.K = float(strike_price)
        self.T = float(T)
        self.r = float(risk_free_rate)
        self.sigma = float(sigma)

        # Precompute d1, d2 (guard for T==0)
        self._compute_d1_d2_and_price()

    def _degenerate(self):
        return self.T <= 0 or self.sigma <= 0

    def _compute_d1_d2_and_price(self):
        if self._degenerate():
            self.d1 = None
            self.d2 = None
            self.call_price = bs_call_price(self.S, self.K, self.r, self.sigma, self.T)
            self.put_price = bs_put_price(self.S, self.K, self.r, self.sigma, self.T)
            return

        self.d1, self.d2 = _d1_d2(self.S, self.K, self.r, self.sigma, self.T)
        self.call_price = self.S * norm.cdf(self.d1) - self.K * np.exp(-self.r * self.T) * norm.cdf(self.d2)
        self.put_price = self.K * np.exp(-self.r * self.T) * norm.cdf(-self.d2) - self.S * norm.cdf(-self.d1)

    def _calculate_call_option_price(self):
        return float(self.call_price)

    def _calculate_put_option_price(self):
        return float(self.put_price)

    def call_probabilities(self):
        """(P1, P2) in call = S P1 - K e^{-rT} P2."""
        if self._degenerate():
            itm = 1.0 if self.S > self.K * np.exp(-self.r * max(self.T, 0.0)) else 0.0
            return itm, itm
        return float(norm.cdf(self.d1)), float(norm.cdf(self.d2))

    # -------------------------
    # Greeks (closed-form)
    # -------------------------
    def delta(self, option_type='call'):
        p1, _ = self.call_probabilities()
        return p1 if option_type == 'call' else p1 - 1.0

    def gamma(self):
        if self._degenerate():
            return 0.0
        return float(norm.pdf(self.d1) / (self.S * self.sigma * np.sqrt(self.T)))

    def vega(self):
        # identical for calls and puts
        if self._degenerate():
            return 0.0
        return float(self.S * norm.pdf(self.d1) * np.sqrt(self.T))

    def greeks(self, option_type='call'):
        opt = option_type.lower()
        return {
            "delta": self.delta(opt),
            "gamma": self.gamma(),
            "vega": self.vega(),
        }
