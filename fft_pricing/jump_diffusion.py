# fft_pricing/jump_diffusion.py
"""
Merton (1976) jump-diffusion: Black-Scholes diffusion plus compound-Poisson
jumps with normally distributed log jump sizes N(mu_jump, sigma_jump^2).

Provides:
- JumpDiffusionParams
- jump_diffusion_characteristic_function(u, T, params)
- jump_diffusion_call_prices_fft_full_axis(T, params) : FFT prices for S = 1, "all" strikes
- merton_call_price(S, K, T, params) : closed-form Poisson series, used as reference
- jump_diffusion_call_price_mc(S, K, T, params, n_samples, seed) : MC with a control variate
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

import numpy as np
from scipy.special import gammaln
from scipy.stats import norm

from .BlackScholesModel import bs_call_price, bs_characteristic_function
from .carr_madan import PriceGrid, call_price_fft_full_axis, call_transform
from .config import COARSE_FULL_AXIS, FullAxisGridConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JumpDiffusionParams:
    """
    r: risk-free rate
    sigma: volatility of the diffusion part
    lam: jump intensity (exponential inter-arrival times with this rate)
    mu_jump: mean of the log jump size
    sigma_jump: standard deviation of the log jump size
    """
    r: float
    sigma: float
    lam: float = 0.0
    mu_jump: float = 0.0
    sigma_jump: float = 0.0

    def __post_init__(self):
        if self.sigma < 0 or self.lam < 0 or self.sigma_jump < 0:
            raise ValueError("sigma, lam and sigma_jump must be non-negative")

    @property
    def kappa(self) -> float:
        """Mean relative jump size E[J - 1]."""
        return math.exp(self.mu_jump + 0.5 * self.sigma_jump ** 2) - 1.0


def jump_diffusion_characteristic_function(u, T: float, p: JumpDiffusionParams):
    """
    Characteristic function of log(S_T/S_0) - rT. The drift carries the jump
    compensator lam * kappa so that S_T e^{-rT} has mean S_0.
    """
    iu = 1j * np.asarray(u)
    drift = (-0.5 * p.sigma ** 2 - p.lam * p.kappa) * T
    diffusion = np.exp(iu * drift + 0.5 * p.sigma ** 2 * T * iu ** 2)
    if p.lam <= 0:
        return diffusion
    jumps = np.exp(p.lam * T * (np.exp(iu * p.mu_jump + 0.5 * p.sigma_jump ** 2 * iu ** 2) - 1.0))
    return diffusion * jumps


def jump_diffusion_call_prices_fft_full_axis(T: float,
                                             p: JumpDiffusionParams,
                                             config: Optional[FullAxisGridConfig] = None) -> PriceGrid:
    """
    Risk-neutral call prices for S = 1 and "all" strikes. The pure-diffusion
    Black-Scholes price is the reference: only the jump contribution goes
    through the FFT and the closed form is added back.
    """
    phi = lambda u: jump_diffusion_characteristic_function(u, T, p)
    phi_bs = lambda u: bs_characteristic_function(u, p.sigma, T)
    zeta = call_transform(phi, p.r, T, reference_phi=phi_bs)

    def correction(u):
        return bs_call_price(1.0, np.exp(u), p.r, p.sigma, T)

    logger.debug(f"jump-diffusion FFT pricing: T={T}, {p}")
    return call_price_fft_full_axis(zeta, correction, config=config or COARSE_FULL_AXIS)


def merton_call_price(S, K, T: float, p: JumpDiffusionParams, n_terms: int = 64):
    """
    Closed-form Merton price: Poisson(lam T) weighted sum of lognormal call
    prices conditional on the number of jumps. K may be an array.
    """
    K = np.asarray(K, dtype=float)
    if T <= 0:
        price = np.maximum(S - K, 0.0)
        return float(price) if price.ndim == 0 else price

    n = np.arange(n_terms, dtype=float).reshape((-1,) + (1,) * K.ndim)
    lt = p.lam * T
    if lt > 0:
        weights = np.exp(-lt + n * math.log(lt) - gammaln(n + 1.0))
    else:
        weights = (n == 0).astype(float)

    log_mean = math.log(S) + (p.r - p.lam * p.kappa - 0.5 * p.sigma ** 2) * T + n * p.mu_jump
    var = p.sigma ** 2 * T + n * p.sigma_jump ** 2
    sqrt_var = np.sqrt(np.maximum(var, 1e-16))
    d1 = (log_mean - np.log(K) + var) / sqrt_var
    d2 = d1 - sqrt_var
    terms = np.exp(log_mean + 0.5 * var) * norm.cdf(d1) - K * norm.cdf(d2)
    price = math.exp(-p.r * T) * np.sum(weights * terms, axis=0)
    return float(price) if price.ndim == 0 else price


def control_variate_estimator(unknown_samples, known_samples, known_mean: float) -> float:
    """
    Control-variate estimate of E[unknown] using samples of a correlated
    variable whose mean is known. b* = cov(x, y) / var(x).
    """
    y = np.asarray(unknown_samples, dtype=float)
    x = np.asarray(known_samples, dtype=float)
    x_centred = x - x.mean()
    denom = np.sum(x_centred ** 2)
    b_star = 0.0 if denom <= 0 else np.sum(x_centred * (y - y.mean())) / denom
    return float(np.mean(y - b_star * (x - known_mean)))


def _simulate_log_returns(T, p: JumpDiffusionParams, n_samples, rng):
    """Diffusion and jump parts of log(S_T/S_0) under the risk-neutral measure."""
    z1 = rng.standard_normal(n_samples)
    diffusion = (p.r - 0.5 * p.sigma ** 2) * T + np.sqrt(T) * p.sigma * z1

    n_jumps = rng.poisson(p.lam * T, n_samples)
    z2 = rng.standard_normal(n_samples)
    jumps = p.mu_jump * n_jumps + p.sigma_jump * np.sqrt(n_jumps) * z2 - p.lam * p.kappa * T
    return diffusion, jumps


def jump_diffusion_call_price_mc(S, K, T, p: JumpDiffusionParams, n_samples=100000, seed=None) -> float:
    """
    Monte Carlo call price under the jump diffusion. The same draws without
    jumps give a Black-Scholes payoff whose mean is known in closed form,
    used as the control variate.
    """
    rng = np.random.default_rng(seed)
    diffusion, jumps = _simulate_log_returns(T, p, n_samples, rng)
    disc = np.exp(-p.r * T)
    S_diff = S * np.exp(diffusion)
    S_jump = S_diff * np.exp(jumps)
    payoff_jump = disc * np.maximum(S_jump - K, 0.0)
    payoff_diff = disc * np.maximum(S_diff - K, 0.0)
    control_mean = bs_call_price(S, K, p.r, p.sigma, T)
    return control_variate_estimator(payoff_jump, payoff_diff, control_mean)
