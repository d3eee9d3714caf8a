# fft_pricing/grid.py
"""
Frequency-grid construction around the FFT.

Two schemes map a function given in frequency space onto a uniformly sampled,
phase-corrected sequence, transform it, and return values on a uniform
log-moneyness grid:

- half-axis: f(-v) = conj(f(v)) (even real part, odd imaginary part), so only
  (0, inf) is integrated:   F(xi) = (1/pi) Re int_0^inf e^{-i xi v} f(v) dv
- full-axis: the whole line is integrated with trapezoid weights:
                            F(u) = (1/2pi) int e^{-i u v} zeta(v) dv

Reference: Cont, Tankov (2004), "Financial Modelling with Jump Processes", 11.1.3
"""

import logging
import math
from typing import Tuple

import numpy as np

from .base import CharacteristicFunction, InvalidGridParameters
from .fft import fft, is_power_of_two

logger = logging.getLogger(__name__)


def _sample(f: CharacteristicFunction, grid: np.ndarray) -> np.ndarray:
    values = np.asarray(f(grid), dtype=complex)
    if values.shape != grid.shape:
        values = np.broadcast_to(values, grid.shape)
    return values


def fourier_transform_even_in_real_part(xi_min: float,
                                        n: int,
                                        f: CharacteristicFunction) -> Tuple[np.ndarray, np.ndarray]:
    """
    Half-axis transform of f on the grid xi_m = xi_min + m * dxi, m = 0..n-1.

    Args:
      xi_min: first point of the output grid, must be strictly negative
      n: number of points, power of two
      f: function of frequency, even in its real part and odd in its imaginary part

    Returns:
      xi_grid, f_hat where Re(f_hat[m]) ~ (1/pi) int_0^inf Re[e^{-i xi_m v} f(v)] dv

    The frequency samples sit at the midpoints v_j = (j + 1/2) * dv, dv = 2 pi / (n dxi),
    so v = 0 (where damped call transforms are 0/0) is never evaluated.
    """
    if not isinstance(n, (int, np.integer)) or not is_power_of_two(n):
        raise InvalidGridParameters(f"N must be > 0 and a power of 2, got {n}")
    if not (xi_min < 0.0 and math.isfinite(xi_min)):
        raise InvalidGridParameters(f"xiMin must be finite and strictly negative, got {xi_min}")
    if n < 2:
        raise InvalidGridParameters("N must be at least 2 to span [xiMin, -xiMin]")

    d_xi = -2.0 * xi_min / (n - 1)
    d_x = 2.0 * math.pi / (n * d_xi)
    idx = np.arange(n)
    xi_grid = xi_min + idx * d_xi
    # midpoints (j + 1/2) dx rather than (j + 1) dx, with exact phases for that grid
    x_grid = (idx + 0.5) * d_x
    scale = d_x / math.pi

    a = scale * _sample(f, x_grid) * np.exp(-1j * xi_min * x_grid)
    # half-step offset of the frequency grid
    f_hat = fft(a) * np.exp(-1j * np.pi * idx / n)

    logger.debug(f"half-axis transform: N={n}, dxi={d_xi:.3e}, dv={d_x:.3e}, vmax={n * d_x:.1f}")
    return xi_grid, f_hat


def full_axis_transform(zeta: CharacteristicFunction,
                        n: int,
                        truncation_width: float = 10000.0,
                        min_log_moneyness: float = -4.0) -> Tuple[np.ndarray, np.ndarray]:
    """
    Full-axis transform of zeta on the log-moneyness grid
    u_k = 2 pi (k / (n dv) - L), L = -min_log_moneyness / (2 pi).

    zeta is sampled on v_k = -A/2 + k dv, dv = A/(n-1), A = truncation_width,
    with trapezoid weights (1/2 at both ends).

    Returns:
      u_grid, fk where fk[k] ~ (1/2pi) int_{-A/2}^{A/2} e^{-i u_k v} zeta(v) dv
    """
    if not isinstance(n, (int, np.integer)) or n < 2 or not is_power_of_two(n):
        raise InvalidGridParameters(f"N must be a power of 2 and at least 2, got {n}")
    if not truncation_width > 0.0:
        raise InvalidGridParameters(f"truncation width A must be > 0, got {truncation_width}")
    if not math.isfinite(min_log_moneyness):
        raise InvalidGridParameters(f"min log-moneyness must be finite, got {min_log_moneyness}")

    A = float(truncation_width)
    L = -min_log_moneyness / (2.0 * math.pi)
    delta = A / (n - 1)

    k = np.arange(n)
    v_grid = -0.5 * A + k * delta
    u_grid = 2.0 * math.pi * (k / (n * delta) - L)
    weights = np.ones(n)
    weights[0] = 0.5
    weights[-1] = 0.5

    fft_in = weights * _sample(zeta, v_grid) * np.exp(1j * k * delta * 2.0 * math.pi * L)
    fft_out = fft(fft_in)
    # trapezoid step A/(n-1), not A/n
    fk = (delta / (2.0 * math.pi)) * np.exp(1j * u_grid * 0.5 * A) * fft_out

    logger.debug(f"full-axis transform: N={n}, A={A}, du={u_grid[1] - u_grid[0]:.3e}, "
                 f"u in [{u_grid[0]:.3f}, {u_grid[-1]:.3f}]")
    return u_grid, fk
