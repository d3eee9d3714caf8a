# fft_pricing/config.py
"""
Grid resolution and tail-truncation settings for the FFT pricing pipeline.

All sizes are given as powers of two (log2_n, log2_little_n) so the transform
length is always valid. little_n grid points are dropped from the low-strike
end of the priced grid, where cancellation error dominates.
"""

import math
from dataclasses import dataclass

from .base import InvalidGridParameters


def _check_exponent(name, value):
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidGridParameters(f"{name} must be a non-negative integer, got {value!r}")


@dataclass(frozen=True)
class HalfAxisGridConfig:
    """
    log2_n: transform size N = 2**log2_n
    min_strike: lowest strike/spot ratio on the grid; xi_min = log(min_strike) must be < 0
    log2_little_n: number of dropped low-strike points = 2**log2_little_n
    """
    log2_n: int = 17
    min_strike: float = 1e-12
    log2_little_n: int = 9

    def __post_init__(self):
        _check_exponent("log2_n", self.log2_n)
        _check_exponent("log2_little_n", self.log2_little_n)

    @property
    def n(self) -> int:
        return 2 ** self.log2_n

    @property
    def little_n(self) -> int:
        return 2 ** self.log2_little_n

    @property
    def xi_min(self) -> float:
        if self.min_strike <= 0:
            return float('-inf')
        return math.log(self.min_strike)


@dataclass(frozen=True)
class FullAxisGridConfig:
    """
    log2_n: transform size N = 2**log2_n
    log2_little_n: number of dropped low-strike points = 2**log2_little_n
    truncation_width: A, the frequency grid covers [-A/2, A/2]
    min_log_moneyness: first point of the log-moneyness grid (-2*pi*L)

    The log-moneyness spacing is 2*pi/(N*dv) ~ 2*pi/A, so A sets the strike
    resolution and N*dv/A ~ N the number of strikes covered from min_log_moneyness.
    """
    log2_n: int = 17
    log2_little_n: int = 9
    truncation_width: float = 10000.0
    min_log_moneyness: float = -4.0

    def __post_init__(self):
        _check_exponent("log2_n", self.log2_n)
        _check_exponent("log2_little_n", self.log2_little_n)

    @property
    def n(self) -> int:
        return 2 ** self.log2_n

    @property
    def little_n(self) -> int:
        return 2 ** self.log2_little_n


DEFAULT_HALF_AXIS = HalfAxisGridConfig()
DEFAULT_FULL_AXIS = FullAxisGridConfig()
# lighter grid, strikes from roughly exp(-1.43) upwards
COARSE_FULL_AXIS = FullAxisGridConfig(log2_n=15, log2_little_n=12)
