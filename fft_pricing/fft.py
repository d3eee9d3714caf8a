# fft_pricing/fft.py
"""
Radix-2 Fast Fourier Transform.

fft(a)  : X_k = sum_n a_n exp(-2 pi i k n / N)
ifft(a) : X_k = (1/N) sum_n a_n exp(+2 pi i k n / N)

Iterative Cooley-Tukey (decimation in time): bit-reversal reordering followed
by log2(N) butterfly passes. Each pass is applied to every sub-block at once
with numpy, so the cost is O(N log N) with no Python loop over elements in the
butterflies. N must be a power of two.
"""

import numpy as np

from .base import InvalidLength


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def bit_reversal_permutation(n: int) -> np.ndarray:
    """
    Index array perm with perm[i] = bit-reversal of i (over log2(n) bits).

    Built by counting j upwards in reversed binary: starting from the top bit
    (mask n/2) clear set bits until a clear one is found, then set it.
    """
    perm = np.zeros(n, dtype=np.int64)
    j = 0
    for i in range(1, n):
        mask = n >> 1
        while j & mask:
            j ^= mask
            mask >>= 1
        j |= mask
        perm[i] = j
    return perm


def _validated_copy(a) -> np.ndarray:
    x = np.array(a, dtype=complex)
    if x.ndim != 1:
        raise InvalidLength(f"Expected a one-dimensional sequence, got shape {x.shape}")
    n = x.shape[0]
    if n <= 0:
        raise InvalidLength("Array length must be > 0")
    if not is_power_of_two(n):
        raise InvalidLength(f"Array length must be power of 2, got {n}")
    return x


def fft(a) -> np.ndarray:
    """
    Forward discrete Fourier transform of a power-of-two length sequence.

    The input is never modified; the transform runs on a private copy.
    Raises InvalidLength for empty, non power-of-two or multi-dimensional input.
    """
    x = _validated_copy(a)
    n = x.shape[0]

    # in-place reordering: position i receives the element at bitrev(i)
    x = x[bit_reversal_permutation(n)]

    stage = 1
    while stage < n:
        twiddle = np.exp(-1j * np.pi * np.arange(stage) / stage)
        blocks = x.reshape(-1, 2 * stage)
        top = blocks[:, :stage]
        t = blocks[:, stage:] * twiddle
        x = np.concatenate((top + t, top - t), axis=1).reshape(n)
        stage *= 2
    return x


def ifft(a) -> np.ndarray:
    """
    Inverse transform via conjugation: ifft(a) = conj(fft(conj(a))) / N.
    """
    y = np.conj(np.array(a, dtype=complex))
    y = fft(y)
    return np.conj(y) / y.shape[0]
