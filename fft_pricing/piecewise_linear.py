# fft_pricing/piecewise_linear.py
import numpy as np


class PiecewiseLinearFunction:
    """
    Piecewise-linear function through the points (X[i], Y[i]), X ascending.
    Outside [X[0], X[-1]] the function is 0.
    """

    def __init__(self, x, y):
        self.X = np.asarray(x, dtype=float)
        self.Y = np.asarray(y, dtype=float)
        if self.X.ndim != 1 or self.X.shape != self.Y.shape:
            raise ValueError(f"X and Y must be 1-d and of equal length, got {self.X.shape} and {self.Y.shape}")
        if self.X.size < 2:
            raise ValueError("At least two points are needed")

    def at(self, x):
        """
        Value at x (scalar or array). O(log N) per point via lower-bound binary search.
        """
        X, Y = self.X, self.Y
        xs = np.asarray(x, dtype=float)
        i = np.searchsorted(X, xs, side='left')
        i = np.clip(i, 1, X.size - 1)
        w = (xs - X[i - 1]) / (X[i] - X[i - 1])
        y = (1.0 - w) * Y[i - 1] + w * Y[i]
        inside = (xs >= X[0]) & (xs <= X[-1])
        out = np.where(inside, y, 0.0)
        if out.ndim == 0:
            return float(out)
        return out

    __call__ = at

    def area(self) -> float:
        """Trapezoidal integral over the whole domain. O(N)."""
        X, Y = self.X, self.Y
        return float(np.sum(np.diff(X) * (Y[1:] + Y[:-1])) / 2.0)

    def area_up_to(self, x: float) -> float:
        """Trapezoidal integral over the domain intersected with (-inf, x]. O(N)."""
        X, Y = self.X, self.Y
        if x < X[0]:
            return 0.0
        if x >= X[-1]:
            return self.area()
        # X[i-1] <= x < X[i]
        i = int(np.searchsorted(X, x, side='right'))
        area = np.sum(np.diff(X[:i]) * (Y[1:i] + Y[:i - 1])) / 2.0
        dx = x - X[i - 1]
        w = dx / (X[i] - X[i - 1])
        y = (1.0 - w) * Y[i - 1] + w * Y[i]
        return float(area + dx * (y + Y[i - 1]) / 2.0)


def span(lo: float, hi: float, n_points: int) -> np.ndarray:
    """n_points equidistant points covering [min(lo, hi), max(lo, hi)]."""
    lo, hi = min(lo, hi), max(lo, hi)
    return np.linspace(lo, hi, n_points)
