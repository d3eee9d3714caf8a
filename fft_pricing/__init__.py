from .base import InvalidLength, InvalidGridParameters, INTEGRATION_SCHEME, OPTION_TYPE
from .fft import fft, ifft
from .config import HalfAxisGridConfig, FullAxisGridConfig, COARSE_FULL_AXIS
from .piecewise_linear import PiecewiseLinearFunction, span
from .carr_madan import (
    PriceGrid,
    CarrMadanModel,
    call_transform,
    call_price_fft_half_axis,
    call_price_fft_full_axis,
    price_call_grid,
)
from .BlackScholesModel import BlackScholesModel, bs_call_price, bs_put_price
from .jump_diffusion import JumpDiffusionParams, jump_diffusion_call_prices_fft_full_axis, merton_call_price

__all__ = [
    "InvalidLength",
    "InvalidGridParameters",
    "INTEGRATION_SCHEME",
    "OPTION_TYPE",
    "fft",
    "ifft",
    "HalfAxisGridConfig",
    "FullAxisGridConfig",
    "COARSE_FULL_AXIS",
    "PiecewiseLinearFunction",
    "span",
    "PriceGrid",
    "CarrMadanModel",
    "call_transform",
    "call_price_fft_half_axis",
    "call_price_fft_full_axis",
    "price_call_grid",
    "BlackScholesModel",
    "bs_call_price",
    "bs_put_price",
    "JumpDiffusionParams",
    "jump_diffusion_call_prices_fft_full_axis",
    "merton_call_price",
]
