# fft_pricing/base.py
from enum import Enum
from abc import ABC, abstractmethod
from typing import Callable

import numpy as np

# Characteristic functions are evaluated on a whole numpy frequency grid at once.
CharacteristicFunction = Callable[[np.ndarray], np.ndarray]


class InvalidLength(ValueError):
    """Sequence handed to the transform is empty or not a power of two long."""


class InvalidGridParameters(ValueError):
    """A frequency/strike grid cannot be built from the given parameters."""


class OPTION_TYPE(Enum):
    CALL_OPTION = 'call'
    PUT_OPTION = 'put'


class INTEGRATION_SCHEME(Enum):
    HALF_AXIS = 'half-axis'
    FULL_AXIS = 'full-axis'


class OptionPricingModel(ABC):
    """Abstract class defining interface for option pricing models."""

    def calculate_option_price(self, option_type):
        """
        Accepts many common option_type forms:
         - 'call', 'put' (case-insensitive)
         - 'Call Option', 'Put Option'
         - OPTION_TYPE enum values
        """
        if isinstance(option_type, OPTION_TYPE):
            opt = option_type.value
        elif isinstance(option_type, str):
            opt = option_type.strip().lower()
        else:
            opt = str(option_type).lower()

        if opt.startswith('call'):
            return self._calculate_call_option_price()
        elif opt.startswith('put'):
            return self._calculate_put_option_price()
        else:
            raise ValueError(f"Unsupported option_type: {option_type}")

    @abstractmethod
    def _calculate_call_option_price(self):
        """Calculates option price for call option."""
        raise NotImplementedError()

    @abstractmethod
    def _calculate_put_option_price(self):
        """Calculates option price for put option."""
        raise NotImplementedError()
