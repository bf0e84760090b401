from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict


class FiatRatePort(ABC):
    """
    Source of fiat cross-rates.

    Implementations must not raise: any failure (network, bad key, timeout)
    is reported as an empty mapping.
    """

    @abstractmethod
    def get_rates(self, base: str) -> Dict[str, float]:
        raise NotImplementedError
