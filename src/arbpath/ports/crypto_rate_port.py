from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from arbpath.core.dto import TickerPrice


class CryptoRatePort(ABC):

    @abstractmethod
    def get_tickers(self) -> List[TickerPrice]:
        raise NotImplementedError
