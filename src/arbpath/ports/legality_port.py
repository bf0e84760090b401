from __future__ import annotations

from abc import ABC, abstractmethod
from typing import FrozenSet


class LegalityReferencePort(ABC):

    # --- uppercase pair symbols supported at the reference venue ---

    @abstractmethod
    def get_reference_pairs(self) -> FrozenSet[str]:
        raise NotImplementedError
