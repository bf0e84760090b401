from __future__ import annotations

from typing import AbstractSet, Iterable, Optional, Tuple

from arbpath.config import settings


class LegalityClassifier:
    """
    Static, auditable conversion policy. First match wins:

    1. pair symbol listed at the reference venue -> legal
    2. pair on the deny-list                     -> illegal
    3. both currencies in the universe           -> legal
    4. otherwise                                 -> illegal
    """

    def __init__(
        self,
        universe: Optional[Iterable[str]] = None,
        restricted: Optional[Iterable[Tuple[str, str]]] = None,
    ) -> None:
        self._universe = frozenset(c.upper() for c in (settings.ALL_CURRENCIES if universe is None else universe))
        self._restricted = frozenset(
            (s.upper(), d.upper()) for s, d in (settings.RESTRICTED_PAIRS if restricted is None else restricted)
        )

    def is_legal(self, src: str, dst: str, reference_pairs: AbstractSet[str]) -> bool:
        if f"{src}{dst}".upper() in reference_pairs:
            return True
        if (src, dst) in self._restricted:
            return False
        return src in self._universe and dst in self._universe


_default = LegalityClassifier()


def is_legal(src: str, dst: str, reference_pairs: AbstractSet[str]) -> bool:
    return _default.is_legal(src, dst, reference_pairs)
