from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional


class ProgressObserver(ABC):
    """
    Observational side channel for long-running work.

    Events:
      - "stage":   {"message": str}      graph construction milestones
      - "checked": {"checked": int}      edges examined so far during search
    """

    @abstractmethod
    def notify(self, event: str, data: Dict[str, Any]) -> None:
        raise NotImplementedError


class NullObserver(ProgressObserver):
    def notify(self, event: str, data: Dict[str, Any]) -> None:
        return None


class CallbackObserver(ProgressObserver):
    def __init__(self, callback: Callable[[str, Dict[str, Any]], None]) -> None:
        self._callback = callback

    def notify(self, event: str, data: Dict[str, Any]) -> None:
        self._callback(event, data)


def as_observer(
    progress: Optional[ProgressObserver | Callable[[str, Dict[str, Any]], None]],
) -> ProgressObserver:
    if progress is None:
        return NullObserver()
    if isinstance(progress, ProgressObserver):
        return progress
    return CallbackObserver(progress)
