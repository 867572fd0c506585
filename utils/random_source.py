"""
utils/random_source.py
----------------------
Every random draw in the desk (handle/symbol picks, scores, prices, P&L,
ids) goes through one of these objects so a test can script the sequence.
"""
from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


class BaseRandomSource(ABC):
    """Interface consumed by the generator, analysis engine and executor."""

    @abstractmethod
    def randint(self, low: int, high: int) -> int:
        """Uniform integer in ``[low, high]`` (both ends inclusive)."""
        raise NotImplementedError

    @abstractmethod
    def uniform(self, low: float, high: float) -> float:
        raise NotImplementedError

    @abstractmethod
    def random(self) -> float:
        """Float in ``[0.0, 1.0)``."""
        raise NotImplementedError

    @abstractmethod
    def choice(self, seq: Sequence[T]) -> T:
        raise NotImplementedError

    @abstractmethod
    def token(self) -> str:
        """Short opaque identifier for detections, trades and log entries."""
        raise NotImplementedError


class SystemRandomSource(BaseRandomSource):
    """``random.Random`` backed source; pass a seed for reproducible runs."""

    def __init__(self, seed: Optional[int] = None, token_length: int = 9) -> None:
        self._rng = random.Random(seed)
        self._token_length = token_length

    def randint(self, low: int, high: int) -> int:
        return self._rng.randint(low, high)

    def uniform(self, low: float, high: float) -> float:
        return self._rng.uniform(low, high)

    def random(self) -> float:
        return self._rng.random()

    def choice(self, seq: Sequence[T]) -> T:
        if not seq:
            raise IndexError("cannot choose from an empty sequence")
        return self._rng.choice(seq)

    def token(self) -> str:
        return "".join(self._rng.choice(_ALPHABET) for _ in range(self._token_length))
