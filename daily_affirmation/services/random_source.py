"""Injectable source of uniform random draws."""

import random
from abc import ABC, abstractmethod
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(ABC):
    """Uniform draws used for quote selection and the reply roll."""

    @abstractmethod
    def choice(self, items: Sequence[T]) -> T:
        """Uniformly pick one element of a non-empty sequence."""
        pass

    @abstractmethod
    def randint(self, low: int, high: int) -> int:
        """Uniform integer in [low, high], both inclusive."""
        pass


class SystemRandomSource(RandomSource):
    """``random.Random`` backed source. Pass a seed for reproducible draws."""

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)

    def choice(self, items: Sequence[T]) -> T:
        return self._random.choice(items)

    def randint(self, low: int, high: int) -> int:
        return self._random.randint(low, high)
