"""
Random sources for the venture simulation.

Every random draw in the engine (growth jitter, candidate names, payroll
attrition, market rolls) goes through a RandomSource so hosts can run live
games on numpy.random.Generator(PCG64) and tests can replay fixed draws.
"""

import hashlib
import numpy as np
from typing import Any, Iterable, Optional, Sequence


def make_seed(*components: Any) -> int:
    """
    Derive a stable 64-bit seed for a venture's random stream.

    The components are joined with ':' and hashed with SHA256. The seed is
    the first 8 bytes of the digest, so the same world seed and company
    name always replay the same venture.

        make_seed(1234, "Acme")  ->  VentureRng(seed=...)
    """
    digest = hashlib.sha256(":".join(map(str, components)).encode('utf-8')).digest()
    return int.from_bytes(digest[:8], 'big')


class RandomSource:
    """
    Interface for random draws used by the engine.

    Subclasses implement random(); uniform() and choice() are derived from it
    so every draw consumes exactly one value.
    """

    def random(self) -> float:
        """Uniform float in [0, 1)"""
        raise NotImplementedError

    def uniform(self, low: float, high: float) -> float:
        """Uniform float in [low, high)"""
        return low + (high - low) * self.random()

    def choice(self, options: Sequence[Any]) -> Any:
        """Pick one element of a non-empty sequence"""
        if not options:
            raise ValueError("choice() requires a non-empty sequence")
        index = int(self.random() * len(options))
        # random() < 1.0 guarantees index < len, clamp anyway for float edge cases
        return options[min(index, len(options) - 1)]


class VentureRng(RandomSource):
    """
    numpy-backed random source.

    A None seed draws fresh OS entropy, so live games are not reproducible
    unless a seed is supplied.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._generator = np.random.Generator(np.random.PCG64(seed))

    def random(self) -> float:
        return float(self._generator.random())

    @classmethod
    def for_venture(cls, world_seed: int, company_name: str) -> 'VentureRng':
        """Seeded source derived from a world seed and company name"""
        return cls(make_seed(world_seed, company_name))


class SequenceRandom(RandomSource):
    """
    Replays a fixed list of draws in order.

    Raises IndexError when exhausted unless a fallback value is given, which
    keeps long-running tests from depending on the exact draw count.
    """

    def __init__(self, values: Iterable[float], fallback: Optional[float] = None):
        self._values = list(values)
        self._position = 0
        self.fallback = fallback

    def random(self) -> float:
        if self._position >= len(self._values):
            if self.fallback is None:
                raise IndexError(f"SequenceRandom exhausted after {self._position} draws")
            return self.fallback
        value = self._values[self._position]
        self._position += 1
        return value

    @property
    def draws(self) -> int:
        """Number of scripted values consumed so far"""
        return self._position
