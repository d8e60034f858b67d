import random
import secrets
from typing import Optional

from find_big_prime.core import EntropySourceError, RandomSource


class SystemRandomSource(RandomSource):
    """
    Random source backed by the operating system's entropy pool (via `secrets`).
    This is the only source suitable for generating primes for real keys.
    """

    def randbits(self, k: int) -> int:
        if k < 1:
            raise ValueError("Number of bits must be positive.")
        try:
            return secrets.randbits(k)
        except OSError as e:
            raise EntropySourceError(f"Secure random source is unavailable: {e}") from e


class SeededRandomSource(RandomSource):
    """
    Deterministic random source for tests and reproducible benchmarks.
    Not cryptographically secure: never use it for real key material.
    """

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)

    def randbits(self, k: int) -> int:
        if k < 1:
            raise ValueError("Number of bits must be positive.")
        return self._random.getrandbits(k)


_default_source = SystemRandomSource()


def default_random_source() -> RandomSource:
    """Returns the shared OS-backed random source."""
    return _default_source


def random_range(low: int, high: int, rng: RandomSource) -> int:
    """
    Draws an integer uniformly from the inclusive range [low, high].

    Uses rejection sampling over the bit width of (high - low), so that
    every value of the range is equally likely (no modulo bias).

    Args:
        low (int): Lower bound (inclusive).
        high (int): Upper bound (inclusive).
        rng (RandomSource): The random source to draw bits from.

    Returns:
        int: A value v with low <= v <= high.

    Raises:
        ValueError: If low > high.
    """
    if low > high:
        raise ValueError("Lower bound must not exceed upper bound.")
    if low == high:
        return low

    span = high - low
    bits = span.bit_length()
    while True:
        offset = rng.randbits(bits)
        if offset <= span:
            return low + offset
