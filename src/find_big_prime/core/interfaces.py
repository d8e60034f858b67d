from abc import ABC, abstractmethod


class RandomSource(ABC):
    """
    Abstract interface for the random bit source used by the prime generator.

    Every function that needs randomness (range sampling, candidate drawing,
    Miller-Rabin witness selection) receives an instance explicitly, so that
    tests can substitute a deterministic or instrumented source.
    """

    @abstractmethod
    def randbits(self, k: int) -> int:
        """
        Returns a non-negative integer with k uniformly random bits.

        Args:
            k (int): Number of random bits to draw (k >= 1).

        Returns:
            int: A value in [0, 2**k - 1].
        """
        pass
