import logging
import time
from itertools import islice
from typing import Iterator, Optional, Tuple

from find_big_prime.core import (
    DEFAULT_MR_ROUNDS,
    MIN_PRIME_BITS,
    GeneratedPrime,
    GenerationExhaustedError,
    PrimeGenerationConfig,
    RandomSource,
)
from find_big_prime.utils.math import is_probable_prime, small_prime_precheck
from find_big_prime.utils.random_source import default_random_source

logger = logging.getLogger(__name__)


class PrimeGenerator:
    """
    Generates random probable primes and safe primes of an exact bit length.

    Candidates are drawn from the given random source, filtered by trial
    division and then by the Miller-Rabin test. By default the search is
    unbounded; pass max_attempts to cap the number of candidates drawn.
    """

    def __init__(
            self,
            rng: Optional[RandomSource] = None,
            min_bits: int = MIN_PRIME_BITS,
            max_attempts: Optional[int] = None,
    ):
        self.rng = rng if rng is not None else default_random_source()
        self.min_bits = min_bits
        self.max_attempts = max_attempts

    def generate_probable_prime(self, bits: int, rounds: int = DEFAULT_MR_ROUNDS) -> int:
        """
        Generate a random probable prime with exactly `bits` bits.

        Args:
            bits (int): The desired bit length of the prime.
            rounds (int): Number of Miller-Rabin rounds. Defaults to 64.

        Returns:
            int: An odd probable prime whose highest set bit is bit `bits - 1`.

        Raises:
            InvalidConfigurationError: If bits or rounds are out of range.
            GenerationExhaustedError: If max_attempts candidates were drawn without success.
        """
        config = self._config(bits, rounds, safe=False)
        return self.generate(config).value

    def generate_safe_prime(self, bits: int, rounds: int = DEFAULT_MR_ROUNDS) -> int:
        """
        Generate a safe prime p = 2q + 1 (q prime) with exactly `bits` bits.

        Args:
            bits (int): The desired bit length of the safe prime.
            rounds (int): Number of Miller-Rabin rounds applied to both q and p. Defaults to 64.

        Returns:
            int: The safe prime p.

        Raises:
            InvalidConfigurationError: If bits or rounds are out of range.
            GenerationExhaustedError: If max_attempts candidates were drawn without success.
        """
        config = self._config(bits, rounds, safe=True)
        return self.generate(config).value

    def generate(self, config: PrimeGenerationConfig) -> GeneratedPrime:
        """
        Run a validated generation request and report how it went.

        Args:
            config (PrimeGenerationConfig): The generation parameters.

        Returns:
            GeneratedPrime: The prime together with attempt count and elapsed time.
        """
        start_time = time.perf_counter()
        if config.safe:
            value, attempts = self._find_safe_prime(config.bits, config.rounds, config.max_attempts)
        else:
            value, attempts = self._find_prime(config.bits, config.rounds, config.max_attempts)
        elapsed = time.perf_counter() - start_time

        logger.debug(
            "Found %d-bit %s after %d candidates in %.3fs",
            config.bits, "safe prime" if config.safe else "prime", attempts, elapsed,
        )
        return GeneratedPrime(
            value=value,
            bits=value.bit_length(),
            safe=config.safe,
            rounds=config.rounds,
            attempts=attempts,
            elapsed=elapsed,
        )

    def _config(self, bits: int, rounds: int, safe: bool) -> PrimeGenerationConfig:
        return PrimeGenerationConfig(
            bits=bits,
            rounds=rounds,
            safe=safe,
            max_attempts=self.max_attempts,
            min_bits=self.min_bits,
        )

    def _candidates(self, bits: int) -> Iterator[int]:
        """Endless stream of fresh odd candidates with exactly `bits` bits."""
        top_bit = 1 << (bits - 1)
        while True:
            # Set MSB to 1 (exact bit length) and LSB to 1 (odd)
            yield self.rng.randbits(bits) | top_bit | 1

    def _find_prime(self, bits: int, rounds: int, max_attempts: Optional[int]) -> Tuple[int, int]:
        attempts = 0
        # islice(..., None) leaves the stream unbounded
        for candidate in islice(self._candidates(bits), max_attempts):
            attempts += 1

            if not small_prime_precheck(candidate):
                continue
            if is_probable_prime(candidate, rounds, self.rng):
                return candidate, attempts
            logger.debug("Candidate %d rejected by Miller-Rabin", attempts)

        raise GenerationExhaustedError(
            f"Unable to generate a {bits} bits prime after {max_attempts} attempts."
        )

    def _find_safe_prime(self, bits: int, rounds: int, max_attempts: Optional[int]) -> Tuple[int, int]:
        attempts = 0
        restarts = 0
        while True:
            remaining = None if max_attempts is None else max_attempts - attempts
            try:
                q, used = self._find_prime(bits - 1, rounds, remaining)
            except GenerationExhaustedError as e:
                raise GenerationExhaustedError(
                    f"Unable to generate a {bits} bits safe prime after {max_attempts} attempts."
                ) from e
            attempts += used

            p = (q << 1) + 1
            if small_prime_precheck(p) and is_probable_prime(p, rounds, self.rng):
                return p, attempts

            # Discard q and draw a fresh one, no incremental search
            restarts += 1
            logger.debug("2q + 1 is composite, restarting safe prime search (%d restarts)", restarts)


def generate_probable_prime(
        bits: int,
        rounds: int = DEFAULT_MR_ROUNDS,
        rng: Optional[RandomSource] = None,
        max_attempts: Optional[int] = None,
) -> int:
    """Generate a random probable prime of exactly `bits` bits (bits >= 512)."""
    return PrimeGenerator(rng, max_attempts=max_attempts).generate_probable_prime(bits, rounds)


def generate_safe_prime(
        bits: int,
        rounds: int = DEFAULT_MR_ROUNDS,
        rng: Optional[RandomSource] = None,
        max_attempts: Optional[int] = None,
) -> int:
    """Generate a safe prime of exactly `bits` bits (bits >= 512)."""
    return PrimeGenerator(rng, max_attempts=max_attempts).generate_safe_prime(bits, rounds)
