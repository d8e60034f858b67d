from dataclasses import dataclass
from typing import Optional

from .exceptions import InvalidConfigurationError

# Smallest bit length accepted by the public entry points.
MIN_PRIME_BITS = 512
# Default Miller-Rabin rounds. Increase for extra certainty.
DEFAULT_MR_ROUNDS = 64
DEFAULT_BITS = 2048


@dataclass(frozen=True, slots=True)
class PrimeGenerationConfig:
    """
    Parameters of a single prime generation request.

    Attributes:
        bits (int): Exact bit length of the prime to generate.
        rounds (int): Number of Miller-Rabin rounds each candidate must survive.
        safe (bool): Generate a safe prime p = 2q + 1 instead of a plain probable prime.
        max_attempts (int, optional): Upper bound on the number of candidates drawn.
                                      None means no bound.
        min_bits (int): Smallest accepted bit length. Defaults to MIN_PRIME_BITS.

    Raises:
        InvalidConfigurationError: If a parameter is out of range.
    """
    bits: int
    rounds: int = DEFAULT_MR_ROUNDS
    safe: bool = False
    max_attempts: Optional[int] = None
    min_bits: int = MIN_PRIME_BITS

    def __post_init__(self):
        if self.min_bits < 2:
            raise InvalidConfigurationError("Minimum bit length must be at least 2.")
        if self.bits < self.min_bits:
            raise InvalidConfigurationError(
                f"At least {self.min_bits} bits are required (got {self.bits}); "
                "use >= 2048 bits for production."
            )
        if self.safe and self.bits < 3:
            raise InvalidConfigurationError("Safe primes require at least 3 bits.")
        if self.rounds < 1:
            raise InvalidConfigurationError("Number of Miller-Rabin rounds must be positive.")
        if self.max_attempts is not None and self.max_attempts < 1:
            raise InvalidConfigurationError("Maximum number of attempts must be positive.")


@dataclass(frozen=True, slots=True)
class GeneratedPrime:
    """
    Represents the outcome of a completed prime generation.

    Attributes:
        value (int): The generated probable prime (or safe prime).
        bits (int): Bit length of value.
        safe (bool): Whether value is a safe prime.
        rounds (int): Number of Miller-Rabin rounds value survived.
        attempts (int): Number of candidates drawn before success.
        elapsed (float): Time taken by the generation, in seconds.

    Raises:
        ValueError: If the record is inconsistent.
    """
    value: int
    bits: int
    safe: bool
    rounds: int
    attempts: int
    elapsed: float

    def __post_init__(self):
        if self.value < 2:
            raise ValueError("Generated value must be at least 2.")
        if self.value.bit_length() != self.bits:
            raise ValueError("Bit length does not match the generated value.")
        if self.attempts < 1:
            raise ValueError("Attempts must be at least 1.")
        if self.elapsed < 0:
            raise ValueError("Elapsed time cannot be negative.")

    @property
    def label(self) -> str:
        """Returns the output key used when printing the bit length."""
        return "safe_prime_bits" if self.safe else "prime_bits"
