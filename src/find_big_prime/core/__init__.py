from .interfaces import RandomSource

from .exceptions import (
    EntropySourceError,
    GenerationExhaustedError,
    InvalidConfigurationError,
)

from .models import (
    DEFAULT_BITS,
    DEFAULT_MR_ROUNDS,
    MIN_PRIME_BITS,
    GeneratedPrime,
    PrimeGenerationConfig,
)

__all__ = [
    "DEFAULT_BITS",
    "DEFAULT_MR_ROUNDS",
    "MIN_PRIME_BITS",
    "EntropySourceError",
    "GeneratedPrime",
    "GenerationExhaustedError",
    "InvalidConfigurationError",
    "PrimeGenerationConfig",
    "RandomSource",
]
