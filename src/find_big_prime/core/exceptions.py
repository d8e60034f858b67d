class InvalidConfigurationError(ValueError):
    """
    Raised when prime generation is requested with unusable parameters
    (bit length too small, non-positive round count, ...).
    """


class EntropySourceError(RuntimeError):
    """
    Raised when the secure random source cannot deliver random bits.
    There is no fallback to a non-cryptographic generator.
    """


class GenerationExhaustedError(RuntimeError):
    """Raised when an explicit attempt bound is reached before a prime is found."""
