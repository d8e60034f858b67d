from typing import Optional, Tuple

from find_big_prime.core import InvalidConfigurationError, RandomSource
from find_big_prime.utils.random_source import default_random_source, random_range

# Odd primes used to filter out obvious composites before Miller-Rabin.
SMALL_PRIMES = (3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47, 53, 59)


def small_prime_precheck(n: int) -> bool:
    """
    Cheap trial division against SMALL_PRIMES.

    Args:
        n (int): The candidate to check.

    Returns:
        bool: False if n is 1 or has a small prime factor other than itself, True otherwise.
    """
    if n == 1:
        return False

    for p in SMALL_PRIMES:
        if n == p:
            return True
        if n % p == 0:
            return False

    return True


def factor_out_twos(n: int) -> Tuple[int, int]:
    """
    Writes n as d * 2^s with d odd.

    Args:
        n (int): A positive integer.

    Returns:
        (int, int): The pair (s, d).

    Raises:
        ValueError: If n is not positive.
    """
    if n <= 0:
        raise ValueError("Only positive integers can be decomposed.")

    s, d = 0, n
    while d % 2 == 0:
        s += 1
        d >>= 1
    return s, d


def is_probable_prime(n: int, rounds: int, rng: Optional[RandomSource] = None) -> bool:
    """
    Miller-Rabin probabilistic primality test.

    A prime is never reported as composite. A composite is reported as prime
    with probability at most 4^-rounds.

    Args:
        n (int): The number to test for primality.
        rounds (int): Number of independent witnesses to try.
        rng (RandomSource, optional): Source for witness selection. Defaults to the OS-backed source.

    Returns:
        bool: True if n is probably prime, False if n is definitely composite.

    Raises:
        InvalidConfigurationError: If rounds is not positive.
    """
    if rounds < 1:
        raise InvalidConfigurationError("Number of Miller-Rabin rounds must be positive.")

    # Handle trivial cases
    if n < 2:
        return False
    if n in (2, 3):
        return True
    if n % 2 == 0:
        return False

    if rng is None:
        rng = default_random_source()

    n_minus_one = n - 1
    s, d = factor_out_twos(n_minus_one)

    for _ in range(rounds):
        a = random_range(2, n - 2, rng)
        x = pow(a, d, n)
        if x == 1 or x == n_minus_one:
            continue

        # Square x up to s-1 times, looking for n-1
        for _ in range(s - 1):
            x = pow(x, 2, n)
            if x == n_minus_one:
                break
            if x == 1:
                # Non-trivial square root of 1
                return False
        else:
            return False
    return True
