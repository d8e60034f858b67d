import argparse
import logging
import sys
from typing import List, Optional

from find_big_prime.core import (
    DEFAULT_BITS,
    DEFAULT_MR_ROUNDS,
    EntropySourceError,
    InvalidConfigurationError,
    PrimeGenerationConfig,
)
from find_big_prime.utils.prime_generator import PrimeGenerator
from find_big_prime.utils.random_source import SeededRandomSource

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="find-big-prime",
        description="Generate large probable primes and safe primes.",
    )
    parser.add_argument('-b', '--bits', type=int, default=DEFAULT_BITS,
                        help="Number of bits for the generated prime (e.g. 2048, 3072, 4096).")
    parser.add_argument('--safe', action='store_true',
                        help="Generate a safe prime p where p = 2q + 1 and q is also prime.")
    parser.add_argument('--rounds', type=int, default=DEFAULT_MR_ROUNDS,
                        help="Miller-Rabin rounds to run when testing primality.")
    parser.add_argument('--seed', type=int, default=None,
                        help="Use a deterministic seeded generator (testing only, NOT secure).")
    parser.add_argument('-v', '--verbose', action='store_true', help="Enable debug logging.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = PrimeGenerationConfig(bits=args.bits, rounds=args.rounds, safe=args.safe)
    except InvalidConfigurationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    rng = None
    if args.seed is not None:
        logger.warning("Using a seeded, non-cryptographic random source (seed=%d)", args.seed)
        rng = SeededRandomSource(args.seed)

    try:
        result = PrimeGenerator(rng).generate(config)
    except EntropySourceError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(f"{result.label}={result.bits}")
    print(result.value)
    return 0


if __name__ == '__main__':
    sys.exit(main())
