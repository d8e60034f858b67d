import os
import argparse
import multiprocessing
import numpy as np
import pandas as pd
from datetime import datetime
from typing import List, Dict, Optional
from dataclasses import dataclass, asdict

from find_big_prime.core import DEFAULT_MR_ROUNDS, PrimeGenerationConfig
from find_big_prime.utils.math import is_probable_prime
from find_big_prime.utils.prime_generator import PrimeGenerator
from find_big_prime.utils.random_source import SeededRandomSource


# --- 1. Data Structures for the Experiment ---
@dataclass
class ExperimentConfig:
    """Configuration for a single generation trial."""
    trial_id: str
    bits: int
    rounds: int
    safe: bool
    seed: Optional[int]


@dataclass
class TrialResult:
    """Result of a single generation trial."""
    trial_id: str
    bits: int
    safe: bool
    rounds: int
    attempts: int
    elapsed: float
    verified: bool


# --- 2. Worker Function for Multiprocessing (must be top-level) ---
def _generate_worker(config: ExperimentConfig) -> TrialResult:
    """Generates one prime in its own process, with its own random source."""
    rng = SeededRandomSource(config.seed) if config.seed is not None else None
    generator = PrimeGenerator(rng)
    result = generator.generate(PrimeGenerationConfig(bits=config.bits, rounds=config.rounds, safe=config.safe))

    # Independent re-check with the OS-backed source
    verified = result.bits == config.bits and is_probable_prime(result.value, config.rounds)
    if config.safe:
        verified = verified and is_probable_prime((result.value - 1) // 2, config.rounds)

    return TrialResult(
        trial_id=config.trial_id,
        bits=result.bits,
        safe=result.safe,
        rounds=result.rounds,
        attempts=result.attempts,
        elapsed=result.elapsed,
        verified=verified,
    )


# --- 3. Main Experiment Orchestrator ---
class ExperimentRunner:
    """Orchestrates a prime generation benchmark campaign."""

    def __init__(self, output_root: str = "results"):
        self.campaign_id = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.output_dir = os.path.join(output_root, f"campaign_{self.campaign_id}")
        os.makedirs(self.output_dir, exist_ok=True)

    def run_campaign(self, bit_sizes: List[int], trials: int, rounds: int, safe: bool, seed: Optional[int]):
        print("Starting Prime Generation Benchmark Campaign")
        print("=" * 50)
        print(f"Campaign ID: {self.campaign_id}")
        print(f"Results will be saved in: {self.output_dir}")
        print("-" * 50)
        print("Parameters:")
        print(f"  - Bit Sizes: {bit_sizes}")
        print(f"  - Trials per Size: {trials}")
        print(f"  - Miller-Rabin Rounds: {rounds}")
        print(f"  - Safe Primes: {safe}")
        print(f"  - Initial Random Seed: {seed if seed is not None else 'none (OS entropy)'}")
        print("=" * 50)

        configs = self._generate_configs(bit_sizes, trials, rounds, safe, seed)
        results = self._run_all_trials(configs)
        self._generate_report(results)

        print("\nCampaign finished successfully.")

    def _generate_configs(self, bit_sizes: List[int], trials: int, rounds: int, safe: bool,
                          initial_seed: Optional[int]) -> List[ExperimentConfig]:
        configs = []
        seed = initial_seed
        kind = "safe" if safe else "prime"
        for bits in bit_sizes:
            for trial in range(trials):
                configs.append(ExperimentConfig(
                    trial_id=f"{kind}_b{bits}_t{trial:02d}",
                    bits=bits,
                    rounds=rounds,
                    safe=safe,
                    seed=seed,
                ))
                if seed is not None:
                    seed += 1
        return configs

    def _run_all_trials(self, configs: List[ExperimentConfig]) -> List[TrialResult]:
        with multiprocessing.Pool() as pool:
            return pool.map(_generate_worker, configs)

    def _generate_report(self, results: List[TrialResult]):
        print("\n   Generating reports...")
        if not results:
            print("    -> No results to report.")
            return

        detailed_filename = os.path.join(self.output_dir, "detailed_results.csv")
        results_as_dicts = [asdict(r) for r in results]
        pd.DataFrame(results_as_dicts).to_csv(detailed_filename, index=False)
        print(f"    -> Detailed results saved to {detailed_filename}")

        self._print_summary_report(results_as_dicts)

    def _print_summary_report(self, results_as_dicts: List[Dict]):
        """Calculates and prints a summary table of the campaign results."""
        df = pd.DataFrame(results_as_dicts)

        print("\n" + "=" * 80)
        print("CAMPAIGN SUMMARY")
        print("=" * 80)

        summary = df.groupby('bits').agg(
            trials=('trial_id', 'count'),
            verified=('verified', 'mean'),
            mean_attempts=('attempts', 'mean'),
            median_attempts=('attempts', 'median'),
            mean_time=('elapsed', 'mean'),
            max_time=('elapsed', 'max'),
        )
        # Prime number theorem: about ln(2^bits) / 2 odd candidates per prime
        summary['expected_attempts'] = summary.index.map(lambda b: b * np.log(2) / 2)

        summary['verified'] = summary['verified'].map('{:.0%}'.format)
        for column in ('mean_attempts', 'median_attempts', 'expected_attempts'):
            summary[column] = summary[column].map('{:.1f}'.format)
        for column in ('mean_time', 'max_time'):
            summary[column] = summary[column].map('{:.3f}s'.format)

        print(summary.to_string())
        print("-" * 80)


# --- 4. Script Entry Point and Argument Parsing ---
def main():
    parser = argparse.ArgumentParser(description="Run a prime generation benchmark campaign.")
    parser.add_argument('--bits', type=int, nargs='+', default=[512, 1024, 2048], help="List of bit sizes to test.")
    parser.add_argument('--trials', type=int, default=10, help="Number of primes to generate per bit size.")
    parser.add_argument('--rounds', type=int, default=DEFAULT_MR_ROUNDS, help="Miller-Rabin rounds.")
    parser.add_argument('--safe', action='store_true', help="Generate safe primes instead of probable primes.")
    parser.add_argument('--seed', type=int, default=None,
                        help="Initial random seed for reproducibility (NOT secure). Defaults to OS entropy.")
    args = parser.parse_args()

    runner = ExperimentRunner()
    runner.run_campaign(
        bit_sizes=args.bits,
        trials=args.trials,
        rounds=args.rounds,
        safe=args.safe,
        seed=args.seed,
    )


if __name__ == '__main__':
    main()
