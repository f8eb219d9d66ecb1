"""
Profiling script for pyrbmap performance analysis.

This script profiles insertion, deletion, lookup and bulk construction
scenarios to identify bottlenecks in the tree engine.
"""

import cProfile
import pstats
import io
from pstats import SortKey
import time
import sys
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np
from pyrbmap import RBMap, RBSet


def create_keys(n_keys, seed=42):
    """Create a random permutation of n_keys integers."""
    rng = np.random.default_rng(seed)
    return rng.permutation(n_keys).tolist()


def profile_random_inserts():
    """Profile 20000 inserts in random order."""
    m = RBMap()
    for k in create_keys(20000):
        m = m.insert(k, k)


def profile_ascending_inserts():
    """Profile 20000 inserts in ascending order (rebalancing on every step)."""
    m = RBMap()
    for k in range(20000):
        m = m.insert(k, k)


def profile_random_removals():
    """Profile removing 20000 keys in random order."""
    keys = create_keys(20000)
    m = RBMap.of_items((k, k) for k in keys)
    for k in create_keys(20000, seed=7):
        m = m.remove(k)


def profile_lookups():
    """Profile 50000 lookups, half of them misses."""
    m = RBMap.of_items((k, k) for k in range(0, 50000, 2))
    for k in create_keys(50000):
        m.lookup(k)


def profile_set_algebra():
    """Profile union, intersection and difference of two 20000 element sets."""
    a = RBSet.of_iterable(create_keys(20000))
    b = RBSet.of_iterable(k + 10000 for k in create_keys(20000, seed=3))
    a.union(b)
    a.inter(b)
    a.diff(b)


def benchmark_scenario(name, func):
    """Benchmark a scenario and print timing."""
    print(f"\n{'='*60}")
    print(f"Profiling: {name}")
    print('='*60)

    profiler = cProfile.Profile()

    start_time = time.time()
    profiler.enable()
    func()
    profiler.disable()
    elapsed = time.time() - start_time

    print(f"\nTotal time: {elapsed:.3f}s")

    s = io.StringIO()
    ps = pstats.Stats(profiler, stream=s).sort_stats(SortKey.CUMULATIVE)
    ps.print_stats(15)

    print("\nTop 15 functions by cumulative time:")
    print(s.getvalue())

    return profiler


def main():
    """Run all profiling scenarios."""
    print("pyrbmap Performance Profiling")
    print("=" * 60)

    scenarios = [
        ("Random Inserts (20000 keys)", profile_random_inserts),
        ("Ascending Inserts (20000 keys)", profile_ascending_inserts),
        ("Random Removals (20000 keys)", profile_random_removals),
        ("Lookups (50000 probes)", profile_lookups),
        ("Set Algebra (2 x 20000 elements)", profile_set_algebra),
    ]

    profilers = {}
    for name, func in scenarios:
        profilers[name] = benchmark_scenario(name, func)

    print("\n" + "="*60)
    print("Saving detailed profiles...")
    print("="*60)

    for name, profiler in profilers.items():
        filename = f"profile_{name.lower().replace(' ', '_').replace('(', '').replace(')', '')}.prof"
        profiler.dump_stats(filename)
        print(f"Saved: {filename}")

    print("\nTo view detailed profile, use:")
    print("  python -m pstats <profile_file>")


if __name__ == "__main__":
    main()
