"""
Profiling script for pairheap performance analysis.

This script profiles heap workloads (sorting, key updates, Dijkstra) to
identify bottlenecks.
"""

import cProfile
import pstats
import io
from pstats import SortKey
import time
import sys
from pathlib import Path

# Make the src layout importable without installing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np
from pairheap import PairingHeap
from pairheap.shortestpaths import Calculator


def create_graph(n_nodes, n_edges):
    """Create a random weighted graph with n nodes and approximately n_edges edges."""
    np.random.seed(42)
    edges = []
    for _ in range(n_edges):
        source = int(np.random.randint(0, n_nodes))
        target = int(np.random.randint(0, n_nodes))
        if source != target:
            edges.append((source, target, float(np.random.uniform(1.0, 10.0))))
    return edges


def profile_heap_sort():
    """Profile inserting then extracting 20000 random keys."""
    np.random.seed(42)
    heap = PairingHeap()
    for key in np.random.randint(0, 1_000_000, size=20000).tolist():
        heap.insert(key)
    while heap:
        heap.extract_min()


def profile_key_updates():
    """Profile 5000 inserts followed by 5000 decrease-key updates."""
    np.random.seed(42)
    heap = PairingHeap()
    handles = [heap.insert(key) for key in np.random.randint(1000, 2000, size=5000).tolist()]
    for i, handle in enumerate(handles):
        handles[i] = heap.update_item(handle, handle.item - 1000)
    while heap:
        heap.extract_min()


def profile_find():
    """Profile linear lookups in a 2000 item heap."""
    heap = PairingHeap()
    for key in range(2000):
        heap.insert(key)
    for key in range(0, 2000, 10):
        heap.find(key)


def profile_dijkstra():
    """Profile single-source shortest paths (500 nodes, 2000 edges)."""
    edges = create_graph(500, 2000)
    calc = Calculator(500, edges, lambda e: e[0], lambda e: e[1], lambda e: e[2])
    for start in range(0, 500, 50):
        calc.distances_from_node(start)


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
    ps.print_stats(20)  # Top 20 functions

    print("\nTop 20 functions by cumulative time:")
    print(s.getvalue())

    return profiler


def main():
    """Run all profiling scenarios."""
    print("pairheap Performance Profiling")
    print("=" * 60)

    scenarios = [
        ("Heap Sort (20000 keys)", profile_heap_sort),
        ("Key Updates (5000 keys)", profile_key_updates),
        ("Find (2000 keys, 200 lookups)", profile_find),
        ("Dijkstra (500 nodes, 2000 edges)", profile_dijkstra),
    ]

    profilers = {}
    for name, func in scenarios:
        profilers[name] = benchmark_scenario(name, func)

    print("\n" + "="*60)
    print("Saving detailed profiles...")
    print("="*60)

    for name, profiler in profilers.items():
        filename = f"profile_{name.lower().replace(' ', '_').replace('(', '').replace(')', '').replace(',', '')}.prof"
        profiler.dump_stats(filename)
        print(f"Saved: {filename}")

    print("\nTo view detailed profile, use:")
    print("  python -m pstats <profile_file>")
    print("  then type 'stats' or 'sort cumulative' and 'stats 50'")


if __name__ == "__main__":
    main()
