"""
Benchmarking tools for the Hashiwokakero solver.
"""

from .benchmark import Benchmark, BenchmarkConfig, BenchmarkResult, summarize

__all__ = [
    'Benchmark', 'BenchmarkConfig', 'BenchmarkResult', 'summarize'
]
