"""
Benchmark the deductive solver over sets of puzzles.

Deduction alone does not finish every puzzle, so the interesting number is
the share of puzzles solved per collection and how far the others got.
"""

import json
import time
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pandas as pd
from tqdm import tqdm

from ..core.puzzle import Puzzle
from ..core.utils import memory_usage, setup_logger
from ..solvers import SolverConfig, get_solver


@dataclass
class BenchmarkResult:
    """Result from a single benchmark test"""
    puzzle_id: str
    collection: str
    algorithm: str
    success: bool
    solve_time: float
    iterations: int
    memory_mb: float

    # Puzzle characteristics
    width: int
    height: int
    num_islands: int

    # How far deduction got
    placed_weight: int = 0
    required_weight: int = 0
    is_legal: bool = True
    error_message: str = ""

    timestamp: str = ""
    extra_stats: Dict[str, Any] = field(default_factory=dict)

    @property
    def progress(self) -> float:
        return self.placed_weight / self.required_weight if self.required_weight else 1.0

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        result = asdict(self)
        result['progress'] = self.progress
        return result


class BenchmarkConfig:
    """Configuration for benchmark runs"""

    def __init__(self, **kwargs):
        self.algorithms: List[str] = kwargs.get('algorithms', ['deductive'])
        self.solver_config: SolverConfig = kwargs.get('solver_config', SolverConfig())
        self.show_progress: bool = kwargs.get('show_progress', True)

        # Results are only written when an output directory is given
        output_dir = kwargs.get('output_dir')
        self.output_dir: Optional[Path] = Path(output_dir) if output_dir else None


class Benchmark:
    """Run the solver on labelled puzzle collections"""

    def __init__(self, config: Optional[BenchmarkConfig] = None):
        self.config = config or BenchmarkConfig()
        self.logger = setup_logger(self.__class__.__name__)
        self.results: List[BenchmarkResult] = []

    def run(self, collections: Dict[str, Sequence[Tuple[str, Puzzle]]]) -> pd.DataFrame:
        """
        Run every algorithm on every puzzle.

        Args:
            collections: Collection name -> list of (puzzle_id, puzzle)

        Returns:
            DataFrame with one row per (puzzle, algorithm)
        """
        self.logger.info("Starting benchmark")
        start_time = time.time()

        cases = [
            (collection, puzzle_id, puzzle, algorithm)
            for collection, puzzles in collections.items()
            for puzzle_id, puzzle in puzzles
            for algorithm in self.config.algorithms
        ]

        with tqdm(total=len(cases), desc="Running benchmarks",
                  disable=not self.config.show_progress) as pbar:
            for collection, puzzle_id, puzzle, algorithm in cases:
                self.results.append(self._run_single_test(collection, puzzle_id, puzzle, algorithm))
                pbar.update(1)

        results_df = pd.DataFrame([r.to_dict() for r in self.results])

        if self.config.output_dir is not None:
            self._save(results_df)

        self.logger.info(f"Benchmark completed in {time.time() - start_time:.2f} seconds")
        return results_df

    def _run_single_test(self, collection: str, puzzle_id: str, puzzle: Puzzle,
                         algorithm: str) -> BenchmarkResult:
        """Run a single benchmark test"""
        result = BenchmarkResult(
            puzzle_id=puzzle_id,
            collection=collection,
            algorithm=algorithm,
            success=False,
            solve_time=0.0,
            iterations=0,
            memory_mb=0.0,
            width=puzzle.width,
            height=puzzle.height,
            num_islands=len(puzzle.islands),
            required_weight=puzzle.total_required // 2,
            timestamp=datetime.now().isoformat()
        )

        solver = get_solver(algorithm, self.config.solver_config)
        initial_memory = memory_usage()
        solver_result = solver.solve(puzzle)

        result.success = solver_result.success
        result.solve_time = solver_result.solve_time
        result.iterations = solver_result.iterations
        result.memory_mb = memory_usage() - initial_memory
        result.extra_stats = solver_result.stats

        if solver_result.solution is not None:
            result.placed_weight = solver_result.solution.total_weight()
            result.is_legal = solver_result.solution.is_legal(puzzle)
        if not solver_result.success:
            result.error_message = solver_result.message

        return result

    def _save(self, results_df: pd.DataFrame):
        self.config.output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

        results_file = self.config.output_dir / f"benchmark_results_{timestamp}.csv"
        results_df.to_csv(results_file, index=False)

        json_file = self.config.output_dir / f"benchmark_results_{timestamp}.json"
        with open(json_file, 'w') as f:
            json.dump({
                'algorithms': self.config.algorithms,
                'results': [r.to_dict() for r in self.results],
                'summary': summarize(results_df)
            }, f, indent=2, default=str)

        self.logger.info(f"Results saved to {results_file}")


def summarize(results_df: pd.DataFrame) -> dict:
    """Overall and per-collection solve rates"""
    summary = {
        'total_tests': int(len(results_df)),
        'successful_tests': int(results_df['success'].sum()),
        'success_rate': float(results_df['success'].mean()),
        'by_collection': {}
    }
    for collection, data in results_df.groupby('collection'):
        summary['by_collection'][collection] = {
            'solved': int(data['success'].sum()),
            'total': int(len(data)),
            'success_rate': float(data['success'].mean()),
            'avg_progress': float(data['progress'].mean()),
            'avg_time': float(data['solve_time'].mean())
        }
    return summary
