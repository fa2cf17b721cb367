"""
Utility functions for Hashiwokakero solver.
"""

import logging
import os
import time
from functools import wraps
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np
import psutil

from ..config import LOG_DATEFMT, LOG_FORMAT, LOG_LEVEL
from .puzzle import Puzzle
from .solution import Solution


def setup_logger(name: str, log_file: Optional[Path] = None, level: str = LOG_LEVEL) -> logging.Logger:
    """
    Set up a logger with console and optional file output.

    Args:
        name: Logger name
        log_file: Optional log file path
        level: Logging level

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers
    logger.handlers = []

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, level.upper()))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(getattr(logging, level.upper()))
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def timer(func):
    """Decorator to time function execution"""
    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.time()
        result = func(*args, **kwargs)
        execution_time = time.time() - start_time

        # Try to get logger from first argument (usually self)
        if args and hasattr(args[0], 'logger'):
            args[0].logger.debug(f"{func.__name__} took {execution_time:.3f} seconds")
        else:
            logging.getLogger(func.__module__).debug(
                f"{func.__name__} took {execution_time:.3f} seconds"
            )

        return result
    return wrapper


def memory_usage() -> float:
    """Get current memory usage in MB"""
    process = psutil.Process(os.getpid())
    return process.memory_info().rss / 1024 / 1024


class PuzzleConverter:
    """Convert puzzles between different formats"""

    @staticmethod
    def to_grid(puzzle: Puzzle) -> np.ndarray:
        """
        Convert puzzle to 2D grid representation.
        0: empty, 1-8: island with that many required bridges
        """
        grid = np.zeros((puzzle.height, puzzle.width), dtype=int)
        for island in puzzle.islands:
            grid[island.row, island.col] = island.required_bridges
        return grid

    @staticmethod
    def from_grid(grid: np.ndarray) -> Puzzle:
        """Create puzzle from 2D grid representation"""
        height, width = grid.shape
        text = "".join(str(int(v)) if 0 < v <= 8 else "." for v in grid.flatten())
        return Puzzle.decode(text, width, height)

    @staticmethod
    def from_string(s: str) -> Puzzle:
        """
        Create puzzle from a multi-line text block.

        An optional first line "width height" fixes the dimensions; otherwise
        they are taken from the rows. Digits 1-8 are islands, anything else
        is an empty cell.
        """
        lines = [line.strip() for line in s.strip().splitlines() if line.strip()]
        if not lines:
            raise ValueError("Empty puzzle text")

        header = lines[0].split()
        if len(header) == 2 and all(part.isdigit() for part in header):
            width, height = int(header[0]), int(header[1])
            rows = [''.join(line.split()) for line in lines[1:]]
        else:
            rows = [''.join(line.split()) for line in lines]
            height = len(rows)
            width = max(len(row) for row in rows)

        if len(rows) > height:
            raise ValueError(f"Puzzle text has {len(rows)} rows, expected at most {height}")
        for number, row in enumerate(rows, 1):
            if len(row) > width:
                raise ValueError(f"Row {number} is {len(row)} cells wide, expected at most {width}")

        # Short rows are padded so positions stay row-aligned
        rows = [row.ljust(width, '.') for row in rows]
        return Puzzle.decode("".join(rows), width, height)


def calculate_solution_stats(puzzle: Puzzle, solution: Solution) -> Dict[str, Any]:
    """Calculate statistics for a (possibly partial) solution"""
    stats = {
        'total_bridges': solution.total_weight(),
        'required_bridges': puzzle.total_required // 2,
        'single_bridges': sum(1 for b in solution.bridges if b.count == 1),
        'double_bridges': sum(1 for b in solution.bridges if b.count == 2),
        'is_complete': solution.is_complete(puzzle),
        'is_connected': solution.is_connected(puzzle),
        'is_legal': solution.is_legal(puzzle),
    }

    # Calculate average bridge length
    if solution.bridges:
        lengths = []
        for bridge in solution.bridges:
            i1 = puzzle.islands[bridge.island1_id]
            i2 = puzzle.islands[bridge.island2_id]
            lengths.append(abs(i1.row - i2.row) + abs(i1.col - i2.col))
        stats['avg_bridge_length'] = sum(lengths) / len(lengths)
        stats['max_bridge_length'] = max(lengths)
        stats['min_bridge_length'] = min(lengths)
    else:
        stats['avg_bridge_length'] = 0
        stats['max_bridge_length'] = 0
        stats['min_bridge_length'] = 0

    return stats
