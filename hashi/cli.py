"""
Command line entry point for solving a single Hashiwokakero puzzle.

Usage:
    hashi-solve puzzle.txt
    hashi-solve puzzle.txt --trace
    hashi-solve puzzle.txt --step --verbose
"""

import json
import sys
from pathlib import Path

import click

from .core.errors import Contradiction, HashiError
from .core.solution import Solution
from .core.utils import PuzzleConverter, calculate_solution_stats, setup_logger
from .core.validator import PuzzleValidator
from .solvers import SolverConfig, get_solver, solve_step


@click.command()
@click.argument('puzzle_file', type=click.Path())
@click.option('--step', is_flag=True,
              help='Apply a single deduction step instead of solving')
@click.option('--trace', is_flag=True,
              help='Print the tactic applied at every step')
@click.option('--max-steps', type=int, default=None,
              help='Stop after this many deduction steps')
@click.option('--stats', is_flag=True, help='Print solution statistics as JSON')
@click.option('--log-file', type=click.Path(), default=None,
              help='Also write the log to this file')
@click.option('--verbose', is_flag=True, help='Enable verbose output')
def main(puzzle_file, step, trace, max_steps, stats, log_file, verbose):
    """Solve a Hashiwokakero puzzle by deduction."""

    logger = setup_logger("PuzzleSolver", log_file, level="DEBUG" if verbose else "WARNING")

    puzzle_path = Path(puzzle_file)
    if not puzzle_path.exists():
        click.echo(f"Error: Puzzle file '{puzzle_file}' not found")
        sys.exit(1)

    try:
        puzzle = PuzzleConverter.from_string(puzzle_path.read_text(encoding='utf-8'))
    except (HashiError, ValueError) as e:
        click.echo(f"Error loading puzzle: {e}")
        sys.exit(1)
    logger.info(f"Loaded {puzzle!r} from {puzzle_path}")

    validation = PuzzleValidator.validate_puzzle_structure(puzzle)
    if not validation:
        click.echo(f"Error: Invalid puzzle - {'; '.join(validation.errors)}")
        sys.exit(1)

    config = SolverConfig(verbose=verbose, log_file=log_file, max_steps=max_steps)

    if step:
        try:
            result = solve_step(puzzle, Solution(), config)
        except Contradiction as e:
            click.echo(f"Contradiction: {e}")
            sys.exit(1)
        solution = result.solution if result is not None else Solution()
        labels = [result.label] if result is not None else []
        message = "Applied one step" if result is not None else "No tactic applies"
    else:
        solver = get_solver('deductive', config)
        result = solver.solve(puzzle)
        solution = result.solution if result.solution is not None else Solution()
        labels = [s.label for s in result.steps]
        message = result.message

    if trace:
        for number, label in enumerate(labels, 1):
            click.echo(f"{number:3d}. {label}")
        click.echo()

    click.echo(solution.render(puzzle), nl=False)
    click.echo()

    status = "SOLVED" if solution.is_correct(puzzle) else "INCOMPLETE"
    click.echo(f"Status: {status}")
    if message:
        click.echo(f"Message: {message}")

    if stats:
        click.echo(json.dumps(calculate_solution_stats(puzzle, solution), indent=2))


if __name__ == '__main__':
    main()
