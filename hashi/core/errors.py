"""
Error taxonomy for Hashiwokakero puzzles and solutions.
"""


class HashiError(ValueError):
    """Base class for all puzzle and solution errors"""


class OutOfBounds(HashiError):
    """An island lies outside the puzzle grid"""


class DuplicatePosition(HashiError):
    """Two islands share a cell"""


class UnknownIsland(HashiError):
    """A bridge references an island index that does not exist"""


class UnnormalizedBridge(HashiError):
    """A bridge does not satisfy island1_id < island2_id"""


class InvalidWeight(HashiError):
    """A bridge count is not 1 or 2"""


class InvalidBridge(HashiError):
    """A bridge is diagonal, self-referencing or duplicated"""


class CrossingError(HashiError):
    """Two projected elements occupy the same cell"""

    def __init__(self, row: int, col: int):
        self.row = row
        self.col = col
        super().__init__(f"Bridges crossing at x={col} y={row}")


class Contradiction(HashiError):
    """A forced deduction cannot be placed with the remaining capacities"""
