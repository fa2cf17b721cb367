import pytest

from hashi.core import DuplicatePosition, Island, OutOfBounds, Puzzle

from conftest import GOLDEN_EMPTY


def test_decode_reads_islands_row_major(golden_puzzle):
    assert golden_puzzle.width == 17
    assert golden_puzzle.height == 6
    assert golden_puzzle.islands == (
        Island(1, 2, 2),
        Island(1, 7, 4),
        Island(1, 12, 3),
        Island(2, 15, 1),
        Island(3, 12, 2),
        Island(4, 7, 3),
        Island(4, 15, 3),
    )


def test_decode_ignores_whitespace_and_other_characters():
    puzzle = Puzzle.decode("""
        3 . 2
        x 0 9
        2 . .
    """, 3, 3)
    assert puzzle.islands == (Island(0, 0, 3), Island(0, 2, 2), Island(2, 0, 2))


def test_render_empty_matches_golden_grid(golden_puzzle):
    assert golden_puzzle.render_empty() == GOLDEN_EMPTY
    assert str(golden_puzzle) == GOLDEN_EMPTY


def test_render_round_trip(golden_puzzle):
    again = Puzzle.decode(golden_puzzle.render_empty(), 17, 6)
    assert again == golden_puzzle


def test_island_outside_grid_is_rejected():
    with pytest.raises(OutOfBounds):
        Puzzle(3, 3, [Island(0, 0, 1), Island(3, 1, 1)])


def test_two_islands_on_one_cell_are_rejected():
    with pytest.raises(DuplicatePosition):
        Puzzle(3, 3, [Island(1, 1, 1), Island(1, 1, 2)])


def test_island_at(golden_puzzle):
    assert golden_puzzle.island_at(1, 7) == 1
    assert golden_puzzle.island_at(4, 15) == 6
    assert golden_puzzle.island_at(0, 0) is None


def test_as_matrix(square_puzzle):
    matrix = square_puzzle.as_matrix()
    assert matrix.shape == (3, 3)
    assert matrix[0, 0] == 0
    assert matrix[2, 2] == 3
    assert matrix[1, 1] == -1


def test_dict_round_trip(golden_puzzle):
    data = golden_puzzle.to_dict()
    assert data['width'] == 17
    assert data['islands'][1] == {'row': 1, 'col': 7, 'required_bridges': 4}
    assert Puzzle.from_dict(data) == golden_puzzle


def test_total_required(golden_puzzle):
    assert golden_puzzle.total_required == 18


@pytest.mark.parametrize("width, height", [(0, 3), (3, 0), (-1, 2)])
def test_decode_rejects_non_positive_dimensions(width, height):
    with pytest.raises(ValueError, match="dimensions must be positive"):
        Puzzle.decode("1.1", width, height)
