from click.testing import CliRunner

from hashi.cli import main

from conftest import GOLDEN_ROWS, GOLDEN_SOLVED


def write_puzzle(tmp_path, text):
    path = tmp_path / "puzzle.txt"
    path.write_text(text, encoding='utf-8')
    return str(path)


def test_solve(tmp_path):
    path = write_puzzle(tmp_path, "17 6\n" + "\n".join(GOLDEN_ROWS) + "\n")
    result = CliRunner().invoke(main, [path])
    assert result.exit_code == 0
    assert GOLDEN_SOLVED in result.output
    assert "Status: SOLVED" in result.output


def test_trace(tmp_path):
    path = write_puzzle(tmp_path, "\n".join(GOLDEN_ROWS))
    result = CliRunner().invoke(main, [path, '--trace'])
    assert result.exit_code == 0
    assert "  6. Add remaining bridges for a node with one active neighbour" in result.output


def test_single_step(tmp_path):
    path = write_puzzle(tmp_path, "\n".join(GOLDEN_ROWS))
    result = CliRunner().invoke(main, [path, '--step'])
    assert result.exit_code == 0
    assert "··2════4····3····" in result.output
    assert "Status: INCOMPLETE" in result.output


def test_max_steps_and_stats(tmp_path):
    path = write_puzzle(tmp_path, "\n".join(GOLDEN_ROWS))
    result = CliRunner().invoke(main, [path, '--max-steps', '1', '--stats'])
    assert result.exit_code == 0
    assert "Status: INCOMPLETE" in result.output
    assert '"total_bridges": 2' in result.output


def test_contradiction_on_step(tmp_path):
    path = write_puzzle(tmp_path, "2.1")
    result = CliRunner().invoke(main, [path, '--step'])
    assert result.exit_code == 1
    assert "Contradiction" in result.output


def test_missing_file(tmp_path):
    result = CliRunner().invoke(main, [str(tmp_path / "nope.txt")])
    assert result.exit_code == 1
    assert "not found" in result.output


def test_puzzle_without_islands(tmp_path):
    path = write_puzzle(tmp_path, "...\n...")
    result = CliRunner().invoke(main, [path])
    assert result.exit_code == 1
    assert "no islands" in result.output
