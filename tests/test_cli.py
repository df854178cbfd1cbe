from __future__ import annotations

from click.testing import CliRunner

from snowbored.cli import main
from snowbored.domain.game_state import GameResult
from snowbored.infra.score_book import ScoreBook


def test_simulate_prints_summary():
    result = CliRunner().invoke(main, ["simulate", "--frames", "120", "--seed", "1"])
    assert result.exit_code == 0, result.output
    assert "frames:    120" in result.output
    assert "score:     20" in result.output
    assert "game over: no" in result.output


def test_simulate_is_reproducible():
    runner = CliRunner()
    args = ["simulate", "--frames", "2000", "--seed", "4", "--hold", "10", "--release", "25"]
    assert runner.invoke(main, args).output == runner.invoke(main, args).output


def test_simulate_rejects_empty_pattern():
    result = CliRunner().invoke(main, ["simulate", "--hold", "0", "--release", "0"])
    assert result.exit_code != 0


def test_scores_empty():
    runner = CliRunner()
    with runner.isolated_filesystem():
        result = runner.invoke(main, ["scores"])
    assert result.exit_code == 0
    assert "No scores yet" in result.output


def test_scores_lists_book(tmp_path):
    config = tmp_path / "snowbored.yaml"
    config.write_text("scores_path: scores.json\n", encoding="utf-8")
    book = ScoreBook(tmp_path / "scores.json")
    book.submit("alice", GameResult(score=120, game_time=65))
    book.submit("bob", GameResult(score=300, game_time=31))

    result = CliRunner().invoke(main, ["scores", "--config", str(config)])
    assert result.exit_code == 0, result.output
    lines = result.output.strip().splitlines()
    assert "bob" in lines[0] and "300" in lines[0]
    assert "alice" in lines[1] and "01:05" in lines[1]


def test_bad_config_is_reported(tmp_path):
    config = tmp_path / "snowbored.yaml"
    config.write_text("volume: 11\n", encoding="utf-8")
    result = CliRunner().invoke(main, ["simulate", "--config", str(config)])
    assert result.exit_code == 1
    assert "Unknown settings keys" in result.output
