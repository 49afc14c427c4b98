from __future__ import annotations

from pathlib import Path

from segment_snake.highscore import highscore_path, load_high_score, save_high_score


def test_missing_file_reads_zero(tmp_path: Path) -> None:
    assert load_high_score("classic", tmp_path) == 0


def test_write_only_if_greater(tmp_path: Path) -> None:
    assert save_high_score("classic", 120, tmp_path)
    assert load_high_score("classic", tmp_path) == 120
    assert not save_high_score("classic", 80, tmp_path)
    assert load_high_score("classic", tmp_path) == 120


def test_scores_are_kept_per_variant(tmp_path: Path) -> None:
    save_high_score("classic", 50, tmp_path)
    save_high_score("openworld", 70, tmp_path)
    assert load_high_score("classic", tmp_path) == 50
    assert load_high_score("openworld", tmp_path) == 70
    assert load_high_score("segments", tmp_path) == 0


def test_corrupt_file_reads_zero(tmp_path: Path) -> None:
    highscore_path("classic", tmp_path).write_text("not a number", encoding="utf-8")
    assert load_high_score("classic", tmp_path) == 0
