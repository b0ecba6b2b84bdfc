"""Tests for the pi-complete command line entry point."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from pi.complete.cli import main


def test_prints_match_and_dropdown(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--text", "<>getA"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "<>getA"
    assert out[1] == "match: '<>getA' at [0, 6)"
    assert out[2:] == ["→ getAnchorKey", "  getAnchorOffset"]


def test_keys_commit_entity(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--text", "x <>get", "--keys", "down,down,tab"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["x [getEntityAt]"]


def test_list_vocabulary(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--list-vocabulary"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("All possible suggestions: getSelection, getAnchorKey")


def test_config_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "autocomplete.json"
    path.write_text(json.dumps({"trigger": "@", "vocabulary": ["alice", "bob"]}))
    assert main(["--config", str(path), "--text", "hi @b", "--keys", "enter"]) == 0
    assert capsys.readouterr().out.splitlines() == ["hi [bob]"]


def test_trigger_override(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--trigger", "#", "--text", "#getT"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert "→ getText" in out


def test_invalid_trigger_exit_code(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--trigger", ""]) == 2
    assert "trigger must not be empty" in capsys.readouterr().err


def test_wrongly_typed_config_exit_code(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "autocomplete.json"
    path.write_text(json.dumps({"maxSuggestions": None}))
    assert main(["--config", str(path), "--text", "<>get"]) == 2
    assert "maxSuggestions must be an integer" in capsys.readouterr().err
