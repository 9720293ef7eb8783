import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from study_lexicon import StudyLexiconConfig
from study_lexicon.cli import app


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def notes(tmp_path: Path, biology_text: str) -> Path:
    path = tmp_path / "notes.txt"
    path.write_text(biology_text, encoding="utf-8")
    return path


def test_extract_command(runner: CliRunner, notes: Path) -> None:
    result = runner.invoke(app, ["extract", str(notes), "--limit", "3"])
    assert result.exit_code == 0
    concepts = json.loads(result.stdout)
    assert 0 < len(concepts) <= 3
    assert concepts[0]["term"] == "Cells"


def test_keywords_command(runner: CliRunner, notes: Path, tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    StudyLexiconConfig().save(config_path)
    result = runner.invoke(app, ["keywords", str(notes), "--top", "3", "--config", str(config_path)])
    assert result.exit_code == 0
    assert result.stdout.splitlines()[0] == "cell"


def test_import_ask_and_rank(runner: CliRunner, notes: Path, tmp_path: Path) -> None:
    library = tmp_path / "topics.json"
    imported = runner.invoke(app, ["import", "Cell Biology", str(notes), "--library", str(library)])
    assert imported.exit_code == 0
    assert library.exists()

    asked = runner.invoke(app, ["ask", "what is osmosis", "--library", str(library)])
    assert asked.exit_code == 0
    assert json.loads(asked.stdout)["topic_name"] == "Cell Biology"

    ranked = runner.invoke(app, ["rank", "osmosis", "--library", str(library)])
    assert ranked.exit_code == 0
    assert "Cell Biology" in ranked.stdout


def test_ask_without_match_prints_clarification(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(app, ["ask", "what is osmosis", "--library", str(tmp_path / "empty.json")])
    assert result.exit_code == 0
    assert "rephrase" in result.stdout


def test_missing_file_exits_with_error(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(app, ["extract", str(tmp_path / "missing.txt")])
    assert result.exit_code == 1


def test_log_level_option(runner: CliRunner, notes: Path) -> None:
    assert runner.invoke(app, ["--log-level", "debug", "keywords", str(notes)]).exit_code == 0
    assert runner.invoke(app, ["--log-level", "loud", "keywords", str(notes)]).exit_code == 2
