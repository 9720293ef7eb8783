"""Command line interface for Study Lexicon."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer

from .config import StudyLexiconConfig, load_config
from .extraction import ConceptExtractor, extract_keywords
from .logging import configure_logging, get_logger
from .model import StudyLexicon
from .utils import normalise_text

LOGGER = get_logger(__name__)

DEFAULT_LIBRARY = Path("topics.json")
CONFIG_OPTION = typer.Option(
    None,
    "--config",
    help="Path to a YAML or JSON configuration file.",
)
LIBRARY_OPTION = typer.Option(
    DEFAULT_LIBRARY,
    "--library",
    help="Topic library JSON file.",
)
LIMIT_OPTION = typer.Option(
    None,
    "--limit",
    help="Maximum number of results to print.",
)
TOP_OPTION = typer.Option(
    20,
    "--top",
    help="Number of keywords to print.",
)
LOG_LEVEL_OPTION = typer.Option(
    "WARNING",
    "--log-level",
    help="Logging level (DEBUG, INFO, WARNING, ...).",
)

app = typer.Typer(
    help="Extract concepts from study notes and answer questions against a topic library."
)


@app.callback()
def main(log_level: str = LOG_LEVEL_OPTION) -> None:
    try:
        configure_logging(log_level, logger_name=__name__)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level") from exc


def _load_config(config_path: Path | None) -> StudyLexiconConfig:
    try:
        return load_config(config_path)
    except (OSError, TypeError, ValueError) as exc:
        typer.echo(f"Error: could not load configuration: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def _read_text(path: Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        typer.echo(f"Error: could not read {path}: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def _load_lexicon(library: Path, config_path: Path | None) -> StudyLexicon:
    config = _load_config(config_path)
    try:
        return StudyLexicon.from_library(library, config)
    except (OSError, TypeError, ValueError) as exc:
        typer.echo(f"Error: could not load topic library {library}: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@app.command()
def extract(
    file: Path = typer.Argument(..., help="Text file to extract concepts from."),
    limit: int | None = LIMIT_OPTION,
    config_path: Path | None = CONFIG_OPTION,
) -> None:
    """Print the concepts extracted from FILE as JSON."""

    config = _load_config(config_path)
    concepts = ConceptExtractor(config.extraction, config.tokenizer).extract(_read_text(file))
    if limit is not None:
        concepts = concepts[: max(limit, 0)]
    _echo_json([concept.to_dict() for concept in concepts])


@app.command()
def keywords(
    file: Path = typer.Argument(..., help="Text file to score."),
    top: int = TOP_OPTION,
    config_path: Path | None = CONFIG_OPTION,
) -> None:
    """Print the top keywords of FILE, one per line."""

    config = _load_config(config_path)
    for keyword in extract_keywords(_read_text(file), top, config.tokenizer):
        typer.echo(keyword)


@app.command("import")
def import_topic(
    name: str = typer.Argument(..., help="Topic name."),
    file: Path = typer.Argument(..., help="Text file holding the topic content."),
    library: Path = LIBRARY_OPTION,
    config_path: Path | None = CONFIG_OPTION,
) -> None:
    """Build a topic from FILE and store it in the topic library."""

    lexicon = _load_lexicon(library, config_path)
    topic = lexicon.import_text(name, _read_text(file))
    lexicon.save(library)
    LOGGER.info("Saved %d topics to %s", len(lexicon.library), library)
    typer.echo(f"Imported {topic.name!r}: {len(topic.concepts)} concepts, {len(topic.keywords)} keywords")


@app.command()
def ask(
    query: str = typer.Argument(..., help="Question to answer."),
    library: Path = LIBRARY_OPTION,
    config_path: Path | None = CONFIG_OPTION,
) -> None:
    """Find the best topic and concept for QUERY."""

    lexicon = _load_lexicon(library, config_path)
    answer = lexicon.ask(normalise_text(query))
    if not lexicon.matcher.is_good_match(answer.match.score):
        typer.echo("No matching topic found. Could you rephrase or name the topic?")
        return
    _echo_json(answer.to_dict())


@app.command()
def rank(
    query: str = typer.Argument(..., help="Query to rank topics against."),
    library: Path = LIBRARY_OPTION,
    limit: int | None = LIMIT_OPTION,
    config_path: Path | None = CONFIG_OPTION,
) -> None:
    """Print topics ordered by similarity to QUERY."""

    lexicon = _load_lexicon(library, config_path)
    for item in lexicon.rank(normalise_text(query), limit):
        typer.echo(f"{item.score:.3f}\t{item.topic_name}")


if __name__ == "__main__":
    app()
