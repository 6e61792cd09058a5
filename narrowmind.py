"""NarrowMind CLI — the user-facing interface to the sentence ranker.

Four commands: validate, info, query, shell.
Uses typer for argument parsing and rich for formatted terminal output.
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from engine.config import (
    CoOccurrenceMethod,
    ConfigError,
    ScoringConfig,
    load_scoring_config,
    validate_config,
)
from engine.index import CorpusIndex, load_filler_words
from engine.logging_config import setup_logging
from engine.ngrams import find_most_common_tokens_from_query_ngrams
from engine.ranker import rank_sentences
from engine.text import tokenize

app = typer.Typer(help="NarrowMind: statistical sentence ranking over a text corpus.")
console = Console()

DEFAULT_CORPUS = "input.txt"
DEFAULT_FILLERS = "fillers.json"
EXIT_COMMANDS = {"exit", "quit", "q"}

# The interactive shell blends in co-occurrence by default
SHELL_SCORING = ScoringConfig(0.70, 0.10, False, 0.20, CoOccurrenceMethod.JACCARD)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs")):
    setup_logging(logging.DEBUG if verbose else logging.INFO)


def _load_index(corpus_path: str, fillers_path: str) -> CorpusIndex:
    try:
        text = Path(corpus_path).read_text(encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Error reading {corpus_path}: {e}[/red]")
        raise typer.Exit(code=1)

    if not text.strip():
        console.print(f"[red]Error: {corpus_path} is empty[/red]")
        raise typer.Exit(code=1)

    with console.status("[bold blue]Building corpus index..."):
        return CorpusIndex(text, load_filler_words(fillers_path))


def _load_config(config_path: str | None, default: ScoringConfig | None = None) -> ScoringConfig:
    if config_path is None:
        return default or ScoringConfig()
    try:
        return load_scoring_config(config_path)
    except ConfigError as e:
        console.print(Panel("[bold red]✗ Invalid scoring config[/bold red]", border_style="red"))
        for err in e.errors:
            console.print(f"  [red]✗[/red] {err}")
        raise typer.Exit(code=1)


# ── Rendering ───────────────────────────────────────────────────────


def _print_stats(index: CorpusIndex) -> None:
    stats = index.stats()

    table = Table(title="Corpus Statistics")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")
    table.add_row("Sentences", f"{stats.sentences:,}")
    table.add_row("Tokens", f"{stats.tokens:,}")
    table.add_row("Filtered Tokens", f"{stats.filtered_tokens:,}")
    table.add_row("Unique Stemmed", f"{stats.unique_stemmed:,}")
    table.add_row("Filler Words Loaded", f"{stats.filler_words:,}")
    table.add_row("Co-occurrence Pairs", f"{stats.co_occurrence_pairs:,}")
    table.add_row("Avg Words/Sentence", f"{stats.avg_words_per_sentence:.2f}")
    console.print(table)

    if stats.top_words:
        top = ", ".join(f"{word} ({count})" for word, count in stats.top_words)
        console.print(f"[bold]Top {len(stats.top_words)} stems:[/bold] {top}")


def _print_config(config: ScoringConfig) -> None:
    co_occ = (
        f"{config.co_occ_weight:g} ({config.co_occ_method.value})"
        if config.co_occ_weight > 0
        else "off"
    )
    console.print(
        f"[bold]Weights:[/bold] TF-IDF {config.tfidf_weight:g} | "
        f"Character {config.char_weight:g} | Co-occurrence {co_occ}"
    )
    console.print(f"[bold]Filter fillers:[/bold] {'yes' if config.filter_fillers else 'no'}")


def _analyze_query(q: str, index: CorpusIndex, config: ScoringConfig, top_n: int) -> None:
    query_tokens = tokenize(q.lower())
    console.print(f'\n[bold]Query:[/bold] "{escape(q)}"  ({len(query_tokens)} tokens)')

    table = Table(title="Token Statistics")
    table.add_column("Token", style="cyan")
    table.add_column("Stem")
    table.add_column("TF", justify="right")
    table.add_column("IDF", justify="right")
    table.add_column("Top Co-occurrences")

    for token in query_tokens:
        stats = index.get_token_stats(token)
        co_occ = ""
        if not stats.is_filler:
            co_occ = ", ".join(f"{w}({c})" for w, c in index.get_top_co_occurrences(token, 3))
        label = f"{stats.token} [dim]\\[FILLER][/dim]" if stats.is_filler else stats.token
        table.add_row(label, stats.stemmed, f"{stats.tf:.4f}", f"{stats.idf:.4f}", co_occ)
    console.print(table)

    common = index.common_co_occurrences(query_tokens)
    if common:
        console.print("[bold]Common co-occurrences:[/bold]")
        for i, c in enumerate(common, 1):
            console.print(
                f"  {i}. {c.word} — with {c.token_count} query tokens "
                f"({', '.join(c.tokens)}) \\[total: {c.total_count}]"
            )

    bigram_tokens = find_most_common_tokens_from_query_ngrams(q, index, 2, False, 5)
    if bigram_tokens:
        console.print("[bold]Most common tokens from query bigrams:[/bold]")
        for i, (token, count) in enumerate(bigram_tokens, 1):
            console.print(f"  {i}. {token} ({count} matching n-gram{'s' if count != 1 else ''})")
    else:
        console.print("[dim]No matching n-grams found in corpus.[/dim]")

    console.print()
    _print_config(config)
    results = rank_sentences(q, index, top_n, config)

    ranked = Table()
    ranked.add_column("#", style="dim", width=3)
    ranked.add_column("Score", justify="right", width=8)
    ranked.add_column("Sentence", min_width=40)
    for i, (sentence, score) in enumerate(results, 1):
        ranked.add_row(str(i), f"{score:.4f}", escape(sentence))
    console.print(ranked)
    console.print(f"\n{len(results)} relevant sentence(s) found")


# ── validate ────────────────────────────────────────────────────────


@app.command()
def validate(config_path: str = typer.Argument(..., help="Path to scoring config JSON")):
    """Check a scoring config for syntactic and semantic errors."""
    passed, errors = validate_config(config_path)

    if passed:
        console.print(
            Panel("[bold green]✓ Validation passed[/bold green]", border_style="green")
        )
    else:
        console.print(
            Panel("[bold red]✗ Validation failed[/bold red]", border_style="red")
        )
        for err in errors:
            console.print(f"  [red]✗[/red] {err}")
        raise typer.Exit(code=1)


# ── info ────────────────────────────────────────────────────────────


@app.command()
def info(
    corpus_path: str = typer.Argument(DEFAULT_CORPUS, help="Path to corpus text"),
    fillers: str = typer.Option(DEFAULT_FILLERS, "--fillers", help="Path to filler words JSON"),
):
    """Index the corpus and show its statistics."""
    index = _load_index(corpus_path, fillers)
    _print_stats(index)


# ── query ───────────────────────────────────────────────────────────


@app.command()
def query(
    corpus_path: str = typer.Argument(DEFAULT_CORPUS, help="Path to corpus text"),
    q: str = typer.Option("", "--q", help="Search query string"),
    config_path: str | None = typer.Option(None, "--config", help="Path to scoring config JSON"),
    top_n: int = typer.Option(0, "--top-n", min=0, help="Max results (0 = all)"),
    fillers: str = typer.Option(DEFAULT_FILLERS, "--fillers", help="Path to filler words JSON"),
):
    """Analyze a query and display ranked sentences."""
    if not q.strip():
        console.print("[red]Error: --q is required[/red]")
        raise typer.Exit(code=1)

    config = _load_config(config_path)
    index = _load_index(corpus_path, fillers)
    _analyze_query(q, index, config, top_n)


# ── shell ───────────────────────────────────────────────────────────


@app.command()
def shell(
    corpus_path: str = typer.Argument(DEFAULT_CORPUS, help="Path to corpus text"),
    config_path: str | None = typer.Option(
        None, "--config", help="Path to scoring config JSON (default: 0.7 TF-IDF, 0.1 char, 0.2 Jaccard)"
    ),
    top_n: int = typer.Option(0, "--top-n", min=0, help="Max results (0 = all)"),
    fillers: str = typer.Option(DEFAULT_FILLERS, "--fillers", help="Path to filler words JSON"),
):
    """Interactive prompt: one query per line, 'exit' to leave."""
    config = _load_config(config_path, SHELL_SCORING)
    index = _load_index(corpus_path, fillers)
    _print_stats(index)
    console.print("\nType 'exit', 'quit', or 'q' to exit the shell.\n")

    while True:
        try:
            line = console.input("[bold]=> [/bold]")
        except EOFError:
            break
        if line.strip().lower() in EXIT_COMMANDS:
            break
        if not line.strip():
            continue
        try:
            _analyze_query(line, index, config, top_n)
        except Exception as e:
            console.print(f"[red]Error processing query: {e}[/red]")

    console.print("Goodbye!")


if __name__ == "__main__":
    app()
