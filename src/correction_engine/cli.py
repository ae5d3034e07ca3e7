"""Command-line interface for the correction engine.

Uses Typer for a type-hinted CLI with Rich output.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console

# Load environment variables from .env files
# Priority: local .env > ~/.correction-engine/.env
_user_env = Path.home() / ".correction-engine" / ".env"
if _user_env.exists():
    load_dotenv(_user_env)
load_dotenv()
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from correction_engine import __version__
from correction_engine.config import (
    SETTINGS_FILE,
    EngineSettings,
    PipelineOptions,
    get_data_dir,
    load_settings,
    save_settings,
)
from correction_engine.corrections import CorrectionStatus
from correction_engine.engine import CorrectionEngine
from correction_engine.errors import (
    ConfigurationError,
    ImportFormatError,
    ValidationError,
    format_error_for_display,
)
from correction_engine.logging import LogLevel, enable_file_logging, set_verbosity
from correction_engine.storage import JsonFileStorage
from correction_engine.text import fold_case, similarity_ratio

app = typer.Typer(
    name="correction-engine",
    help="Adaptive correction and text normalization for speech transcripts.",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()

_state: dict[str, Path | None] = {"data_dir": None}


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"correction-engine version {__version__}")
        raise typer.Exit()


def get_engine() -> CorrectionEngine:
    """Create an engine over the selected data directory and load its state.

    Raises:
        typer.Exit: If the settings file is invalid
    """
    data_dir = _data_dir()
    try:
        settings = load_settings(data_dir / SETTINGS_FILE)
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {escape(format_error_for_display(e))}")
        raise typer.Exit(1)

    engine = CorrectionEngine(JsonFileStorage(data_dir), settings)
    engine.load()
    return engine


@app.callback()
def main(
    data_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--data-dir",
            "-d",
            help="Directory holding settings and learned data.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Show informational log messages."),
    ] = False,
    log_file: Annotated[
        Optional[Path],
        typer.Option("--log-file", help="Also write detailed logs to this file."),
    ] = None,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Correction Engine - learns from your edits to fix speech transcripts.

    [bold]process[/bold]: Normalize a raw transcript with learned corrections.

    [bold]learn[/bold]: Learn corrections from an edited transcript.

    [bold]prompt[/bold]: Show the recognizer priming prompt built from your profile.
    """
    _state["data_dir"] = data_dir
    if verbose:
        set_verbosity(LogLevel.VERBOSE)
    if log_file:
        enable_file_logging(log_file)


def _data_dir() -> Path:
    return _state["data_dir"] or get_data_dir()


@app.command()
def init(
    language: Annotated[
        str,
        typer.Option("--language", "-l", help="Default recognizer language code"),
    ] = "tr",
    paragraph_break: Annotated[
        bool,
        typer.Option("--paragraph-break", help="Put each sentence on its own line"),
    ] = False,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing settings file"),
    ] = False,
) -> None:
    """Create the data directory with a default settings file."""
    settings_path = _data_dir() / SETTINGS_FILE
    if settings_path.exists() and not force:
        console.print(f"[red]Error:[/red] Settings already exist at {settings_path}")
        console.print("[dim]Use --force to overwrite.[/dim]")
        raise typer.Exit(1)

    settings = EngineSettings(
        language=language,
        pipeline=PipelineOptions(paragraph_break=paragraph_break),
    )
    save_settings(settings, settings_path)
    console.print(f"[green]Settings written to {settings_path}[/green]")


@app.command()
def info() -> None:
    """Show the data directory, settings and learned data totals."""
    engine = get_engine()
    settings = engine.settings
    snapshot = engine.profile_snapshot()

    enabled = [name for name, on in settings.pipeline.model_dump().items() if on]
    console.print(Panel(
        f"[cyan]Data directory:[/cyan] {_data_dir()}\n"
        f"[cyan]Language:[/cyan] {settings.language}\n"
        f"[cyan]Pipeline stages:[/cyan] {', '.join(enabled) or '-'}\n"
        f"[cyan]Maintenance every:[/cyan] {settings.maintenance_interval} transcriptions\n"
        f"[cyan]Prompt limit:[/cyan] {settings.max_prompt_length} characters\n\n"
        f"[cyan]Corrections:[/cyan] {len(engine.corrections)}\n"
        f"[cyan]Transcriptions:[/cyan] {snapshot.total_transcriptions}",
        title="Correction Engine",
    ))


# =============================================================================
# Transcript Commands
# =============================================================================


@app.command()
def process(
    text: Annotated[str, typer.Argument(help="Raw transcript text")],
    language: Annotated[
        Optional[str],
        typer.Option("--language", "-l", help="Recognizer language code (default from settings)"),
    ] = None,
) -> None:
    """Normalize a transcript and learn from the fixes made to it."""
    engine = get_engine()
    result = engine.process_transcript(text, language)

    if not result:
        console.print("[yellow]Transcript rejected as a recognizer hallucination.[/yellow]")
        return

    typer.echo(result)


@app.command()
def learn(
    original: Annotated[str, typer.Argument(help="Transcript as recognized")],
    edited: Annotated[str, typer.Argument(help="Transcript after your edit")],
    language: Annotated[
        Optional[str],
        typer.Option("--language", "-l", help="Language code for stop-words and suffixes"),
    ] = None,
) -> None:
    """Learn corrections from an edited transcript."""
    engine = get_engine()
    learned = engine.learn_from_edit(original, edited, language)

    if not learned.direct and not learned.stem:
        console.print("[yellow]No corrections learned.[/yellow]")
        return

    table = Table(title="Learned Corrections")
    table.add_column("Wrong", style="red")
    table.add_column("Right", style="green")
    table.add_column("Kind", style="dim")
    table.add_column("Similarity", justify="right")
    for kind, pairs in (("word", learned.direct), ("stem", learned.stem)):
        for wrong, right in pairs:
            table.add_row(wrong, right, kind, f"{similarity_ratio(wrong, right):.0%}")
    console.print(table)


@app.command()
def prompt(
    language: Annotated[
        Optional[str],
        typer.Option("--language", "-l", help="Recognizer language code"),
    ] = None,
    preview: Annotated[
        bool,
        typer.Option("--preview", "-p", help="Show the prompt layers separately"),
    ] = False,
) -> None:
    """Show the recognizer priming prompt."""
    engine = get_engine()

    if not preview:
        typer.echo(engine.build_prompt(language))
        return

    layers = engine.prompt_preview(language)
    console.print(Panel(
        f"[cyan]Base:[/cyan] {layers.base_prompt}\n"
        f"[cyan]Domain:[/cyan] {layers.domain_addition.strip() or '-'}\n"
        f"[cyan]User terms:[/cyan] {layers.user_terms or '-'}\n"
        f"[cyan]Length:[/cyan] {layers.total_length}/{layers.max_length}",
        title="Dynamic Prompt",
    ))


# =============================================================================
# Profile Commands
# =============================================================================


@app.command()
def profile() -> None:
    """Show profile statistics."""
    engine = get_engine()
    snapshot = engine.profile_snapshot()

    words = ", ".join(snapshot.frequent_words[:15]) or "-"
    console.print(Panel(
        f"[cyan]Domain:[/cyan] {snapshot.domain.label}\n"
        f"[cyan]Transcriptions:[/cyan] {snapshot.total_transcriptions}\n"
        f"[cyan]Corrections:[/cyan] {snapshot.total_corrections}\n"
        f"[cyan]N-grams:[/cyan] {len(snapshot.ngrams)}\n"
        f"[cyan]Frequent words:[/cyan] {words}",
        title="User Profile",
    ))


@app.command()
def domain() -> None:
    """Show the detected domain and keyword scores."""
    engine = get_engine()
    info = engine.domain_info()

    table = Table(title=f"Detected Domain: {info.detected.label}")
    table.add_column("Domain", style="cyan")
    table.add_column("Score", justify="right")
    for name, score in info.scores.items():
        table.add_row(name.label, f"{score:.0f}")
    console.print(table)
    console.print(f"[dim]{info.explanation}[/dim]")


@app.command()
def ngrams(
    limit: Annotated[
        int,
        typer.Option("--limit", "-n", help="Maximum number of n-grams to show"),
    ] = 20,
) -> None:
    """Show the most frequent n-grams."""
    engine = get_engine()
    entries = engine.ngram_stats()

    if not entries:
        console.print("[yellow]No n-grams recorded yet.[/yellow]")
        return

    table = Table(title=f"N-grams ({len(entries)} total)")
    table.add_column("N-gram", style="cyan")
    table.add_column("Count", justify="right")
    for entry in entries[:limit]:
        table.add_row(entry.ngram, str(entry.count))
    console.print(table)


# =============================================================================
# Data Management Commands
# =============================================================================


@app.command("export")
def export_cmd(
    output: Annotated[
        Optional[Path],
        typer.Argument(help="File to write (prints to stdout when omitted)"),
    ] = None,
) -> None:
    """Export learned corrections as JSON."""
    engine = get_engine()
    document = engine.export_corrections()

    if output is None:
        typer.echo(document)
        return

    output.write_text(document, encoding="utf-8")
    console.print(f"[green]Exported {len(engine.corrections)} corrections to {output}[/green]")


@app.command("import")
def import_cmd(
    source: Annotated[Path, typer.Argument(help="JSON file produced by 'export'")],
) -> None:
    """Replace learned corrections with an exported file."""
    if not source.exists():
        console.print(f"[red]Error:[/red] File not found: {source}")
        raise typer.Exit(1)

    engine = get_engine()
    try:
        count = engine.import_corrections(source.read_text(encoding="utf-8"))
    except ImportFormatError as e:
        console.print(f"[red]Error:[/red] {escape(format_error_for_display(e))}")
        raise typer.Exit(1)

    console.print(f"[green]Imported {count} corrections.[/green]")


@app.command()
def reset(
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation"),
    ] = False,
) -> None:
    """Forget all learned corrections and profile statistics.

    This cannot be undone.
    """
    if not yes:
        if not typer.confirm("Delete all learned corrections and profile data?"):
            console.print("[yellow]Cancelled.[/yellow]")
            return

    engine = get_engine()
    engine.reset()
    console.print("[green]Learning data reset.[/green]")


@app.command()
def maintain() -> None:
    """Recalculate correction statuses and purge stale deprecated ones."""
    engine = get_engine()
    changed, purged = engine.run_maintenance()
    console.print(f"[green]{changed} status changes, {purged} corrections purged.[/green]")


# =============================================================================
# Correction Commands
# =============================================================================

corrections_app = typer.Typer(
    name="corrections",
    help="Inspect and edit learned corrections.",
)
app.add_typer(corrections_app, name="corrections")

_STATUS_STYLES = {
    CorrectionStatus.PENDING: "dim",
    CorrectionStatus.CONFIRMED: "yellow",
    CorrectionStatus.ACTIVE: "green",
    CorrectionStatus.DEPRECATED: "red",
}


@corrections_app.command("list")
def corrections_list(
    status: Annotated[
        Optional[CorrectionStatus],
        typer.Option("--status", "-s", help="Only show corrections in this state"),
    ] = None,
) -> None:
    """List learned corrections with their confidence."""
    engine = get_engine()
    views = engine.list_corrections()
    if status is not None:
        views = [v for v in views if v.record.status == status]

    if not views:
        console.print("[yellow]No corrections found.[/yellow]")
        return

    table = Table(title=f"Corrections ({len(views)})")
    table.add_column("Wrong", style="red")
    table.add_column("Right", style="green")
    table.add_column("Count", justify="right")
    table.add_column("Reverts", justify="right")
    table.add_column("Confidence", justify="right")
    table.add_column("Status")
    table.add_column("Source", style="dim")

    for view in views:
        record = view.record
        style = _STATUS_STYLES[record.status]
        table.add_row(
            record.wrong,
            record.right,
            str(record.count),
            str(record.revert_count),
            f"{view.confidence:.2f}",
            f"[{style}]{record.status.value}[/{style}]",
            record.source.value,
        )
    console.print(table)


@corrections_app.command("add")
def corrections_add(
    wrong: Annotated[str, typer.Argument(help="Word as the recognizer writes it")],
    right: Annotated[str, typer.Argument(help="Correct spelling")],
) -> None:
    """Add a correction by hand."""
    engine = get_engine()
    try:
        engine.add_correction(wrong, right)
    except ValidationError as e:
        console.print(f"[red]Error:[/red] {escape(format_error_for_display(e))}")
        raise typer.Exit(1)

    console.print(f"[green]Added:[/green] {fold_case(wrong.strip())} -> {right.strip()}")


def _require(done: bool, message: str) -> None:
    if not done:
        console.print(f"[red]Error:[/red] {message}")
        raise typer.Exit(1)


@corrections_app.command("remove")
def corrections_remove(
    wrong: Annotated[str, typer.Argument(help="Word to remove")],
) -> None:
    """Delete a correction."""
    engine = get_engine()
    _require(engine.remove_correction(wrong), f"Correction '{wrong}' not found.")
    console.print(f"[green]Removed:[/green] {wrong}")


@corrections_app.command("promote")
def corrections_promote(
    wrong: Annotated[str, typer.Argument(help="Word to promote")],
) -> None:
    """Make a pending or confirmed correction active immediately."""
    engine = get_engine()
    _require(
        engine.promote_correction(wrong),
        f"Correction '{wrong}' not found or not pending/confirmed.",
    )
    console.print(f"[green]Promoted:[/green] {wrong} is now active")


@corrections_app.command("demote")
def corrections_demote(
    wrong: Annotated[str, typer.Argument(help="Word to demote")],
) -> None:
    """Deprecate a correction so it is no longer applied."""
    engine = get_engine()
    _require(engine.demote_correction(wrong), f"Correction '{wrong}' not found.")
    console.print(f"[yellow]Demoted:[/yellow] {wrong} is now deprecated")


@corrections_app.command("revert")
def corrections_revert(
    wrong: Annotated[str, typer.Argument(help="Word the correction replaced")],
    right: Annotated[str, typer.Argument(help="Replacement you undid")],
) -> None:
    """Record that you undid an automatic correction."""
    engine = get_engine()
    _require(
        engine.report_revert(wrong, right),
        f"No correction '{wrong}' -> '{right}' found.",
    )
    console.print(f"[yellow]Revert recorded:[/yellow] {wrong} -> {right}")
