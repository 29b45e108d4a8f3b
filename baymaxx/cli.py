#!/usr/bin/env python3
"""
BayMaxx CLI - run and inspect companion turns from the terminal
Management and operation tool built with Typer
"""

import asyncio
import uuid
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .adapters.ai.openai import OpenAIAdapter
from .adapters.analyzers import FacialExpressionDetector, TextSentimentAnalyzer, VoiceEmotionDetector
from .adapters.medical import KnowledgeBaseDiagnoser
from .adapters.speech import OpenAISpeechSynthesizer, WhisperTranscriber
from .adapters.storage import FileStorageAdapter
from .core.config import BaymaxxSettings, get_settings
from .core.exceptions import BaymaxxException, PersistenceError
from .core.logging import BaymaxxLogger, get_logger, log_error
from .domain.models import TurnInput
from .domain.services import (
    ContextMemoryStore,
    InteractionOrchestrator,
    MedicalTriggerDetector,
    MoodHistoryHook,
)
from .domain.services.hooks import mood_trend

app = typer.Typer(
    name="baymaxx",
    help="BayMaxx - multi-modal companion interaction CLI",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()
logger = get_logger(__name__)


def build_orchestrator(
    settings: BaymaxxSettings, store: Optional[FileStorageAdapter] = None
) -> InteractionOrchestrator:
    """
    Wire settings into an orchestrator

    Unconfigured collaborators (no API key, no detector URL) are left out
    and the pipeline runs degraded without them.
    """
    store = store or FileStorageAdapter(settings.data_dir)

    analyzers = [TextSentimentAnalyzer()]
    if settings.detectors.voice_url:
        analyzers.append(
            VoiceEmotionDetector(settings.detectors.voice_url, settings.detectors.timeout)
        )
    if settings.detectors.facial_url:
        analyzers.append(
            FacialExpressionDetector(settings.detectors.facial_url, settings.detectors.timeout)
        )

    ai_provider = None
    transcriber = None
    synthesizer = None
    if settings.ai.is_configured:
        ai_provider = OpenAIAdapter(
            api_key=settings.ai.openai_api_key,
            model=settings.ai.openai_model,
            timeout=settings.ai.openai_timeout,
            base_url=settings.ai.openai_base_url,
        )
        transcriber = WhisperTranscriber(
            api_key=settings.ai.openai_api_key,
            model=settings.ai.transcription_model,
            timeout=settings.ai.openai_timeout,
            base_url=settings.ai.openai_base_url,
        )
        synthesizer = OpenAISpeechSynthesizer(
            api_key=settings.ai.openai_api_key,
            model=settings.ai.speech_model,
            voice=settings.ai.speech_voice,
            timeout=settings.ai.openai_timeout,
            base_url=settings.ai.openai_base_url,
        )

    orchestration = settings.orchestration
    return InteractionOrchestrator(
        analyzers,
        ai_provider,
        store,
        medical_detector=MedicalTriggerDetector(orchestration.medical_keywords),
        diagnoser=KnowledgeBaseDiagnoser(),
        transcriber=transcriber,
        synthesizer=synthesizer,
        hooks=[MoodHistoryHook(store)],
        context_limit=orchestration.context_limit,
        analyzer_timeout=orchestration.analyzer_timeout,
        diagnosis_timeout=orchestration.diagnosis_timeout,
        fallback_response=orchestration.fallback_response,
    )


def _read_bytes(path: Optional[Path]) -> Optional[bytes]:
    if path is None:
        return None
    if not path.is_file():
        console.print(f"[red]Error: file not found: {path}[/red]")
        raise typer.Exit(1)
    return path.read_bytes()


@app.command()
def turn(
    user: str = typer.Option(..., "--user", "-u", help="User ID"),
    session: Optional[str] = typer.Option(None, "--session", "-s", help="Session ID (new session if omitted)"),
    text: Optional[str] = typer.Option(None, "--text", "-t", help="Typed message"),
    audio: Optional[Path] = typer.Option(None, "--audio", help="Recorded speech (wav)"),
    image: Optional[Path] = typer.Option(None, "--image", help="Face image (jpg)"),
    reply_audio: Optional[Path] = typer.Option(
        None, "--reply-audio", help="Write the spoken reply (mp3) here, voice turns only"
    ),
):
    """
    Run one interaction turn
    """
    settings = get_settings()
    BaymaxxLogger.configure("DEBUG" if settings.debug else settings.log_level)

    turn_input = TurnInput(
        text=text,
        audio=_read_bytes(audio),
        image=_read_bytes(image),
        session_id=session or str(uuid.uuid4()),
    )
    orchestrator = build_orchestrator(settings)

    try:
        result = asyncio.run(orchestrator.process_turn(user, turn_input))
    except PersistenceError as e:
        console.print(Panel(
            f"{escape(e.details.get('response', ''))}\n\n"
            f"[yellow]Warning: the interaction was not recorded ({escape(e.message)})[/yellow]",
            title="BayMaxx",
            border_style="yellow",
        ))
        raise typer.Exit(2)
    except BaymaxxException as e:
        log_error(logger, e, {"user_id": user, "session_id": turn_input.session_id})
        console.print(f"[red]Error {escape('[' + e.error_code + ']')}: {escape(e.message)}[/red]")
        raise typer.Exit(1)

    emotion = result.fused_emotion
    body = (
        f"{escape(result.response)}\n\n"
        f"[bold]Emotion:[/bold] {emotion.label.value} ({emotion.confidence:.2f})\n"
        f"[bold]Type:[/bold] {result.interaction_type.value}\n"
        f"[bold]Session:[/bold] {result.session_id}"
    )
    if result.medical_flag.triggered:
        body += f"\n[bold red]Symptoms:[/bold red] {', '.join(result.medical_flag.matched_terms)}"
        if result.diagnosis is not None and not result.diagnosis.is_empty:
            body += f"\n[bold]Possible conditions:[/bold] {result.diagnosis.summary()}"
    if result.context_degraded:
        body += "\n[yellow]Context unavailable for this turn[/yellow]"

    console.print(Panel(body, title="BayMaxx", border_style="blue"))

    if reply_audio is not None:
        if result.reply_audio:
            reply_audio.write_bytes(result.reply_audio)
            console.print(f"Spoken reply written to {escape(str(reply_audio))}")
        else:
            console.print("[yellow]No spoken reply for this turn[/yellow]")


@app.command()
def history(
    user: str = typer.Option(..., "--user", "-u", help="User ID"),
    session: str = typer.Option(..., "--session", "-s", help="Session ID"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Number of turns"),
):
    """
    Show the recent context window of a session
    """
    settings = get_settings()
    memory = ContextMemoryStore(
        FileStorageAdapter(settings.data_dir), settings.orchestration.context_limit
    )
    interactions = asyncio.run(memory.get_recent(user, session, limit))

    if not interactions:
        console.print("[yellow]No interactions recorded for this session[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Time", style="cyan")
    table.add_column("Query", style="white")
    table.add_column("Response", style="white")
    table.add_column("Emotion", style="green")

    for interaction in interactions:
        table.add_row(
            interaction.created_at.strftime("%Y-%m-%d %H:%M:%S"),
            interaction.query,
            interaction.response,
            f"{interaction.fused_emotion.label.value} ({interaction.fused_emotion.confidence:.2f})",
        )

    console.print(table)


@app.command()
def moods(
    user: str = typer.Option(..., "--user", "-u", help="User ID"),
    limit: int = typer.Option(20, "--limit", "-n", help="Number of entries"),
):
    """
    Show a user's mood history
    """
    settings = get_settings()
    store = FileStorageAdapter(settings.data_dir)
    entries = asyncio.run(store.list_moods(user, limit))

    if not entries:
        console.print("[yellow]No mood history for this user[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Time", style="cyan")
    table.add_column("Mood", style="green")
    table.add_column("Confidence", justify="right", style="yellow")

    for entry in entries:
        table.add_row(
            entry.recorded_at.strftime("%Y-%m-%d %H:%M:%S"),
            entry.label,
            f"{entry.confidence:.2f}",
        )

    console.print(table)
    console.print(f"Trend: [bold]{mood_trend(entries)}[/bold]")


@app.command()
def version():
    """
    Show version information
    """
    console.print(Panel(
        f"[bold blue]BayMaxx CLI[/bold blue] v{__version__}\n"
        f"Built with [bold]Typer[/bold]",
        title="Version",
    ))


if __name__ == "__main__":
    app()
