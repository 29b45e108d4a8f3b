"""
Post-turn hooks
Side effects that run after a turn's primary result is computed
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from ...core.logging import get_logger, log_degraded
from ..models.emotion import NEGATIVE_EMOTIONS, POSITIVE_EMOTIONS, EmotionLabel
from ..models.interaction import Interaction, MoodEntry
from ..ports.storage_port import IMoodHistoryStore

logger = get_logger(__name__)


class PostTurnHook(ABC):
    """Invoked once per persisted interaction; failures are logged and dropped"""

    name: str = "hook"

    @abstractmethod
    async def on_turn_completed(self, interaction: Interaction) -> None:
        """Handle a finished turn"""


class MoodHistoryHook(PostTurnHook):
    """Appends the turn's fused emotion to the user's mood history"""

    name = "mood_history"

    def __init__(self, store: IMoodHistoryStore):
        self._store = store

    async def on_turn_completed(self, interaction: Interaction) -> None:
        entry = MoodEntry(
            user_id=interaction.user_id,
            session_id=interaction.session_id,
            label=interaction.fused_emotion.label.value,
            confidence=interaction.fused_emotion.confidence,
            samples=tuple(s.to_dict() for s in interaction.samples),
            recorded_at=interaction.created_at,
        )
        await self._store.record_mood(entry)


async def run_hooks(hooks: Sequence[PostTurnHook], interaction: Interaction) -> list[str]:
    """
    Run hooks sequentially

    Returns:
        list[str]: names of hooks that failed
    """
    failed = []
    for hook in hooks:
        try:
            await hook.on_turn_completed(interaction)
        except Exception as e:
            log_degraded(logger, f"hook:{hook.name}", e, user_id=interaction.user_id)
            failed.append(hook.name)
    return failed


def mood_trend(entries: Sequence[MoodEntry]) -> str:
    """
    Rough direction of a mood history

    Returns:
        str: "improving", "declining" or "stable"
    """
    labels = [EmotionLabel.parse(e.label) for e in entries]
    labels = [label for label in labels if label != EmotionLabel.UNKNOWN]
    if not labels:
        return "stable"

    positive_ratio = sum(1 for label in labels if label in POSITIVE_EMOTIONS) / len(labels)
    negative_ratio = sum(1 for label in labels if label in NEGATIVE_EMOTIONS) / len(labels)

    if positive_ratio > 0.6:
        return "improving"
    elif negative_ratio > 0.6:
        return "declining"
    return "stable"
