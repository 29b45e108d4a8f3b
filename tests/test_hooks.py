"""
Post-turn hook tests
"""

from datetime import datetime, timezone

import pytest

from baymaxx.domain.models.emotion import EmotionLabel, EmotionSample, FusedEmotion, Modality
from baymaxx.domain.models.interaction import Interaction, InteractionType, MoodEntry
from baymaxx.domain.ports.storage_port import IMoodHistoryStore
from baymaxx.domain.services.hooks import MoodHistoryHook, PostTurnHook, mood_trend, run_hooks


class MockMoodStore(IMoodHistoryStore):
    def __init__(self):
        self.entries: list[MoodEntry] = []

    async def record_mood(self, entry: MoodEntry) -> None:
        self.entries.append(entry)

    async def list_moods(self, user_id, limit=20):
        return self.entries[:limit]


class ExplodingHook(PostTurnHook):
    name = "exploding"

    async def on_turn_completed(self, interaction):
        raise RuntimeError("boom")


def make_interaction() -> Interaction:
    return Interaction(
        user_id="u1",
        session_id="s1",
        interaction_type=InteractionType.TEXT,
        query="so tired",
        response="Rest well.",
        fused_emotion=FusedEmotion(EmotionLabel.SAD, 0.2),
        samples=(EmotionSample(Modality.TEXT, EmotionLabel.SAD, 0.2, valence=-0.2),),
        created_at=datetime(2026, 2, 2, tzinfo=timezone.utc),
    )


def mood(label: str) -> MoodEntry:
    return MoodEntry("u1", "s1", label, 0.5)


class TestMoodHistoryHook:
    @pytest.mark.asyncio
    async def test_records_fused_emotion(self):
        store = MockMoodStore()
        interaction = make_interaction()

        await MoodHistoryHook(store).on_turn_completed(interaction)

        entry = store.entries[0]
        assert entry.label == "Sad"
        assert entry.confidence == 0.2
        assert entry.recorded_at == interaction.created_at
        assert entry.samples == ({"modality": "Text", "label": "Sad", "confidence": 0.2, "valence": -0.2},)


class TestRunHooks:
    @pytest.mark.asyncio
    async def test_failure_does_not_stop_later_hooks(self):
        store = MockMoodStore()

        failed = await run_hooks([ExplodingHook(), MoodHistoryHook(store)], make_interaction())

        assert failed == ["exploding"]
        assert len(store.entries) == 1

    @pytest.mark.asyncio
    async def test_no_hooks(self):
        assert await run_hooks([], make_interaction()) == []


class TestMoodTrend:
    def test_improving(self):
        assert mood_trend([mood("Happy"), mood("Calm"), mood("Excited")]) == "improving"

    def test_declining(self):
        assert mood_trend([mood("Sad"), mood("Anxious"), mood("Sad"), mood("Happy")]) == "declining"

    def test_stable(self):
        assert mood_trend([mood("Neutral"), mood("Sad"), mood("Happy")]) == "stable"

    def test_unknown_ignored(self):
        assert mood_trend([mood("Unknown")]) == "stable"
        assert mood_trend([]) == "stable"
