"""
ContextMemoryStore tests

Sliding window over the interaction store, degraded on failure.
"""

from datetime import datetime, timedelta, timezone

import pytest

from baymaxx.domain.models.emotion import EmotionLabel, FusedEmotion
from baymaxx.domain.models.interaction import Interaction, InteractionType
from baymaxx.domain.ports.storage_port import IInteractionStore
from baymaxx.domain.services.context import ContextMemoryStore

BASE_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)


def make_interaction(n: int, user_id: str = "u1", session_id: str = "s1") -> Interaction:
    return Interaction(
        user_id=user_id,
        session_id=session_id,
        interaction_type=InteractionType.TEXT,
        query=f"query {n}",
        response=f"response {n}",
        fused_emotion=FusedEmotion(EmotionLabel.NEUTRAL, 0.5),
        created_at=BASE_TIME + timedelta(minutes=n),
    )


# === Mock classes ===


class MockInteractionStore(IInteractionStore):
    """In-memory store that returns records in insertion order"""

    def __init__(self, records=None):
        self.records = list(records or [])
        self.queries = []

    async def append(self, record: Interaction) -> None:
        self.records.append(record)

    async def query_recent(self, user_id, session_id, limit):
        self.queries.append((user_id, session_id, limit))
        return [r for r in self.records if r.user_id == user_id and r.session_id == session_id]


class FailingStore(IInteractionStore):
    async def append(self, record):
        raise ConnectionError("store down")

    async def query_recent(self, user_id, session_id, limit):
        raise ConnectionError("store down")


class TestContextMemoryStore:
    """Context window retrieval"""

    @pytest.mark.asyncio
    async def test_newest_first_and_bounded(self):
        store = MockInteractionStore([make_interaction(n) for n in range(8)])
        memory = ContextMemoryStore(store)

        recent = await memory.get_recent("u1", "s1")

        assert [i.query for i in recent] == ["query 7", "query 6", "query 5", "query 4", "query 3"]

    @pytest.mark.asyncio
    async def test_explicit_limit(self):
        store = MockInteractionStore([make_interaction(n) for n in range(4)])
        memory = ContextMemoryStore(store)

        recent = await memory.get_recent("u1", "s1", limit=2)

        assert len(recent) == 2
        assert store.queries == [("u1", "s1", 2)]

    @pytest.mark.asyncio
    async def test_strictly_descending(self):
        store = MockInteractionStore([make_interaction(n) for n in (3, 1, 4, 0, 2)])
        recent = await ContextMemoryStore(store).get_recent("u1", "s1")
        times = [i.created_at for i in recent]
        assert times == sorted(times, reverse=True)

    @pytest.mark.asyncio
    async def test_other_sessions_excluded(self):
        store = MockInteractionStore([
            make_interaction(1),
            make_interaction(2, session_id="s2"),
            make_interaction(3, user_id="u2"),
        ])
        recent = await ContextMemoryStore(store).get_recent("u1", "s1")
        assert [i.query for i in recent] == ["query 1"]

    @pytest.mark.asyncio
    async def test_failure_returns_empty_degraded(self):
        memory = ContextMemoryStore(FailingStore())

        assert await memory.get_recent("u1", "s1") == []
        context = await memory.load_context("u1", "s1")
        assert len(context) == 0
        assert context.degraded is True

    @pytest.mark.asyncio
    async def test_missing_store_is_degraded(self):
        context = await ContextMemoryStore(None).load_context("u1", "s1")
        assert context.degraded is True
        assert list(context) == []

    @pytest.mark.asyncio
    async def test_zero_limit_is_empty(self):
        store = MockInteractionStore([make_interaction(1)])
        context = await ContextMemoryStore(store).load_context("u1", "s1", limit=0)
        assert len(context) == 0
        assert context.degraded is False
        assert store.queries == []

    def test_invalid_default_limit(self):
        with pytest.raises(ValueError):
            ContextMemoryStore(None, default_limit=0)
