"""
Context memory
Bounded, time-ordered window of prior interactions for one session
"""

from __future__ import annotations

from ...core.logging import get_logger, log_degraded
from ..models.interaction import ConversationContext, Interaction
from ..ports.storage_port import IInteractionStore

logger = get_logger(__name__)

DEFAULT_CONTEXT_LIMIT = 5


class ContextMemoryStore:
    """
    Sliding-window retrieval over the interaction store

    Context is an enhancement: a failing or missing store yields an empty
    window instead of aborting the turn.
    """

    def __init__(
        self,
        store: IInteractionStore | None,
        default_limit: int = DEFAULT_CONTEXT_LIMIT,
    ):
        if default_limit < 1:
            raise ValueError("default_limit must be at least 1")
        self._store = store
        self.default_limit = default_limit

    async def get_recent(
        self, user_id: str, session_id: str, limit: int | None = None
    ) -> list[Interaction]:
        """
        Most recent interactions, newest first

        Returns [] on lookup failure without raising.
        """
        context = await self.load_context(user_id, session_id, limit)
        return list(context.interactions)

    async def load_context(
        self, user_id: str, session_id: str, limit: int | None = None
    ) -> ConversationContext:
        """Context window with a degraded flag for the caller"""
        limit = self.default_limit if limit is None else limit
        if limit <= 0:
            return ConversationContext()

        if self._store is None:
            log_degraded(logger, "context", "no interaction store configured", user_id=user_id)
            return ConversationContext(degraded=True)

        try:
            records = await self._store.query_recent(user_id, session_id, limit)
        except Exception as e:
            log_degraded(logger, "context", e, user_id=user_id, session_id=session_id)
            return ConversationContext(degraded=True)

        # the store's ordering is not trusted
        window = sorted(
            (r for r in records if r.user_id == user_id and r.session_id == session_id),
            key=lambda r: r.created_at,
            reverse=True,
        )[:limit]
        return ConversationContext(interactions=tuple(window))
