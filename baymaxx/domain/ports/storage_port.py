"""
Storage ports
Read/write contract of the interaction document store
"""

from abc import ABC, abstractmethod

from ..models.interaction import Interaction, MoodEntry


class IInteractionStore(ABC):
    """
    Interaction persistence

    Append-only: a turn writes its own record once and never updates
    another turn's record.
    """

    @abstractmethod
    async def append(self, record: Interaction) -> None:
        """
        Persist one interaction

        Args:
            record: interaction of the finished turn
        """

    @abstractmethod
    async def query_recent(
        self, user_id: str, session_id: str, limit: int
    ) -> list[Interaction]:
        """
        Most recent interactions of a session

        Args:
            user_id: user ID
            session_id: session ID
            limit: maximum number of records

        Returns:
            list[Interaction]: newest first, at most `limit`
        """


class IMoodHistoryStore(ABC):
    """Per-user mood history"""

    @abstractmethod
    async def record_mood(self, entry: MoodEntry) -> None:
        """Append one mood entry"""

    @abstractmethod
    async def list_moods(self, user_id: str, limit: int = 20) -> list[MoodEntry]:
        """Newest first"""
