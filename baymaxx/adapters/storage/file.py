"""
File storage adapter
JSON document store for interactions and mood history
"""

import asyncio
import json
from datetime import datetime, timezone
from pathlib import Path

from ...core.exceptions import BaymaxxException
from ...core.logging import get_logger
from ...domain.models.interaction import Interaction, MoodEntry
from ...domain.ports.storage_port import IInteractionStore, IMoodHistoryStore

logger = get_logger(__name__)


class FileStorageAdapter(IInteractionStore, IMoodHistoryStore):
    """
    File storage adapter

    Keeps everything in `<data_dir>/interactions.json`. Records are cached
    in memory after the first read; every append is written through with
    an atomic temp-file replace.
    """

    def __init__(self, data_dir: str = "data"):
        self.data_dir = Path(data_dir)
        self.data_file = self.data_dir / "interactions.json"
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._interactions: list[Interaction] = []
        self._moods: list[MoodEntry] = []
        self._loaded = False
        self._lock = asyncio.Lock()

    async def _ensure_loaded(self) -> None:
        """Load the document on first use"""
        if not self._loaded:
            async with self._lock:
                if not self._loaded:
                    await self._load_data()
                    self._loaded = True

    async def _load_data(self) -> None:
        if not self.data_file.exists():
            return

        loop = asyncio.get_running_loop()
        try:
            data = await loop.run_in_executor(None, self._read_json_file)
            self._interactions = [Interaction.from_dict(i) for i in data.get("interactions", [])]
            self._moods = [MoodEntry.from_dict(m) for m in data.get("moods", [])]
        except (json.JSONDecodeError, KeyError, ValueError) as e:
            raise BaymaxxException(
                f"Interaction store is unreadable: {e}",
                error_code="STORAGE_CORRUPT",
                details={"path": str(self.data_file)},
            ) from e

    def _read_json_file(self) -> dict:
        with open(self.data_file, encoding="utf-8") as f:
            return json.load(f)

    async def _save_locked(self) -> None:
        """Write the whole document; caller holds the lock"""
        data = {
            "interactions": [i.to_dict() for i in self._interactions],
            "moods": [m.to_dict() for m in self._moods],
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        temp_file = self.data_file.with_suffix(".tmp")

        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._write_json_file, temp_file, data)
        temp_file.replace(self.data_file)

    def _write_json_file(self, path: Path, data: dict) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, separators=(",", ":"))

    async def append(self, record: Interaction) -> None:
        await self._ensure_loaded()
        async with self._lock:
            self._interactions.append(record)
            try:
                await self._save_locked()
            except Exception:
                self._interactions.pop()
                raise
        logger.debug(f"Interaction stored: {record.id}")

    async def query_recent(
        self, user_id: str, session_id: str, limit: int
    ) -> list[Interaction]:
        if limit <= 0:
            return []
        await self._ensure_loaded()
        matches = [
            i for i in self._interactions
            if i.user_id == user_id and i.session_id == session_id
        ]
        matches.sort(key=lambda i: i.created_at, reverse=True)
        return matches[:limit]

    async def list_interactions(self, user_id: str, limit: int = 20) -> list[Interaction]:
        """Newest interactions of a user across sessions"""
        await self._ensure_loaded()
        matches = [i for i in self._interactions if i.user_id == user_id]
        matches.sort(key=lambda i: i.created_at, reverse=True)
        return matches[:limit]

    async def record_mood(self, entry: MoodEntry) -> None:
        await self._ensure_loaded()
        async with self._lock:
            self._moods.append(entry)
            try:
                await self._save_locked()
            except Exception:
                self._moods.pop()
                raise

    async def list_moods(self, user_id: str, limit: int = 20) -> list[MoodEntry]:
        await self._ensure_loaded()
        matches = [m for m in self._moods if m.user_id == user_id]
        matches.sort(key=lambda m: m.recorded_at, reverse=True)
        return matches[:limit]
