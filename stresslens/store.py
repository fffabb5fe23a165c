from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from itertools import count
from typing import List, Optional

from .schemas import StressAnalysisCreate, StressHistoryEntry


class StressHistoryStore:
    """In-memory stress analysis history suitable for demos."""

    def __init__(self) -> None:
        self._entries: List[StressHistoryEntry] = []
        self._ids = count(1)
        self._lock = asyncio.Lock()

    async def add(self, analysis: StressAnalysisCreate) -> StressHistoryEntry:
        async with self._lock:
            entry = StressHistoryEntry(
                **analysis.model_dump(),
                id=next(self._ids),
                created_at=datetime.now(timezone.utc),
            )
            self._entries.append(entry)
        return entry

    async def history(self, user_id: Optional[int] = None) -> List[StressHistoryEntry]:
        async with self._lock:
            entries = [
                entry
                for entry in self._entries
                if user_id is None or entry.user_id == user_id
            ]
        return list(reversed(entries))
