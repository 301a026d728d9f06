"""Per-user rolling conversation history.

History lives in process memory only. Each user id maps to an oldest-first list
of turns, capped at ``2 * max_pairs`` entries. Turns are dropped from the front
in user/assistant pairs so the retained window always opens with a user turn.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


@dataclass(frozen=True)
class Turn:
    """One message in a conversation exchange."""

    role: Role
    content: str
    tool_call_id: Optional[str] = None


class HistoryStore:
    """Rolling window of turns keyed by user id."""

    def __init__(self, max_pairs: int = 8) -> None:
        if max_pairs <= 0:
            raise ValueError("max_pairs must be positive")
        self.max_pairs = max_pairs
        self._turns: Dict[str, List[Turn]] = {}

    @property
    def max_turns(self) -> int:
        return self.max_pairs * 2

    def get(self, user_id: str) -> List[Turn]:
        return list(self._turns.setdefault(user_id, []))

    def append(self, user_id: str, role: Role | str, content: str) -> None:
        turns = self._turns.setdefault(user_id, [])
        turns.append(Turn(role=Role(role), content=content))
        while len(turns) > self.max_turns:
            del turns[:2]
        while turns and turns[0].role is not Role.USER:
            del turns[0]

    def evict(self, user_id: str) -> None:
        self._turns.pop(user_id, None)

    def reset(self) -> None:
        self._turns.clear()

    def __len__(self) -> int:
        return len(self._turns)
