"""Conversation turns supplied by the caller."""

from dataclasses import dataclass
from typing import Literal

TurnRole = Literal["user", "assistant"]


@dataclass(frozen=True)
class ConversationTurn:
    """One prior message in the chat, oldest first in any list."""

    role: TurnRole
    content: str
