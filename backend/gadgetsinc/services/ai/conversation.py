"""
Conversation primitives shared by the orchestrator and the completion backends.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Sequence


class Role(str, Enum):
    """Author of a conversation message"""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ConversationMessage:
    role: Role
    content: str

    @classmethod
    def system(cls, content: str) -> "ConversationMessage":
        return cls(Role.SYSTEM, content)

    @classmethod
    def user(cls, content: str) -> "ConversationMessage":
        return cls(Role.USER, content)

    @classmethod
    def assistant(cls, content: str) -> "ConversationMessage":
        return cls(Role.ASSISTANT, content)

    def to_dict(self) -> Dict[str, str]:
        """Chat-completions message dict"""
        return {"role": self.role.value, "content": self.content}


@dataclass(frozen=True)
class StreamChunk:
    """One text fragment of a streamed completion"""
    content: str


ConversationHistory = Sequence[ConversationMessage]


def to_message_dicts(history: ConversationHistory) -> List[Dict[str, str]]:
    return [message.to_dict() for message in history]
