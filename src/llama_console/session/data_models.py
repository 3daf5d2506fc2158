"""
Session data models for llama-console.

Pydantic models for the conversation log, derived statistics and the
exported transcript document.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, Literal

from pydantic import ConfigDict, Field

from llama_console.config import Config
from llama_console.core import DocumentModel

DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful, friendly, and knowledgeable AI assistant. "
    "You provide accurate, helpful, and engaging responses to user questions and requests."
)


class Message(DocumentModel):
    """One turn half in the conversation log. Immutable once recorded."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    content: str
    timestamp: str = Field(default_factory=lambda: datetime.now().isoformat(timespec="microseconds"))
    turn_id: int  # Shared by a user prompt and its assistant reply

    def to_engine_message(self) -> dict[str, Any]:
        """Convert to chat-completion message format."""
        return {"role": self.role, "content": self.content}


class Statistics(DocumentModel):
    """Counts derived from the conversation log."""

    total_turns: int = 0
    user_message_count: int = 0
    assistant_message_count: int = 0
    log_length: int = 0

    @classmethod
    def from_messages(cls, messages: Iterable[Message]) -> "Statistics":
        """Derive statistics from a sequence of messages."""
        messages = list(messages)
        return cls(
            total_turns=len({msg.turn_id for msg in messages}),
            user_message_count=sum(1 for msg in messages if msg.role == "user"),
            assistant_message_count=sum(1 for msg in messages if msg.role == "assistant"),
            log_length=len(messages),
        )


class Session(DocumentModel):
    """The live aggregate: configuration, log, turn counter and system prompt."""

    config: Config = Field(default_factory=Config)
    messages: list[Message] = Field(default_factory=list)
    turn_counter: int = 0
    system_prompt: str = DEFAULT_SYSTEM_PROMPT

    def next_turn_id(self) -> int:
        """Allocate the id for a new user prompt."""
        self.turn_counter += 1
        return self.turn_counter

    def add_message(self, role: str, content: str, turn_id: int) -> Message:
        """Append a message to the log.

        Args:
            role: "user" or "assistant"
            content: Message text
            turn_id: Turn the message belongs to

        Returns:
            The created Message
        """
        msg = Message(role=role, content=content, turn_id=turn_id)
        self.messages.append(msg)
        return msg

    def get_engine_messages(self) -> list[dict[str, Any]]:
        """Build the conversation context: system prompt followed by the log."""
        context = [{"role": "system", "content": self.system_prompt}]
        context.extend(msg.to_engine_message() for msg in self.messages)
        return context


class Transcript(DocumentModel):
    """Point-in-time snapshot written by /export."""

    model_config = {"protected_namespaces": ()}

    exported_at: str
    model_identifier: str
    configuration: Config
    conversation: list[Message]
    statistics: Statistics
