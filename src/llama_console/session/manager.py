"""
Session manager for llama-console.

Runs one request/response exchange at a time against the inference engine
and owns the session's configuration and conversation log.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from llama_console.config import Config, ConfigStore
from llama_console.session.data_models import DEFAULT_SYSTEM_PROMPT, Message, Session, Statistics
from llama_console.utils.output import TypewriterOutput

if TYPE_CHECKING:
    from llama_console.config.config import OverridesLike
    from llama_console.engine import InferenceEngine

logger = logging.getLogger(__name__)


class SessionManager:
    """Orchestrates chat exchanges for the single live Session."""

    def __init__(
        self,
        engine: "InferenceEngine",
        config: Optional[Config] = None,
        system_prompt: Optional[str] = None,
        output: Optional[TypewriterOutput] = None,
    ):
        """Initialize the session manager.

        Args:
            engine: Engine used for generation.
            config: Starting configuration (defaults if omitted).
            system_prompt: System prompt placed before the log.
            output: Progressive presenter for assistant text.
        """
        self.engine = engine
        self.session = Session(
            config=config or ConfigStore.defaults(),
            system_prompt=system_prompt or DEFAULT_SYSTEM_PROMPT,
        )
        self.output = output or TypewriterOutput()

    @property
    def config(self) -> Config:
        """The current configuration."""
        return self.session.config

    @property
    def model_identifier(self) -> str:
        return getattr(self.engine, "model_identifier", "unknown")

    def apply_config(self, config: Config) -> Config:
        """Install ``config`` as the current configuration."""
        self.session.config = config
        return config

    def submit_prompt(self, text: str, overrides: "OverridesLike | None" = None) -> str:
        """Run one exchange: record the prompt, generate, record and present the reply.

        Args:
            text: Non-empty user prompt.
            overrides: Generation keys taking precedence over the current
                configuration for this exchange only.

        Returns:
            The assistant's complete response text.

        Raises:
            GenerationFailure: The engine failed. The user message stays in
                the log without a reply.
            ValueError: ``text`` is blank or ``overrides`` holds an invalid value.
        """
        if not text.strip():
            raise ValueError("Prompt must not be empty")

        params = ConfigStore.merge(self.session.config, overrides)

        turn_id = self.session.next_turn_id()
        self.session.add_message("user", text, turn_id)
        logger.debug(f"Turn {turn_id}: generating (max_tokens={params.max_tokens}, "
                     f"temperature={params.temperature}, top_p={params.top_p})")

        response = self.engine.generate(self.session.get_engine_messages(), params)

        self.session.add_message("assistant", response, turn_id)
        self.output.emit(response)
        return response

    def get_history(self) -> tuple[Message, ...]:
        """Read-only view of the conversation log, oldest first."""
        return tuple(self.session.messages)

    def clear_history(self) -> None:
        """Empty the log and reset the turn counter. Configuration is untouched."""
        self.session.messages = []
        self.session.turn_counter = 0
        logger.info("Conversation history cleared")

    def get_statistics(self) -> Statistics:
        """Counts derived from the current log."""
        return Statistics.from_messages(self.session.messages)
