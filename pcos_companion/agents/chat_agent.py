"""
Chat Agent - Generates assistant replies conditioned on the stored profile.
"""

from typing import Any, List, Mapping, Optional, Sequence, Union

from .base_agent import AgentResult, BaseAgent
from .prompts import build_chat_system_prompt
from ..llm.base import LLMMessage, LLMProvider
from ..llm.errors import MalformedResponseError
from ..models import ChatMessage, Profile

CHAT_APOLOGY = "I'm sorry, I couldn't put together a reply just now. Please try asking again."

Turn = Union[ChatMessage, Mapping[str, Any]]


class ChatAgent(BaseAgent):
    """AI Chat Client: the full turn history in, one trimmed reply out."""

    def __init__(
        self,
        provider: LLMProvider,
        temperature: float = 0.7,
        max_tokens: int = 512,
        top_p: float = 0.95,
        model: Optional[str] = None,
    ):
        super().__init__("ChatAgent", provider, temperature, max_tokens, top_p, model)

    def build_messages(self, history: Sequence[Turn], profile: Profile) -> List[LLMMessage]:
        messages = [LLMMessage.text("system", build_chat_system_prompt(profile))]
        for turn in history:
            if isinstance(turn, ChatMessage):
                turn = turn.to_turn()
            messages.append(LLMMessage.text(str(turn["role"]), str(turn["content"])))
        return messages

    async def get_reply(self, history: Sequence[Turn], profile: Profile) -> AgentResult[str]:
        """
        Ask for the next assistant turn.

        Args:
            history: Conversation so far, oldest first, as ChatMessage or {role, content}
            profile: Current profile

        Returns:
            AgentResult with the reply text, or ConfigurationError, ServiceError,
            MalformedResponseError or RequestInProgressError
        """
        return await self._guarded(lambda: self._reply(history, profile))

    async def _reply(self, history: Sequence[Turn], profile: Profile) -> str:
        try:
            response = await self.call_llm(self.build_messages(history, profile))
        except MalformedResponseError as e:
            e.user_message = CHAT_APOLOGY
            raise
        if response.content is None or not response.content.strip():
            raise MalformedResponseError(
                "Chat reply did not contain message text",
                user_message=CHAT_APOLOGY,
            )
        return response.content.strip()
