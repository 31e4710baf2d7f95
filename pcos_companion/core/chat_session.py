"""
Chat Session - The ordered transcript of the current conversation, oldest first.
"""

import logging
from typing import Dict, List, Optional

from pydantic import TypeAdapter, ValidationError

from ..models import ChatMessage, ChatRole, FoodAnalysisItem, Profile
from ..storage import StorageInterface

logger = logging.getLogger(__name__)

_messages_adapter = TypeAdapter(List[ChatMessage])

GREETING_TEMPLATE = (
    "Hi {name}! I'm your PCOS Wellness assistant. How can I help you today? "
    "You can analyze your food by clicking the camera button."
)


class ChatSession:
    """
    Owns the chat transcript and rewrites it to storage after every change.
    The transcript keeps at most max_messages turns, dropping the oldest.
    """

    def __init__(self, storage: StorageInterface, key: str = "chatHistory",
                 max_messages: int = 100):
        self.storage = storage
        self.key = key
        self.max_messages = max_messages
        self._messages: List[ChatMessage] = []

    async def load(self) -> List[ChatMessage]:
        data = await self.storage.get(self.key)
        if data is None:
            self._messages = []
            return self.list()

        try:
            messages = _messages_adapter.validate_python(data)
        except ValidationError as e:
            logger.warning(
                f"Stored chat transcript is invalid, starting empty: {e.error_count()} errors",
                extra={"extra_fields": {"storage_key": self.key}}
            )
            messages = []

        self._messages = messages[-self.max_messages:]
        return self.list()

    def list(self) -> List[ChatMessage]:
        return list(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def as_turns(self) -> List[Dict[str, str]]:
        return [message.to_turn() for message in self._messages]

    async def append_user_message(self, text: str,
                                  food_analysis: Optional[FoodAnalysisItem] = None) -> ChatMessage:
        return await self._append(ChatRole.USER, text, food_analysis)

    async def append_assistant_message(self, text: str,
                                       food_analysis: Optional[FoodAnalysisItem] = None) -> ChatMessage:
        return await self._append(ChatRole.ASSISTANT, text, food_analysis)

    async def seed_greeting(self, profile_name: Optional[str]) -> Optional[ChatMessage]:
        """
        Start an empty conversation with a personal greeting.

        No-op when the transcript already has messages or no name is known.

        Returns:
            Optional[ChatMessage]: The greeting, if one was added
        """
        if self._messages or not profile_name:
            return None
        return await self.append_assistant_message(GREETING_TEMPLATE.format(name=profile_name))

    def should_offer_extended_questionnaire(self, profile: Profile) -> bool:
        """Offer the extended questionnaire once the assistant has replied at least once."""
        if profile.completed_extended_quiz:
            return False
        return any(message.role == ChatRole.ASSISTANT for message in self._messages)

    async def clear(self) -> None:
        self._messages = []
        await self.storage.delete(self.key)

    async def _append(self, role: ChatRole, text: str,
                      food_analysis: Optional[FoodAnalysisItem]) -> ChatMessage:
        message = ChatMessage(role=role, content=text, food_analysis=food_analysis)
        self._messages.append(message)
        if len(self._messages) > self.max_messages:
            del self._messages[:len(self._messages) - self.max_messages]

        ok = await self.storage.set(self.key, [m.to_storage() for m in self._messages])
        if not ok:
            logger.error(
                "Failed to persist chat transcript, keeping in-memory value",
                extra={"extra_fields": {"storage_key": self.key, "messages": len(self._messages)}}
            )
        return message
