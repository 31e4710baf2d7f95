"""
Base Agent Class - Shared plumbing for the AI clients.
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, List, Optional, TypeVar

from ..core.logging_config import LoggerAdapter
from ..llm.base import LLMProvider, LLMMessage, LLMResponse
from ..llm.errors import AIClientError, RequestInProgressError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class AgentResult(Generic[T]):
    """Outcome of an agent call: a value, or the typed failure the caller must branch on."""
    value: Optional[T] = None
    error: Optional[AIClientError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "AgentResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: AIClientError) -> "AgentResult[T]":
        return cls(error=error)


class BaseAgent:
    """
    Base class for the AI clients.

    Each agent allows one outstanding call at a time; a second call made
    while the first is pending is rejected with RequestInProgressError.
    Expected failures never escape an agent; they come back as AgentResult.
    """

    def __init__(
        self,
        name: str,
        provider: LLMProvider,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        top_p: Optional[float] = None,
        model: Optional[str] = None,
    ):
        """
        Initialize base agent.

        Args:
            name: Agent name, used in logs
            provider: LLM provider used for all calls
            temperature: Sampling temperature (provider default if None)
            max_tokens: Max tokens (provider default if None)
            top_p: Nucleus sampling (provider default if None)
            model: Model override (provider model if None)
        """
        self.name = name
        self.provider = provider
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.top_p = top_p
        self.model = model
        self._in_flight = False
        self.log = LoggerAdapter(logger, {"agent": name})

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    async def call_llm(self, messages: List[LLMMessage], **kwargs) -> LLMResponse:
        """Send messages with this agent's sampling parameters."""
        params = {"model": self.model}
        if self.top_p is not None:
            params["top_p"] = self.top_p
        params.update(kwargs)

        if logger.isEnabledFor(logging.DEBUG):
            self.log.debug(f"Agent {self.name} calling LLM: {len(messages)} messages")

        return await self.provider.chat_completion(
            messages,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            **params,
        )

    async def _guarded(self, operation: Callable[[], Awaitable[T]]) -> AgentResult[T]:
        if self._in_flight:
            self.log.warning(f"Agent {self.name} rejected a call: previous request still pending")
            return AgentResult.failure(RequestInProgressError())

        self._in_flight = True
        try:
            return AgentResult.success(await operation())
        except AIClientError as e:
            self.log.error(
                f"Agent {self.name} call failed: {e.message}",
                extra={"extra_fields": {"error_code": e.error_code}}
            )
            return AgentResult.failure(e)
        finally:
            self._in_flight = False
