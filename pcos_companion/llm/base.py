"""
LLM Provider Base - Abstract base for inference API providers.
Supports multimodal messages (text + images).
"""

import base64
from abc import ABC, abstractmethod
from typing import Dict, Any, Optional, List, Union
from dataclasses import dataclass, field

import httpx

from .credentials import SecretProvider
from .errors import ConfigurationError


@dataclass
class LLMMessage:
    """
    Represents a message in a conversation.
    Supports multimodal content (text and images).
    """
    role: str  # "system", "user", "assistant"
    content: Union[str, List[Dict[str, Any]]]  # text or multimodal content blocks

    @staticmethod
    def text(role: str, text: str) -> "LLMMessage":
        """Create a text-only message."""
        return LLMMessage(role=role, content=text)

    @staticmethod
    def multimodal(role: str, text: str, image_urls: Optional[List[str]] = None,
                   image_base64_list: Optional[List[Dict[str, str]]] = None) -> "LLMMessage":
        """
        Create a multimodal message: the text part first, then one part per image.

        Args:
            role: Message role
            text: Text content
            image_urls: List of image URLs (http(s) or data URLs)
            image_base64_list: List of dicts with 'data' (base64 string) and 'media_type'
        """
        content_parts: List[Dict[str, Any]] = [{"type": "text", "text": text}]

        for url in image_urls or []:
            content_parts.append({
                "type": "image_url",
                "image_url": {"url": url}
            })

        for img in image_base64_list or []:
            content_parts.append({
                "type": "image_url",
                "image_url": {"url": f"data:{img['media_type']};base64,{img['data']}"}
            })

        return LLMMessage(role=role, content=content_parts)


def encode_image(data: bytes, media_type: str = "image/jpeg") -> str:
    """Encode raw image bytes as a data URL."""
    return f"data:{media_type};base64,{base64.b64encode(data).decode('ascii')}"


@dataclass
class LLMResponse:
    """Response from an LLM API call. content is None when the reply carried no text field."""
    content: Optional[str]
    model: str = ""
    usage: Dict[str, int] = field(default_factory=dict)
    raw: Optional[Dict[str, Any]] = None


class LLMProvider(ABC):
    """
    Abstract base class for LLM API providers.
    The credential is fetched from the secret provider on every call.
    """

    def __init__(self, secrets: SecretProvider, model: str, base_url: Optional[str] = None,
                 default_temperature: float = 0.7, default_max_tokens: int = 1024,
                 default_top_p: Optional[float] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.secrets = secrets
        self.model = model
        self.base_url = base_url
        self.default_temperature = default_temperature
        self.default_max_tokens = default_max_tokens
        self.default_top_p = default_top_p
        self.transport = transport

    @abstractmethod
    async def chat_completion(
        self,
        messages: List[LLMMessage],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> LLMResponse:
        """
        Send a chat completion request.

        Args:
            messages: List of conversation messages (supports multimodal)
            temperature: Sampling temperature override
            max_tokens: Max tokens override
            **kwargs: top_p, response_format, model overrides

        Returns:
            LLMResponse with the generated content

        Raises:
            ConfigurationError: No API key configured
            ServiceError: Non-success status or transport failure
            MalformedResponseError: Success status with a body that is not JSON
        """
        pass

    def require_api_key(self) -> str:
        api_key = self.secrets.get_api_key()
        if not api_key:
            raise ConfigurationError()
        return api_key

    def _format_messages(self, messages: List[LLMMessage]) -> List[Dict[str, Any]]:
        """Convert LLMMessage list to API-compatible format."""
        return [{"role": m.role, "content": m.content} for m in messages]
