"""
Fireworks AI LLM Provider.
Uses the OpenAI-compatible chat/completions endpoint with bearer authentication.
"""

import httpx
import logging
import time
from typing import Optional, List, Dict, Any

from .base import LLMProvider, LLMMessage, LLMResponse
from .credentials import SecretProvider
from .errors import AIClientError, MalformedResponseError, ServiceError
from ..core.logging_config import filter_sensitive_data, truncate_large_data

logger = logging.getLogger(__name__)

FIREWORKS_BASE_URL = "https://api.fireworks.ai/inference/v1"
OPENAI_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "accounts/fireworks/models/llama4-maverick-instruct-basic"


class FireworksProvider(LLMProvider):
    """
    Provider for Fireworks AI serverless inference.
    Any OpenAI-compatible endpoint works by passing its base_url.
    """

    def __init__(
        self,
        secrets: SecretProvider,
        model: str = DEFAULT_MODEL,
        base_url: str = FIREWORKS_BASE_URL,
        default_temperature: float = 0.7,
        default_max_tokens: int = 1024,
        default_top_p: Optional[float] = 0.95,
        timeout: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        provider_name: str = "fireworks",
        log_calls: bool = True,
    ):
        super().__init__(secrets, model, base_url, default_temperature, default_max_tokens,
                         default_top_p, transport)
        self.timeout = timeout
        self.provider_name = provider_name
        self.log_calls = log_calls

    def _get_headers(self, api_key: str) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    async def chat_completion(
        self,
        messages: List[LLMMessage],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> LLMResponse:
        """Send request to the Chat Completions endpoint."""
        api_key = self.require_api_key()

        start_time = time.time()
        url = f"{self.base_url}/chat/completions"
        payload: Dict[str, Any] = {
            "model": kwargs.get("model") or self.model,
            "max_tokens": max_tokens or self.default_max_tokens,
            "temperature": temperature if temperature is not None else self.default_temperature,
            "messages": self._format_messages(messages),
        }
        top_p = kwargs.get("top_p", self.default_top_p)
        if top_p is not None:
            payload["top_p"] = top_p
        if kwargs.get("response_format"):
            payload["response_format"] = kwargs["response_format"]

        if logger.isEnabledFor(logging.DEBUG):
            first_msg = truncate_large_data(str(messages[0].content), 200) if messages else ""
            logger.debug(
                f"LLM API call starting: provider={self.provider_name}, model={payload['model']}, "
                f"temperature={payload['temperature']}, {len(messages)} messages, first: {first_msg}",
                extra={"extra_fields": {"headers": filter_sensitive_data(self._get_headers(api_key))}}
            )

        try:
            try:
                async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                    resp = await client.post(url, json=payload, headers=self._get_headers(api_key))
            except httpx.HTTPError as e:
                raise ServiceError(f"Could not reach inference endpoint: {e}") from e

            logger.debug(
                f"LLM API response status: {resp.status_code}, "
                f"response: {truncate_large_data(resp.text, 1000)}"
            )

            if not resp.is_success:
                raise ServiceError(self._error_message(resp), status_code=resp.status_code)

            try:
                data = resp.json()
            except ValueError as e:
                raise MalformedResponseError("Inference response body is not JSON") from e

            if not isinstance(data, dict):
                raise MalformedResponseError("Inference response body is not a JSON object")
            usage = data.get("usage") or {}
            duration_ms = (time.time() - start_time) * 1000

            if self.log_calls:
                logger.info(
                    "LLM API call completed",
                    extra={"extra_fields": {
                        "provider": self.provider_name,
                        "model": payload["model"],
                        "prompt_tokens": usage.get("prompt_tokens", 0),
                        "completion_tokens": usage.get("completion_tokens", 0),
                        "total_tokens": usage.get("total_tokens", 0),
                        "duration_ms": round(duration_ms, 2),
                    }}
                )

            return LLMResponse(
                content=self._extract_content(data),
                model=data.get("model", payload["model"]),
                usage=usage,
                raw=data,
            )
        except AIClientError as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                f"LLM API call failed: {e.message}",
                extra={"extra_fields": {
                    "provider": self.provider_name,
                    "model": payload.get("model"),
                    "duration_ms": round(duration_ms, 2),
                    "error_code": e.error_code,
                    "error": e.message,
                }}
            )
            raise

    @staticmethod
    def _extract_content(data: Any) -> Optional[str]:
        """choices[0].message.content, or None when any level is missing."""
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            return None
        return content if isinstance(content, str) else None

    @staticmethod
    def _error_message(resp: httpx.Response) -> str:
        """Best available message from an error response."""
        fallback = f"Inference request failed with status {resp.status_code}"
        try:
            body = resp.json()
        except ValueError:
            return fallback

        if not isinstance(body, dict):
            return fallback

        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
        for key in ("message", "detail"):
            if body.get(key):
                return str(body[key])
        return fallback
