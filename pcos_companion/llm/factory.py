"""
LLM Provider Factory - Creates the configured LLM provider instance.
"""

from typing import Optional

import httpx

from .base import LLMProvider
from .credentials import SecretProvider
from .fireworks_provider import FireworksProvider, FIREWORKS_BASE_URL, OPENAI_BASE_URL

_DEFAULT_BASE_URLS = {
    "fireworks": FIREWORKS_BASE_URL,
    "openai": OPENAI_BASE_URL,
}


def create_llm_provider(
    secrets: SecretProvider,
    provider: str = "fireworks",
    model: Optional[str] = None,
    base_url: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    **kwargs
) -> LLMProvider:
    """
    Create an LLM provider instance based on configuration.

    The provider is created even when no credential is configured yet;
    calls then fail with ConfigurationError before touching the network.

    Args:
        secrets: Source of the API key
        provider: Provider name ("fireworks" or "openai")
        model: Model name (uses provider default if not specified)
        base_url: Custom base URL (uses provider default if not specified)
        transport: Optional httpx transport (tests inject a MockTransport)
        **kwargs: Sampling defaults, timeout, log_calls

    Returns:
        LLMProvider instance
    """
    if provider not in _DEFAULT_BASE_URLS:
        raise ValueError(f"Unsupported LLM provider: {provider}")

    params = {
        "secrets": secrets,
        "base_url": base_url or _DEFAULT_BASE_URLS[provider],
        "transport": transport,
        "provider_name": provider,
    }
    if model:
        params["model"] = model
    params.update(kwargs)
    return FireworksProvider(**params)
