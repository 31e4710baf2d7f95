"""LLM module - request/response plumbing for the external inference endpoint."""

from .base import LLMProvider, LLMMessage, LLMResponse, encode_image
from .credentials import SecretProvider, StaticSecretProvider, SettingsSecretProvider
from .errors import (
    AIClientError, ConfigurationError, ServiceError, EmptyResponseError,
    MalformedResponseError, RequestInProgressError, FoodNotIdentifiedError,
)
from .fireworks_provider import FireworksProvider
from .factory import create_llm_provider

__all__ = [
    'LLMProvider',
    'LLMMessage',
    'LLMResponse',
    'encode_image',
    'SecretProvider',
    'StaticSecretProvider',
    'SettingsSecretProvider',
    'AIClientError',
    'ConfigurationError',
    'ServiceError',
    'EmptyResponseError',
    'MalformedResponseError',
    'RequestInProgressError',
    'FoodNotIdentifiedError',
    'FireworksProvider',
    'create_llm_provider',
]
