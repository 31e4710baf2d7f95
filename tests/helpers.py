"""
Test doubles for the inference endpoint and sample records.
"""

import json

import httpx

from pcos_companion.agents import ChatAgent, FoodAnalysisAgent
from pcos_companion.core import ChatSession, HistoryLog, ProfileStore
from pcos_companion.llm import FireworksProvider, StaticSecretProvider
from pcos_companion.models import FoodAnalysisItem, NutritionalInfo
from pcos_companion.services import CompanionService
from pcos_companion.storage import StorageInterface


def completion(content, status_code: int = 200, model: str = "test-model") -> httpx.Response:
    """A chat/completions success envelope around content."""
    return httpx.Response(status_code, json={
        "choices": [{"message": {"role": "assistant", "content": content}}],
        "model": model,
        "usage": {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
    })


def analysis_completion(**fields) -> httpx.Response:
    return completion(json.dumps(fields))


class FakeEndpoint:
    """Records requests and answers them from a queue of responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0) if self.responses else completion("ok")
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def payloads(self):
        return [json.loads(r.content) for r in self.requests]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def make_provider(endpoint: FakeEndpoint, api_key: str = "test-key") -> FireworksProvider:
    return FireworksProvider(StaticSecretProvider(api_key), transport=endpoint.transport())


def make_item(**overrides) -> FoodAnalysisItem:
    data = {
        "food_name": "Quinoa salad",
        "pcos_compatibility": 72,
        "nutritional_info": NutritionalInfo(carbs=30, protein=12, fats=9),
        "recommendation": "Good fiber content.",
        "alternatives": ["Lentil salad"],
        "image_url": "data:image/jpeg;base64,AAAA",
    }
    data.update(overrides)
    return FoodAnalysisItem(**data)


def make_companion(storage: StorageInterface, endpoint: FakeEndpoint,
                   api_key: str = "test-key") -> CompanionService:
    provider = make_provider(endpoint, api_key)
    return CompanionService(
        profile_store=ProfileStore(storage),
        history_log=HistoryLog(storage),
        chat_session=ChatSession(storage),
        analysis_agent=FoodAnalysisAgent(provider),
        chat_agent=ChatAgent(provider),
    )
