"""
Unit tests for the food analysis and chat agents.
"""

import asyncio
import json

import httpx
import pytest

from pcos_companion.agents import CHAT_APOLOGY, ChatAgent, FoodAnalysisAgent
from pcos_companion.agents.prompts import build_analysis_prompt, build_chat_system_prompt
from pcos_companion.llm import (
    ConfigurationError, EmptyResponseError, FireworksProvider, MalformedResponseError,
    RequestInProgressError, ServiceError, StaticSecretProvider,
)
from pcos_companion.models import ChatMessage, ChatRole, Profile, WeightGoal

from tests.helpers import FakeEndpoint, analysis_completion, completion, make_provider

IMAGE_URL = "https://example.com/meal.jpg"


@pytest.fixture
def profile():
    return Profile(
        name="Dana",
        age=29,
        symptoms=["Acne", "Irregular periods"],
        insulin_resistant=True,
        weight_goal=WeightGoal.LOSE,
        dietary_preferences=["vegetarian"],
    )


class TestPrompts:

    def test_analysis_prompt_includes_profile(self, profile):
        prompt = build_analysis_prompt(profile)
        assert "Age: 29" in prompt
        assert "Symptoms: Acne, Irregular periods" in prompt
        assert "Insulin resistance: has insulin resistance" in prompt
        assert "Weight goal: lose" in prompt
        assert "Dietary preferences: vegetarian" in prompt
        assert '"pcosCompatibility"' in prompt

    def test_analysis_prompt_fallbacks(self):
        prompt = build_analysis_prompt(Profile())
        assert "Age: Unknown" in prompt
        assert "Symptoms: None specified" in prompt
        assert "Insulin resistance: Unknown" in prompt
        assert "Weight goal: Unknown" in prompt
        assert "Dietary preferences: None specified" in prompt

    def test_insulin_resistance_false(self):
        prompt = build_analysis_prompt(Profile(insulin_resistant=False))
        assert "does not have insulin resistance" in prompt

    def test_chat_prompt(self, profile):
        prompt = build_chat_system_prompt(profile)
        assert "Name: Dana" in prompt
        assert "Reported symptoms: Acne, Irregular periods" in prompt

    def test_chat_prompt_fallbacks(self):
        prompt = build_chat_system_prompt(Profile())
        assert "Name: Unknown" in prompt
        assert "Reported symptoms: None specified" in prompt


class TestFoodAnalysisAgent:

    @pytest.mark.asyncio
    async def test_successful_analysis(self, profile):
        endpoint = FakeEndpoint(analysis_completion(
            foodName="Grilled salmon",
            pcosCompatibility=88,
            nutritionalInfo={"carbs": 5, "protein": 30, "fats": 14,
                             "glycemicLoad": "Low", "inflammatoryScore": "Anti-inflammatory"},
            recommendation="Great source of omega-3.",
            alternatives=["Sardines"],
        ))
        agent = FoodAnalysisAgent(make_provider(endpoint))

        result = await agent.analyze_image(IMAGE_URL, profile)

        assert result.ok
        assert result.value.food_name == "Grilled salmon"
        assert result.value.pcos_compatibility == 88
        assert result.value.alternatives == []

        payload = endpoint.payloads[0]
        assert payload["response_format"] == {"type": "json_object"}
        assert payload["temperature"] == 0.4
        assert payload["max_tokens"] == 1024
        assert payload["top_p"] == 0.95
        content = payload["messages"][0]["content"]
        assert content[0]["type"] == "text"
        assert "Age: 29" in content[0]["text"]
        assert content[1] == {"type": "image_url", "image_url": {"url": IMAGE_URL}}

    @pytest.mark.asyncio
    async def test_raw_bytes_sent_as_data_url(self):
        endpoint = FakeEndpoint(analysis_completion(foodName="Apple", pcosCompatibility=75))
        agent = FoodAnalysisAgent(make_provider(endpoint))

        await agent.analyze_image(b"\x89PNG", Profile(), media_type="image/png")

        url = endpoint.payloads[0]["messages"][0]["content"][1]["image_url"]["url"]
        assert url.startswith("data:image/png;base64,")

    @pytest.mark.asyncio
    async def test_partial_reply_is_normalized(self):
        endpoint = FakeEndpoint(analysis_completion(foodName="Toast"))
        result = await FoodAnalysisAgent(make_provider(endpoint)).analyze_image(IMAGE_URL, Profile())
        assert result.ok
        assert result.value.pcos_compatibility == 50
        assert result.value.recommendation == "No specific recommendations available."

    @pytest.mark.asyncio
    async def test_code_fenced_json(self):
        fenced = "```json\n" + json.dumps({"foodName": "Oatmeal", "pcosCompatibility": 70}) + "\n```"
        endpoint = FakeEndpoint(completion(fenced))
        result = await FoodAnalysisAgent(make_provider(endpoint)).analyze_image(IMAGE_URL, Profile())
        assert result.ok
        assert result.value.food_name == "Oatmeal"

    @pytest.mark.asyncio
    async def test_empty_content(self):
        endpoint = FakeEndpoint(completion(""))
        result = await FoodAnalysisAgent(make_provider(endpoint)).analyze_image(IMAGE_URL, Profile())
        assert isinstance(result.error, EmptyResponseError)

    @pytest.mark.asyncio
    async def test_missing_content(self):
        endpoint = FakeEndpoint(httpx.Response(200, json={"choices": [{"message": {}}]}))
        result = await FoodAnalysisAgent(make_provider(endpoint)).analyze_image(IMAGE_URL, Profile())
        assert isinstance(result.error, EmptyResponseError)

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        endpoint = FakeEndpoint(completion("This looks like a salad!"))
        result = await FoodAnalysisAgent(make_provider(endpoint)).analyze_image(IMAGE_URL, Profile())
        assert isinstance(result.error, MalformedResponseError)

    @pytest.mark.asyncio
    async def test_json_array_is_malformed(self):
        endpoint = FakeEndpoint(completion("[1, 2, 3]"))
        result = await FoodAnalysisAgent(make_provider(endpoint)).analyze_image(IMAGE_URL, Profile())
        assert isinstance(result.error, MalformedResponseError)

    @pytest.mark.asyncio
    async def test_missing_key(self):
        endpoint = FakeEndpoint()
        agent = FoodAnalysisAgent(make_provider(endpoint, api_key=""))
        result = await agent.analyze_image(IMAGE_URL, Profile())
        assert isinstance(result.error, ConfigurationError)
        assert endpoint.requests == []

    @pytest.mark.asyncio
    async def test_service_error(self):
        endpoint = FakeEndpoint(httpx.Response(500, json={"error": {"message": "Model overloaded"}}))
        result = await FoodAnalysisAgent(make_provider(endpoint)).analyze_image(IMAGE_URL, Profile())
        assert isinstance(result.error, ServiceError)
        assert result.error.message == "Model overloaded"
        assert result.error.status_code == 500

    @pytest.mark.asyncio
    async def test_concurrent_call_is_rejected(self):
        release = asyncio.Event()

        async def handler(request):
            await release.wait()
            return analysis_completion(foodName="Apple", pcosCompatibility=90)

        provider = FireworksProvider(StaticSecretProvider("k"), transport=httpx.MockTransport(handler))
        agent = FoodAnalysisAgent(provider)

        first = asyncio.create_task(agent.analyze_image(IMAGE_URL, Profile()))
        while not agent.in_flight:
            await asyncio.sleep(0)

        second = await agent.analyze_image(IMAGE_URL, Profile())
        assert isinstance(second.error, RequestInProgressError)

        release.set()
        result = await first
        assert result.ok
        assert agent.in_flight is False

    @pytest.mark.asyncio
    async def test_guard_released_after_failure(self):
        endpoint = FakeEndpoint(httpx.Response(503), analysis_completion(foodName="Apple"))
        agent = FoodAnalysisAgent(make_provider(endpoint))

        assert isinstance((await agent.analyze_image(IMAGE_URL, Profile())).error, ServiceError)
        assert (await agent.analyze_image(IMAGE_URL, Profile())).ok


class TestChatAgent:

    @pytest.mark.asyncio
    async def test_reply_is_trimmed(self, profile):
        endpoint = FakeEndpoint(completion("  Try adding more fiber.\n"))
        agent = ChatAgent(make_provider(endpoint))

        result = await agent.get_reply([{"role": "user", "content": "Any tips?"}], profile)

        assert result.ok
        assert result.value == "Try adding more fiber."

    @pytest.mark.asyncio
    async def test_request_carries_system_prompt_and_history(self, profile):
        endpoint = FakeEndpoint(completion("Sure."))
        agent = ChatAgent(make_provider(endpoint))
        history = [
            ChatMessage(role=ChatRole.ASSISTANT, content="Hi Dana!"),
            ChatMessage(role=ChatRole.USER, content="Is rice okay?"),
        ]

        await agent.get_reply(history, profile)

        payload = endpoint.payloads[0]
        messages = payload["messages"]
        assert messages[0]["role"] == "system"
        assert "Name: Dana" in messages[0]["content"]
        assert "Acne" in messages[0]["content"]
        assert messages[1:] == [
            {"role": "assistant", "content": "Hi Dana!"},
            {"role": "user", "content": "Is rice okay?"},
        ]
        assert payload["temperature"] == 0.7
        assert payload["max_tokens"] == 512
        assert "response_format" not in payload

    @pytest.mark.asyncio
    async def test_missing_reply_text(self, profile):
        endpoint = FakeEndpoint(httpx.Response(200, json={"choices": []}))
        result = await ChatAgent(make_provider(endpoint)).get_reply([], profile)
        assert isinstance(result.error, MalformedResponseError)
        assert result.error.user_message == CHAT_APOLOGY

    @pytest.mark.asyncio
    async def test_blank_reply_text(self, profile):
        endpoint = FakeEndpoint(completion("   "))
        result = await ChatAgent(make_provider(endpoint)).get_reply([], profile)
        assert isinstance(result.error, MalformedResponseError)

    @pytest.mark.asyncio
    async def test_unreadable_body_uses_chat_apology(self, profile):
        endpoint = FakeEndpoint(httpx.Response(200, text="<html>"))
        result = await ChatAgent(make_provider(endpoint)).get_reply([], profile)
        assert isinstance(result.error, MalformedResponseError)
        assert result.error.user_message == CHAT_APOLOGY

    @pytest.mark.asyncio
    async def test_missing_key(self, profile):
        endpoint = FakeEndpoint()
        result = await ChatAgent(make_provider(endpoint, api_key=None)).get_reply([], profile)
        assert isinstance(result.error, ConfigurationError)
        assert endpoint.requests == []
