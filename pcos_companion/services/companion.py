"""
Companion Service - Wires the stores and agents into the app's data flows.

questionnaire answers -> ProfileStore -> risk scoring -> ProfileStore
food image -> FoodAnalysisAgent -> HistoryLog
user text -> ChatSession -> ChatAgent -> ChatSession
"""

import logging
from typing import Any, Mapping, Optional, Union

import httpx

from ..agents import AgentResult, ChatAgent, FoodAnalysisAgent
from ..core import ChatSession, HistoryLog, ProfileStore, classify_pcos_probability
from ..llm import SecretProvider, SettingsSecretProvider, create_llm_provider, encode_image
from ..llm.errors import FoodNotIdentifiedError, RequestInProgressError
from ..models import (
    ALTERNATIVES_CUTOFF, ChatMessage, FoodAnalysisItem, Identity, Profile, ProfileUpdate,
)
from ..storage import LocalStorage, StorageInterface

logger = logging.getLogger(__name__)

Answers = Union[ProfileUpdate, Mapping[str, Any]]


def _with_flag(answers: Answers, flag: str) -> dict:
    """Answers plus a completion flag, as one update."""
    if not isinstance(answers, ProfileUpdate):
        answers = ProfileUpdate.model_validate(dict(answers))
    return {**answers.changes(), flag: True}


def format_analysis_summary(item: FoodAnalysisItem) -> str:
    """Assistant reply describing a shared analysis."""
    if item.pcos_compatibility > 70:
        level = "good"
    elif item.pcos_compatibility > 50:
        level = "moderate"
    else:
        level = "poor"

    info = item.nutritional_info
    text = (
        f"I've analyzed your {item.food_name}. It has {level} compatibility "
        f"({item.pcos_compatibility}%) with your PCOS management plan.\n\n"
        f"Nutritional breakdown: {info.carbs:g}g carbs, {info.protein:g}g protein, "
        f"{info.fats:g}g fats. It has a {info.glycemic_load.value.lower()} glycemic load "
        f"and is {info.inflammatory_score.value.lower()} in terms of inflammation.\n\n"
        f"{item.recommendation}"
    )

    if item.pcos_compatibility < ALTERNATIVES_CUTOFF and item.alternatives:
        text += "\n\nHere are some better alternatives you might consider:\n"
        text += "\n".join(f"• {alt}" for alt in item.alternatives)
    return text


class CompanionService:
    """Single-user session facade over the profile, history and chat stores."""

    def __init__(
        self,
        profile_store: ProfileStore,
        history_log: HistoryLog,
        chat_session: ChatSession,
        analysis_agent: FoodAnalysisAgent,
        chat_agent: ChatAgent,
    ):
        self.profile_store = profile_store
        self.history_log = history_log
        self.chat_session = chat_session
        self.analysis_agent = analysis_agent
        self.chat_agent = chat_agent
        self._sending = False

    async def load(self) -> None:
        await self.profile_store.load()
        await self.history_log.load()
        await self.chat_session.load()
        logger.info(
            f"Session loaded: setup_complete={self.profile_store.is_complete()}, "
            f"history={len(self.history_log)}, messages={len(self.chat_session)}"
        )

    @property
    def profile(self) -> Profile:
        return self.profile_store.get()

    # Profile and questionnaires

    async def sign_in(self, identity: Identity) -> Profile:
        """Seed the profile name from the identity provider, at most once."""
        if identity.is_authenticated:
            await self.profile_store.seed_name(identity.display_name)
        return self.profile

    async def complete_setup(self, answers: Answers) -> Profile:
        return await self.profile_store.update(_with_flag(answers, "completed_setup"))

    async def complete_questionnaire(self, answers: Answers) -> Profile:
        """Merge the quiz answers, then score the merged profile once."""
        merged = await self.profile_store.update(answers)
        probability = classify_pcos_probability(merged)
        logger.info(f"Questionnaire completed: pcos_probability={probability.value}")
        return await self.profile_store.update(
            ProfileUpdate(pcos_probability=probability, completed_quiz=True)
        )

    async def complete_extended_questionnaire(self, answers: Answers) -> Profile:
        return await self.profile_store.update(_with_flag(answers, "completed_extended_quiz"))

    # Food analysis

    async def analyze_food(self, image_data: Union[str, bytes],
                           media_type: str = "image/jpeg") -> AgentResult[FoodAnalysisItem]:
        """
        Analyze a food photo and record it in the history log.

        An analysis whose food name is "unknown" is reported as
        FoodNotIdentifiedError and is not recorded.
        """
        image_url = encode_image(image_data, media_type) if isinstance(image_data, bytes) else image_data
        result = await self.analysis_agent.analyze_image(image_url, self.profile, media_type)
        if not result.ok:
            return AgentResult.failure(result.error)

        analysis = result.value
        if analysis.is_unidentified:
            logger.info("Analysis could not identify the food")
            return AgentResult.failure(FoodNotIdentifiedError())

        item = await self.history_log.append(analysis.to_history_item(image_url=image_url))
        return AgentResult.success(item)

    async def share_analysis(self, item: FoodAnalysisItem) -> ChatMessage:
        """Post an analysis into the chat with a summary reply; returns the reply."""
        await self.chat_session.append_user_message(f"I've analyzed my {item.food_name}.", item)
        return await self.chat_session.append_assistant_message(format_analysis_summary(item))

    # Chat

    async def start_chat(self) -> Optional[ChatMessage]:
        return await self.chat_session.seed_greeting(self.profile.name)

    async def send_message(self, text: str) -> AgentResult[ChatMessage]:
        """
        Append the user's message and ask for a reply.

        On failure only the user's message is kept; the typed error is returned.
        While a reply is pending, a further message is rejected with
        RequestInProgressError and is not added to the transcript.
        """
        if self._sending or self.chat_agent.in_flight:
            logger.warning("Message rejected: previous reply still pending")
            return AgentResult.failure(RequestInProgressError())

        self._sending = True
        try:
            await self.chat_session.append_user_message(text)
            result = await self.chat_agent.get_reply(self.chat_session.as_turns(), self.profile)
            if not result.ok:
                return AgentResult.failure(result.error)
            reply = await self.chat_session.append_assistant_message(result.value)
            return AgentResult.success(reply)
        finally:
            self._sending = False

    def should_offer_extended_questionnaire(self) -> bool:
        return self.chat_session.should_offer_extended_questionnaire(self.profile)

    async def clear_chat(self) -> None:
        await self.chat_session.clear()

    # Session

    async def logout(self) -> None:
        await self.profile_store.reset()
        await self.history_log.clear()
        await self.chat_session.clear()
        logger.info("Logged out: local data cleared")


async def build_companion(
    config: Any,
    storage: Optional[StorageInterface] = None,
    secrets: Optional[SecretProvider] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> CompanionService:
    """
    Construct and load a CompanionService from settings.

    Args:
        config: Settings object
        storage: Storage implementation (LocalStorage at config.local_storage_path if None)
        secrets: Credential source (reads config.llm_api_key if None)
        transport: Optional httpx transport for the inference endpoint
    """
    storage = storage or LocalStorage(config.local_storage_path)
    secrets = secrets or SettingsSecretProvider(config)

    provider = create_llm_provider(
        secrets=secrets,
        provider=config.llm_provider,
        base_url=config.llm_base_url,
        transport=transport,
        timeout=config.llm_timeout,
        log_calls=config.log_llm_calls,
    )

    companion = CompanionService(
        profile_store=ProfileStore(storage, config.profile_storage_key),
        history_log=HistoryLog(storage, config.history_storage_key, config.history_max_items),
        chat_session=ChatSession(storage, config.chat_storage_key, config.chat_max_messages),
        analysis_agent=FoodAnalysisAgent(
            provider,
            temperature=config.analysis_temperature,
            max_tokens=config.analysis_max_tokens,
            top_p=config.analysis_top_p,
            model=config.analysis_model,
        ),
        chat_agent=ChatAgent(
            provider,
            temperature=config.chat_temperature,
            max_tokens=config.chat_max_tokens,
            top_p=config.chat_top_p,
            model=config.chat_model,
        ),
    )
    await companion.load()
    return companion
