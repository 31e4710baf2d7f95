"""
Configuration Settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


DEFAULT_MODEL = "accounts/fireworks/models/llama4-maverick-instruct-basic"


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # App info
    app_name: str = "PCOS Companion"
    app_version: str = "1.0.0"
    debug: bool = False

    # Storage
    local_storage_path: str = "./data"
    profile_storage_key: str = "pcosProfile"
    history_storage_key: str = "foodAnalysisHistory"
    chat_storage_key: str = "chatHistory"
    history_max_items: int = 100
    chat_max_messages: int = 100

    # Inference endpoint
    llm_provider: str = "fireworks"  # "fireworks" or "openai"
    llm_api_key: Optional[str] = None
    llm_base_url: Optional[str] = None  # uses provider default if not set
    llm_timeout: float = 120.0

    # Food image analysis
    analysis_model: str = DEFAULT_MODEL
    analysis_max_tokens: int = 1024
    analysis_temperature: float = 0.4
    analysis_top_p: float = 0.95

    # Chat
    chat_model: str = DEFAULT_MODEL
    chat_max_tokens: int = 512
    chat_temperature: float = 0.7
    chat_top_p: float = 0.95

    # Logging configuration
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file_path: str = "./logs/pcos_companion.log"
    log_file_enabled: bool = True
    log_console_enabled: bool = True
    log_json_format: bool = True  # JSON format for files, human-readable for console
    log_llm_calls: bool = True  # Log all LLM calls with token usage


settings = Settings()
