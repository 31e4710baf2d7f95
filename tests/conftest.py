"""
Shared test fixtures and configuration.
"""

import os
import tempfile

import pytest

# Set test environment variables before importing package modules
os.environ.setdefault("LOCAL_STORAGE_PATH", os.path.join(tempfile.gettempdir(), "pcos_companion_test_data"))
os.environ.setdefault("LOG_FILE_ENABLED", "false")
os.environ.setdefault("LOG_CONSOLE_ENABLED", "false")
os.environ.setdefault("LLM_API_KEY", "")

from pcos_companion.storage import MemoryStorage  # noqa: E402


@pytest.fixture
def storage():
    return MemoryStorage()

