# tests/conftest.py

"""Shared pytest fixtures for all listing editor tests."""

from collections.abc import Generator
from unittest.mock import patch

import pytest

from listing_editor.config.settings import Settings


@pytest.fixture(autouse=True)
def isolated_settings() -> Generator[None, None, None]:
    """Pin env-derived settings so a local .env cannot leak in."""
    with patch.object(
        Settings, "SUPABASE_URL", "https://project.supabase.test"
    ), patch.object(
        Settings, "SUPABASE_KEY", "test-anon-key"
    ), patch.object(
        Settings, "BLOCK_SUBMIT_ON_LOAD_FAILURE", False
    ), patch.object(
        Settings, "CONSOLE_LOG_LEVEL", "WARNING"
    ):
        yield
