"""Shared fixtures for subsonic_compat tests."""

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from subsonic_compat.models import SubsonicConfig


@pytest.fixture
def fixtures() -> Dict[str, Any]:
    """Load Subsonic API response fixtures from JSON file.

    Returns:
        Dictionary of response documents keyed by scenario name
    """
    fixtures_path = Path(__file__).parent / "fixtures" / "subsonic_responses.json"
    with open(fixtures_path, "r") as f:
        return json.load(f)


@pytest.fixture
def subsonic_config() -> SubsonicConfig:
    """HTTPS configuration with password (token) authentication."""
    return SubsonicConfig(
        url="https://music.example.com",
        username="testuser",
        password="testpass",
        client_name="subsonic-compat-test",
        api_version="1.16.1",
    )
