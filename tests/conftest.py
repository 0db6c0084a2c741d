"""Shared fixtures for settingsform tests."""

import pytest

from settingsform.hooks import HookBus
from settingsform.host import AdminSettings, SignedNonceIssuer
from settingsform.stores import MemoryOptionStore


@pytest.fixture
def hooks():
    return HookBus()


@pytest.fixture
def store():
    return MemoryOptionStore()


@pytest.fixture
def settings_api(store):
    return AdminSettings(store, SignedNonceIssuer("test-secret"))


@pytest.fixture
def general_source():
    return {
        "sections": [
            {
                "section_id": "general",
                "title": "General",
                "order": 1,
                "fields": [
                    {"id": "name", "title": "Name", "type": "text", "default": "Bob"}
                ],
            }
        ]
    }
