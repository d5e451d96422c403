"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import pytest

from tests.fakes import SESSION, FakeCredentialStore


@pytest.fixture
def journal() -> list[str]:
    """Ordered log shared by fakes that need cross-object ordering."""
    return []


@pytest.fixture
def credential_store(journal: list[str]) -> FakeCredentialStore:
    """Authenticated fake credential store writing to ``journal``."""
    return FakeCredentialStore(session=SESSION, journal=journal)


@pytest.fixture
def anonymous_store(journal: list[str]) -> FakeCredentialStore:
    """Fake credential store without a session."""
    return FakeCredentialStore(journal=journal)
