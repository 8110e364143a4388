"""
Shared fixtures.
"""

import pytest

from gitgrade.fetcher import ContentCache, ContentFetcher
from tests._fixtures.stubs import StubGenerationService, StubProvider


@pytest.fixture
def stub_service():
    return StubGenerationService()


@pytest.fixture
def stub_provider():
    return StubProvider()


@pytest.fixture
def fetcher(stub_provider):
    """Fetcher with a fresh cache and the in-memory host for github.com."""
    return ContentFetcher(
        cache=ContentCache(), providers={"github.com": stub_provider}, use_cache=True
    )
