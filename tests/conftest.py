"""
Shared pytest fixtures for the PinMatch test suite.

This module provides fixtures for:
- Settings isolated from the environment and any .env file
- Service instances built with those settings
"""

from typing import Any

import pytest

from pinmatch.config import Settings
from pinmatch.services.duplicate_detection import DuplicateDetectionService
from pinmatch.services.search import SearchService
from pinmatch.services.similarity import SimilarityIndex
from pinmatch.services.stacking import StackingService


@pytest.fixture
def settings() -> Settings:
    """Provide default settings that ignore PINMATCH_* variables and .env files."""
    return Settings(_env_file=None)


@pytest.fixture
def similarity_index(settings: Settings) -> SimilarityIndex:
    """Provide similarity index with default settings."""
    return SimilarityIndex(settings)


@pytest.fixture
def duplicate_detection_service(
    similarity_index: SimilarityIndex,
    settings: Settings,
) -> DuplicateDetectionService:
    """Provide duplicate detection service sharing the similarity index."""
    return DuplicateDetectionService(similarity_index=similarity_index, settings=settings)


@pytest.fixture
def search_service(settings: Settings) -> SearchService:
    """Provide search service with default settings."""
    return SearchService(settings)


@pytest.fixture
def stacking_service(settings: Settings) -> StackingService:
    """Provide stacking service with default settings."""
    return StackingService(settings)


def pytest_configure(config: Any) -> None:
    """
    Register custom pytest markers.

    Markers:
        - unit: Unit tests (isolated, fast)
    """
    config.addinivalue_line("markers", "unit: Unit tests (isolated, fast)")
