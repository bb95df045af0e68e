"""Shared fixtures for the atomfeed test suite."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

import pytest
from faker import Faker

from atomfeed.core.config import AtomFeedConfig, FeedSettings, SiteSettings
from atomfeed.core.rendering import MarkdownRenderer
from atomfeed.core.types import ContentRecord
from atomfeed.infra.repository.memory import MemoryContentStore

SERVER_URL = "https://site.example/"

fake = Faker()


@pytest.fixture
def site() -> SiteSettings:
    return SiteSettings(title="Dullroar Wiki", subtitle="Notes from the *basement*", server_url=SERVER_URL)


@pytest.fixture
def config(site: SiteSettings) -> AtomFeedConfig:
    return AtomFeedConfig(site=site, feed=FeedSettings())


@pytest.fixture
def renderer() -> MarkdownRenderer:
    return MarkdownRenderer()


@pytest.fixture
def make_record() -> Callable[..., ContentRecord]:
    """Factory for records with realistic filler text."""

    def _make(title: str, **fields) -> ContentRecord:
        fields.setdefault("text", fake.paragraph(nb_sentences=3))
        fields.setdefault("tags", ("journal",))
        return ContentRecord(title=title, **fields)

    return _make


@pytest.fixture
def records(make_record) -> list[ContentRecord]:
    return [
        make_record(
            "First Post",
            modified=datetime(2024, 1, 1, 9, 0, tzinfo=UTC),
            creator="alice",
            summary="The very first post.",
        ),
        make_record(
            "Second Post",
            modified=datetime(2024, 3, 1, 9, 0, tzinfo=UTC),
            creator="bob",
            modifier="carol",
        ),
        make_record(
            "Third Post",
            modified=datetime(2024, 2, 1, 9, 0, tzinfo=UTC),
            creator="dave",
        ),
    ]


@pytest.fixture
def store(records: list[ContentRecord]) -> MemoryContentStore:
    return MemoryContentStore(records)
