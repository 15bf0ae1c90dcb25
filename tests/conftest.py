"""Shared test fixtures."""

import copy
from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest

from fit_tracker.config import Settings
from fit_tracker.containers import AppContainer, build_services
from fit_tracker.services.store import DocumentStore, JsonDocument

FIXED_NOW = datetime(2024, 3, 10, 12, 0, tzinfo=UTC)


@dataclass
class InMemoryDocumentStore(DocumentStore):
    """In-memory document store for tests."""

    documents: dict[tuple[str, str], JsonDocument] = field(default_factory=dict)

    def get(self, user_id: str, key: str) -> JsonDocument | None:
        doc = self.documents.get((user_id, key))
        return copy.deepcopy(doc)

    def set(self, user_id: str, key: str, value: JsonDocument) -> None:
        self.documents[(user_id, key)] = copy.deepcopy(value)

    def remove(self, user_id: str, key: str) -> None:
        self.documents.pop((user_id, key), None)


@dataclass
class FakeClock:
    """Clock returning a settable instant."""

    now: datetime = FIXED_NOW

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def container(
    settings: Settings,
    store: InMemoryDocumentStore,
    clock: FakeClock,
) -> AppContainer:
    container = build_services(settings, store)
    container.tracker_service.clock = clock
    return container
