"""Whole-document persistence port."""

from typing import Protocol

PROFILE_KEY = "profile"
LOGS_KEY = "logs"
CUSTOM_MEALS_KEY = "custom_meals"
WATER_KEY = "water"

JsonDocument = dict[str, object] | list[object]


class DocumentStore(Protocol):
    """Key-value store of whole JSON documents scoped per user."""

    def get(self, user_id: str, key: str) -> JsonDocument | None:
        """Return the stored document, if present."""

    def set(self, user_id: str, key: str, value: JsonDocument) -> None:
        """Replace the stored document."""

    def remove(self, user_id: str, key: str) -> None:
        """Delete the stored document if it exists."""
