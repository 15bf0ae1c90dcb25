"""Supabase-backed whole-document store."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from fit_tracker.services.store import DocumentStore, JsonDocument


@dataclass
class SupabaseDocumentStore(DocumentStore):
    """Stores one JSON document per user and key in a Supabase table."""

    client: Client
    table_name: str = "fit_documents"

    def get(self, user_id: str, key: str) -> JsonDocument | None:
        """Return the stored document body, if present."""
        response = (
            self.client.table(self.table_name)
            .select("body")
            .eq("user_id", user_id)
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("body")

    def set(self, user_id: str, key: str, value: JsonDocument) -> None:
        """Insert or replace the document for the user and key."""
        self.client.table(self.table_name).upsert(
            {
                "user_id": user_id,
                "key": key,
                "body": value,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id,key",
        ).execute()

    def remove(self, user_id: str, key: str) -> None:
        """Delete the document for the user and key."""
        self.client.table(self.table_name).delete().eq("user_id", user_id).eq(
            "key", key
        ).execute()
