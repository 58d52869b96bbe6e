"""Supabase-backed profile repository."""

from dataclasses import dataclass

from supabase import Client

from nutriai.services.profiles import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for the per-user profile record."""

    client: Client
    table_name: str = "profiles"

    def get_profile(self, user_id: str) -> dict[str, object] | None:
        """Return the full profile row, if present."""
        response = (
            self.client.table(self.table_name)
            .select("*")
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0]

    def upsert_profile(self, user_id: str, row: dict[str, object]) -> None:
        """Insert or overwrite the full profile row."""
        payload = {**row, "id": user_id}
        self.client.table(self.table_name).upsert(payload).execute()
