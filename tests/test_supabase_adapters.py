"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from types import SimpleNamespace
from typing import Any

import pytest

from nutriai.adapters.supabase_auth_client import SupabaseAuthClient
from nutriai.adapters.supabase_profile_repository import SupabaseProfileRepository


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "upsert": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def upsert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "upsert"
        self.last_payload = payload
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeAuthApi:
    """Stands in for ``client.auth`` with canned responses."""

    user: SimpleNamespace
    session: SimpleNamespace | None
    sign_in_error: Exception | None = None
    calls: list[tuple[str, object]] = field(default_factory=list)
    listener: object | None = None

    def __post_init__(self) -> None:
        self.admin = SimpleNamespace(
            sign_out=lambda jwt: self.calls.append(("admin.sign_out", jwt))
        )

    def sign_up(self, credentials: dict[str, object]) -> SimpleNamespace:
        self.calls.append(("sign_up", credentials))
        return SimpleNamespace(user=self.user, session=None)

    def sign_in_with_password(self, credentials: dict[str, object]) -> SimpleNamespace:
        self.calls.append(("sign_in_with_password", credentials))
        if self.sign_in_error is not None:
            raise self.sign_in_error
        return SimpleNamespace(user=self.user, session=self.session)

    def get_user(self, jwt: str) -> SimpleNamespace | None:
        self.calls.append(("get_user", jwt))
        if jwt != self.session.access_token:
            return None
        return SimpleNamespace(user=self.user)

    def on_auth_state_change(self, callback: Any) -> SimpleNamespace:
        self.listener = callback
        return SimpleNamespace(unsubscribe=lambda: None)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)
    auth: FakeAuthApi | None = None

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _auth_api() -> FakeAuthApi:
    user = SimpleNamespace(
        id="1f0c3b9e-0000-4000-8000-000000000001",
        email="user@example.com",
        user_metadata={"name": "Utilizador Exemplo"},
    )
    session = SimpleNamespace(
        access_token="access", refresh_token="refresh", expires_at=1_800_000_000
    )
    return FakeAuthApi(user=user, session=session)


def test_profile_repository_fetches_full_row() -> None:
    client = FakeSupabaseClient()
    table = client.table("profiles")
    table.queue("select", [{"id": "user-1", "name": "Ana", "age": 40}])

    repository = SupabaseProfileRepository(client)
    row = repository.get_profile("user-1")

    assert row == {"id": "user-1", "name": "Ana", "age": 40}
    assert table.last_filters == [("id", "user-1")]


def test_profile_repository_returns_none_when_missing() -> None:
    client = FakeSupabaseClient()

    repository = SupabaseProfileRepository(client, table_name="nutri_profiles")

    assert repository.get_profile("user-1") is None
    assert "nutri_profiles" in client.tables


def test_profile_repository_upserts_whole_record() -> None:
    client = FakeSupabaseClient()
    repository = SupabaseProfileRepository(client)

    repository.upsert_profile(
        "user-1", {"id": "other", "name": "Ana", "shopping_list": None}
    )

    payload = client.tables["profiles"].last_payload
    assert payload["id"] == "user-1"
    assert payload["name"] == "Ana"
    assert payload["shopping_list"] is None
    assert set(payload) == {"id", "name", "shopping_list"}


def test_auth_client_sign_in_maps_session() -> None:
    client = FakeSupabaseClient(auth=_auth_api())
    auth = SupabaseAuthClient(client)

    session = auth.sign_in_with_password("user@example.com", "password123")

    assert session.access_token == "access"
    assert session.expires_at == 1_800_000_000
    assert session.user.name == "Utilizador Exemplo"
    assert client.auth.calls[0] == (
        "sign_in_with_password",
        {"email": "user@example.com", "password": "password123"},
    )


def test_auth_client_sign_in_propagates_errors() -> None:
    api = _auth_api()
    api.sign_in_error = RuntimeError("Invalid login credentials")
    auth = SupabaseAuthClient(FakeSupabaseClient(auth=api))

    with pytest.raises(RuntimeError, match="Invalid login credentials"):
        auth.sign_in_with_password("user@example.com", "nope")


def test_auth_client_sign_up_sends_name_metadata() -> None:
    client = FakeSupabaseClient(auth=_auth_api())
    auth = SupabaseAuthClient(client)

    user = auth.sign_up("Utilizador Exemplo", "user@example.com", "password123")

    assert user.id == "1f0c3b9e-0000-4000-8000-000000000001"
    _, credentials = client.auth.calls[0]
    assert credentials["options"] == {"data": {"name": "Utilizador Exemplo"}}


def test_auth_client_get_user_and_sign_out() -> None:
    client = FakeSupabaseClient(auth=_auth_api())
    auth = SupabaseAuthClient(client)

    assert auth.get_user("access") is not None
    assert auth.get_user("other") is None
    auth.sign_out("access")

    assert ("admin.sign_out", "access") in client.auth.calls


def test_auth_client_forwards_state_changes() -> None:
    api = _auth_api()
    auth = SupabaseAuthClient(FakeSupabaseClient(auth=api))
    events: list[tuple[str, str | None]] = []

    auth.on_auth_state_change(
        lambda event, session: events.append(
            (event, session.user.email if session else None)
        )
    )
    api.listener("SIGNED_IN", SimpleNamespace(**vars(api.session), user=api.user))
    api.listener("SIGNED_OUT", None)

    assert events == [("SIGNED_IN", "user@example.com"), ("SIGNED_OUT", None)]
