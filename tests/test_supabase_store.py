"""Tests for the Supabase tabular store."""

from dataclasses import dataclass, field

import pytest
from postgrest.exceptions import APIError

from calorie_ledger.adapters.supabase_store import SupabaseTabularStore
from calorie_ledger.domain.errors import CollectionNotFoundError, StoreUnavailableError
from calorie_ledger.domain.layout import CellRef


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "update": [], "upsert": []}
    )
    payloads: list[tuple[str, object]] = field(default_factory=list)
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    error: APIError | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.payloads.append(("insert", payload))
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.payloads.append(("update", payload))
        return self

    def upsert(self, payload, on_conflict: str = "") -> "FakeTable":  # type: ignore
        self._action = "upsert"
        self.payloads.append(("upsert", payload))
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def in_(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        if self.error is not None:
            raise self.error
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_read_all_returns_rows() -> None:
    client = FakeSupabaseClient()
    client.table("food_log").queue(
        "select", [{"row_index": 1, "date": "2024-01-15", "calories": 350}]
    )

    rows = SupabaseTabularStore(client).read_all("food_log")

    assert rows == [{"row_index": 1, "date": "2024-01-15", "calories": 350}]


def test_read_fields_fills_missing_keys() -> None:
    client = FakeSupabaseClient()
    client.table("profile").queue(
        "select", [{"field": "sex", "value": "Male"}, {"field": "other", "value": 1}]
    )

    values = SupabaseTabularStore(client).read_fields("profile", ("sex", "age_years"))

    assert values == {"sex": "Male", "age_years": None}


def test_write_fields_upserts_text_values() -> None:
    client = FakeSupabaseClient()

    SupabaseTabularStore(client).write_fields("profile", {"weight_kg": 70.5})

    action, payload = client.table("profile").payloads[0]
    assert action == "upsert"
    assert payload == [{"field": "weight_kg", "value": "70.5"}]


def test_append_row_uses_next_row_index() -> None:
    client = FakeSupabaseClient()
    table = client.table("daily_summary")
    table.queue("select", [{"row_index": 4}])
    table.queue("insert", [{"row_index": 5}])

    row_index = SupabaseTabularStore(client).append_row(
        "daily_summary", {"date": "2024-01-15"}
    )

    assert row_index == 5
    assert table.payloads[0] == ("insert", {"date": "2024-01-15", "row_index": 5})


def test_append_row_to_empty_table_starts_at_one() -> None:
    client = FakeSupabaseClient()
    client.table("food_log").queue("insert", [{"row_index": 1}])

    assert SupabaseTabularStore(client).append_row("food_log", {"calories": 1}) == 1


def test_write_row_and_annotate_filter_by_row_index() -> None:
    client = FakeSupabaseClient()
    store = SupabaseTabularStore(client)

    store.write_row("daily_summary", 3, {"total_calories": 1600.0})
    store.annotate(CellRef("daily_summary", 3, "status"), "green")

    table = client.table("daily_summary")
    assert table.payloads == [
        ("update", {"total_calories": 1600.0}),
        ("update", {"status_style": "green"}),
    ]
    assert table.last_filters == [("row_index", 3), ("row_index", 3)]


def test_missing_table_maps_to_collection_error() -> None:
    client = FakeSupabaseClient()
    client.table("daily_summary").error = APIError(
        {"message": "relation does not exist", "code": "42P01"}
    )

    with pytest.raises(CollectionNotFoundError):
        SupabaseTabularStore(client).read_all("daily_summary")


def test_other_api_errors_map_to_store_unavailable() -> None:
    client = FakeSupabaseClient()
    client.table("profile").error = APIError(
        {"message": "canceling statement due to statement timeout", "code": "57014"}
    )

    with pytest.raises(StoreUnavailableError) as excinfo:
        SupabaseTabularStore(client).read_fields("profile", ("sex",))

    assert excinfo.value.collection == "profile"
    assert "statement timeout" in excinfo.value.message


def test_append_without_inserted_row_is_store_unavailable() -> None:
    client = FakeSupabaseClient()

    with pytest.raises(StoreUnavailableError):
        SupabaseTabularStore(client).append_row("food_log", {"calories": 1})
