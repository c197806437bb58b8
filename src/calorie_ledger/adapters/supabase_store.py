"""Supabase implementation of the tabular store."""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from postgrest.exceptions import APIError
from supabase import Client

from calorie_ledger.domain.errors import CollectionNotFoundError, StoreUnavailableError
from calorie_ledger.domain.layout import CellRef
from calorie_ledger.services.store import ROW_INDEX, TabularStore

# undefined_table from Postgres, and PostgREST's schema-cache miss
MISSING_TABLE_CODES = {"42P01", "PGRST205"}


@dataclass
class SupabaseTabularStore(TabularStore):
    """Stores each collection as a table ordered by ``row_index``.

    Key/value collections such as the profile use ``field`` and ``value``
    columns. Style hints live in ``<field>_style`` columns.
    """

    client: Client

    def read_all(self, collection: str) -> list[dict[str, object]]:
        """Return all rows of a table in row order."""
        with _translate_errors(collection):
            response = (
                self.client.table(collection)
                .select("*")
                .order(ROW_INDEX, desc=False)
                .execute()
            )
        return list(response.data or [])

    def read_fields(
        self, collection: str, fields: tuple[str, ...]
    ) -> dict[str, object]:
        """Return requested key/value fields; missing keys map to None."""
        with _translate_errors(collection):
            response = (
                self.client.table(collection)
                .select("field, value")
                .in_("field", list(fields))
                .execute()
            )
        values: dict[str, object] = dict.fromkeys(fields)
        for row in response.data or []:
            name = row.get("field")
            if name in values:
                values[str(name)] = row.get("value")
        return values

    def write_fields(self, collection: str, values: dict[str, object]) -> None:
        """Upsert key/value fields."""
        if not values:
            return
        payload = [
            {"field": name, "value": None if value is None else str(value)}
            for name, value in values.items()
        ]
        with _translate_errors(collection):
            self.client.table(collection).upsert(
                payload, on_conflict="field"
            ).execute()

    def write_row(
        self, collection: str, row_index: int, values: dict[str, object]
    ) -> None:
        """Update the row with the given index."""
        with _translate_errors(collection):
            self.client.table(collection).update(values).eq(
                ROW_INDEX, row_index
            ).execute()

    def append_row(self, collection: str, values: dict[str, object]) -> int:
        """Insert a row after the current last row."""
        with _translate_errors(collection):
            response = (
                self.client.table(collection)
                .select(ROW_INDEX)
                .order(ROW_INDEX, desc=True)
                .limit(1)
                .execute()
            )
            last = response.data[0].get(ROW_INDEX) if response.data else None
            row_index = int(last) + 1 if isinstance(last, int) else 1
            inserted = (
                self.client.table(collection)
                .insert({**values, ROW_INDEX: row_index})
                .execute()
            )
        if not inserted.data:
            raise StoreUnavailableError(collection, "insert returned no row")
        return row_index

    def annotate(self, cell: CellRef, style_hint: str) -> None:
        """Store a presentation hint next to the annotated field."""
        with _translate_errors(cell.collection):
            self.client.table(cell.collection).update(
                {f"{cell.field}_style": style_hint}
            ).eq(ROW_INDEX, cell.row_index).execute()


@contextmanager
def _translate_errors(collection: str) -> Iterator[None]:
    try:
        yield
    except APIError as exc:
        if exc.code in MISSING_TABLE_CODES:
            raise CollectionNotFoundError(collection) from exc
        raise StoreUnavailableError(collection, exc.message or str(exc)) from exc
