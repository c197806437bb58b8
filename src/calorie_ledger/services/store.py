"""Tabular store interface consumed by the engine."""

from typing import Protocol

from calorie_ledger.domain.layout import CellRef

ROW_INDEX = "row_index"


class TabularStore(Protocol):
    """Key-addressed document with named collections of rows.

    Every method raises ``CollectionNotFoundError`` when the collection
    does not exist. Rows returned by ``read_all`` exclude any header row and
    carry their position under ``ROW_INDEX``.
    """

    def read_all(self, collection: str) -> list[dict[str, object]]:
        """Return all data rows in store order."""

    def read_fields(
        self, collection: str, fields: tuple[str, ...]
    ) -> dict[str, object]:
        """Return the named fields of a key/value collection."""

    def write_fields(self, collection: str, values: dict[str, object]) -> None:
        """Overwrite named fields of a key/value collection."""

    def write_row(
        self, collection: str, row_index: int, values: dict[str, object]
    ) -> None:
        """Overwrite the row at ``row_index``."""

    def append_row(self, collection: str, values: dict[str, object]) -> int:
        """Append a row and return its index."""

    def annotate(self, cell: CellRef, style_hint: str) -> None:
        """Attach a presentation hint to a cell."""
