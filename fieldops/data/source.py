from __future__ import annotations

from typing import Any, Iterable, Mapping, Protocol

from .record import Record, load_records
from .schema import TableSchema


class RecordSource(Protocol):
    name: str

    def schemas(self) -> dict[str, TableSchema]: ...

    def fetch(self, table: str, site_id: str) -> list[Record]:
        """Return the read-only records of one table for one site."""
        ...


class InMemoryRecordSource:
    """RecordSource over raw row dicts (fixtures), keyed by (table, site_id).

    Dates are parsed eagerly with an explicit policy, so a malformed date
    either fails construction ("raise") or drops that row ("skip").
    """

    def __init__(
        self,
        name: str,
        schemas: Mapping[str, TableSchema],
        rows: Mapping[tuple[str, str], Iterable[Mapping[str, Any]]],
        on_error: str = "raise",
    ):
        self.name = name
        self._schemas = dict(schemas)
        self._records: dict[tuple[str, str], list[Record]] = {}
        for (table, site_id), table_rows in rows.items():
            if table not in self._schemas:
                raise KeyError(table)
            self._records[(table, str(site_id))] = load_records(
                table_rows, self._schemas[table], on_error=on_error
            )

    def schemas(self) -> dict[str, TableSchema]:
        return self._schemas

    def fetch(self, table: str, site_id: str) -> list[Record]:
        if table not in self._schemas:
            raise KeyError(table)
        return list(self._records.get((table, str(site_id)), []))
