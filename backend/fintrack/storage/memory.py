from __future__ import annotations

from typing import Any, Dict, List, Optional, Type

from .base import Storage
from .entities import ENTITY_TYPES, Entity


class Table:
    """
    Integer-indexed row arena for one entity type.

    Ids come from a counter that only moves forward, so a deleted id is
    never handed out again.
    """

    def __init__(self, record_type: Type[Entity]):
        self.record_type = record_type
        self._rows: Dict[int, Entity] = {}
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._rows)

    def get(self, row_id: int) -> Optional[Entity]:
        return self._rows.get(row_id)

    def values(self) -> List[Entity]:
        return list(self._rows.values())

    def insert(self, data: Dict[str, Any]) -> Entity:
        payload = {k: v for k, v in data.items() if k != "id"}
        # validate before claiming the id so a bad row doesn't burn one
        row = self.record_type.model_validate({**payload, "id": self._next_id})
        self._rows[row.id] = row
        self._next_id += 1
        return row

    def update(self, row_id: int, changes: Dict[str, Any]) -> Optional[Entity]:
        current = self._rows.get(row_id)
        if current is None:
            return None
        merged = {**current.model_dump(), **changes, "id": row_id}
        row = self.record_type.model_validate(merged)
        self._rows[row_id] = row
        return row

    def delete(self, row_id: int) -> bool:
        return self._rows.pop(row_id, None) is not None


class MemoryStorage(Storage):
    """Process-local store; everything is lost on restart."""

    def __init__(self):
        self.tables: Dict[str, Table] = {
            name: Table(record_type) for name, record_type in ENTITY_TYPES.items()
        }

    def _table(self, table: str) -> Table:
        try:
            return self.tables[table]
        except KeyError:
            raise KeyError(f"Unknown table: {table}") from None

    def get(self, table, row_id):
        return self._table(table).get(row_id)

    def rows(self, table, user_id=None):
        values = self._table(table).values()
        if user_id is None:
            return values
        return [row for row in values if row.user_id == user_id]

    def insert(self, table, data):
        return self._table(table).insert(data)

    def update(self, table, row_id, changes):
        return self._table(table).update(row_id, changes)

    def delete(self, table, row_id):
        return self._table(table).delete(row_id)
