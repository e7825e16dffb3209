"""Base repository class."""

from dataclasses import fields
from typing import Any

from loguru import logger

from app.errors import NotFoundError
from app.models.common import BaseEntity
from app.repositories.db import Transaction


class BaseRepository:
    """Row <-> entity mapping for one table. Stateless: every call takes the transaction."""

    table: str = ""
    entity: type[BaseEntity] = BaseEntity
    key: str = "id"
    label: str = "Entity"

    def __init__(self):
        self._columns = [f.name for f in fields(self.entity)]
        logger.debug("{} initialized", self.__class__.__name__)

    def _to_entity(self, row: dict | None):
        return self.entity.from_row(row) if row else None

    def get(self, tx: Transaction, key: Any):
        """Fetch by primary key or None."""
        row = tx.fetch_dict(f"SELECT * FROM {self.table} WHERE {self.key} = ?", [key])
        return self._to_entity(row)

    def require(self, tx: Transaction, key: Any):
        """Fetch by primary key or raise NotFoundError."""
        entity = self.get(tx, key)
        if entity is None:
            raise NotFoundError(self.label, key)
        return entity

    def select(self, tx: Transaction, where: str = "", params: list | None = None, order_by: str = "") -> list:
        query = f"SELECT * FROM {self.table}"
        if where:
            query += f" WHERE {where}"
        if order_by:
            query += f" ORDER BY {order_by}"
        return [self._to_entity(r) for r in tx.fetch_dicts(query, params)]

    def insert(self, tx: Transaction, entity: BaseEntity) -> None:
        values = [getattr(entity, c) for c in self._columns]
        placeholders = ", ".join("?" for _ in self._columns)
        tx.execute(
            f"INSERT INTO {self.table} ({', '.join(self._columns)}) VALUES ({placeholders})",
            values,
        )

    def update(self, tx: Transaction, key: Any, **changes) -> None:
        """Set the given columns on one row."""
        if not changes:
            return
        assignments = ", ".join(f"{c} = ?" for c in changes)
        tx.execute(
            f"UPDATE {self.table} SET {assignments} WHERE {self.key} = ?",
            [*changes.values(), key],
        )
