"""Async data access layer for the guidance tables.

Provides GuidanceDAL with generic create / read / update operations over the
record dataclasses in `models.guidance_records`, compatible with
`utils.database_init.AsyncDatabaseInitializer`.
"""

from __future__ import annotations

import dataclasses
import json
import time
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Type, TypeVar

from models.guidance_records import ProfessorMatch, UniversityMatch
from utils.database_init import AsyncDatabaseInitializer

R = TypeVar("R")


def _columns(record_type: type) -> Tuple[str, ...]:
    return tuple(f.name for f in dataclasses.fields(record_type))


def _encode(value: Any) -> Any:
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    return value


def _decode(record_type: type, column: str, value: Any) -> Any:
    if value is None or column not in record_type.JSON_FIELDS:
        return value
    try:
        return json.loads(value)
    except (TypeError, ValueError):
        return value


class GuidanceDAL:
    """Data access layer for guidance records.

    The constructor accepts an `AsyncDatabaseInitializer` (or any object
    exposing an async `connection()` context manager that yields an
    `aiosqlite.Connection`). Record types must be dataclasses declaring a
    `TABLE` name and their `JSON_FIELDS`.
    """

    def __init__(self, db_initializer: AsyncDatabaseInitializer) -> None:
        self._db = db_initializer

    async def create(self, record: R) -> R:
        """Insert `record` and return a copy carrying the new id.

        `created_at` / `updated_at` are filled with the current time when the
        record type has them and they are unset.
        """
        record_type = type(record)
        now = int(time.time())
        stamps = {
            name: now
            for name in ("created_at", "updated_at")
            if name in _columns(record_type) and getattr(record, name) is None
        }
        if stamps:
            record = dataclasses.replace(record, **stamps)

        columns = _columns(record_type)[1:]
        placeholders = ", ".join("?" for _ in columns)
        params = tuple(_encode(getattr(record, col)) for col in columns)

        async with self._db.connection() as conn:
            cur = await conn.execute(
                f"INSERT INTO {record_type.TABLE} ({', '.join(columns)}) VALUES ({placeholders})",
                params,
            )
            await conn.commit()
            return dataclasses.replace(record, id=cur.lastrowid)

    async def get_by_id(self, record_type: Type[R], record_id: int) -> Optional[R]:
        """Return the record with `record_id`, or None if not found."""
        rows = await self._select(record_type, "id = ?", (record_id,))
        return rows[0] if rows else None

    async def get_by_user_id(self, record_type: Type[R], user_id: int) -> Optional[R]:
        """Return the first record stored for `user_id`, or None."""
        rows = await self._select(record_type, "user_id = ?", (user_id,), limit=1)
        return rows[0] if rows else None

    async def list_by_user_id(self, record_type: Type[R], user_id: int) -> List[R]:
        """Return every record stored for `user_id` in insertion order."""
        return await self._select(record_type, "user_id = ?", (user_id,))

    async def update(self, record_type: Type[R], record_id: int, **changes: Any) -> R:
        """Apply `changes` to the row and return the updated record.

        Raises:
            ValueError: If a change names an unknown column or the id.
            LookupError: If no row has `record_id`.
        """
        columns = _columns(record_type)
        unknown = [name for name in changes if name not in columns or name == "id"]
        if unknown:
            raise ValueError(f"Unknown {record_type.__name__} fields: {', '.join(sorted(unknown))}")
        if "updated_at" in columns and "updated_at" not in changes:
            changes["updated_at"] = int(time.time())

        if changes:
            assignments = ", ".join(f"{col} = ?" for col in changes)
            params = [_encode(val) for val in changes.values()]
            params.append(record_id)
            async with self._db.connection() as conn:
                await conn.execute(
                    f"UPDATE {record_type.TABLE} SET {assignments} WHERE id = ?", tuple(params)
                )
                await conn.commit()

        updated = await self.get_by_id(record_type, record_id)
        if updated is None:
            raise LookupError(f"{record_type.__name__} {record_id} not found")
        return updated

    async def replace_university_matches(
        self, profile_id: int, matches: Iterable[Any]
    ) -> List[UniversityMatch]:
        """Store `matches` as the profile's university matches, replacing earlier ones."""
        return await self._replace_children(
            UniversityMatch,
            "profile_id",
            profile_id,
            [UniversityMatch.from_payload(profile_id, m) for m in matches if isinstance(m, dict)],
        )

    async def get_university_matches(self, profile_id: int) -> List[UniversityMatch]:
        return await self._select(UniversityMatch, "profile_id = ?", (profile_id,))

    async def replace_professor_matches(
        self, research_interest_id: int, matches: Iterable[Any]
    ) -> List[ProfessorMatch]:
        """Store `matches` as the research interest's professor matches."""
        return await self._replace_children(
            ProfessorMatch,
            "research_interest_id",
            research_interest_id,
            [ProfessorMatch.from_payload(research_interest_id, m) for m in matches if isinstance(m, dict)],
        )

    async def get_professor_matches(self, research_interest_id: int) -> List[ProfessorMatch]:
        return await self._select(ProfessorMatch, "research_interest_id = ?", (research_interest_id,))

    async def _replace_children(
        self, record_type: Type[R], owner_column: str, owner_id: int, records: List[R]
    ) -> List[R]:
        async with self._db.connection() as conn:
            await conn.execute(f"DELETE FROM {record_type.TABLE} WHERE {owner_column} = ?", (owner_id,))
            await conn.commit()
        return [await self.create(record) for record in records]

    async def _select(
        self,
        record_type: Type[R],
        where: str,
        params: Sequence[Any],
        limit: Optional[int] = None,
    ) -> List[R]:
        columns = _columns(record_type)
        sql = f"SELECT {', '.join(columns)} FROM {record_type.TABLE} WHERE {where} ORDER BY id ASC"
        if limit is not None:
            sql += f" LIMIT {int(limit)}"
        async with self._db.connection() as conn:
            cur = await conn.execute(sql, tuple(params))
            rows = await cur.fetchall()
        return [self._row_to_record(record_type, row) for row in rows]

    @staticmethod
    def _row_to_record(record_type: Type[R], row: Sequence[Any]) -> R:
        """Convert a DB row tuple into a record of `record_type`."""
        columns = _columns(record_type)
        return record_type(**{col: _decode(record_type, col, val) for col, val in zip(columns, row)})
