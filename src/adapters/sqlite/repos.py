import sqlite3
from datetime import UTC, datetime
from typing import Any

from src.domain.entities import Contact


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


def _casefold(value: str | None) -> str:
    return (value or "").casefold()


def _parse_dt(s: str) -> datetime:
    dt = datetime.fromisoformat(s)
    return dt if dt.tzinfo else dt.replace(tzinfo=UTC)


class SQLiteContactRepo:
    def __init__(self, db_path: str, case_sensitive: bool = False):
        self.db_path = db_path
        self.case_sensitive = case_sensitive

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        conn.create_function("casefold", 1, _casefold, deterministic=True)
        return conn

    def _row_to_contact(self, row: dict[str, Any]) -> Contact:
        return Contact(
            id=row["id"],
            first=row["first"],
            last=row["last"],
            twitter=row["twitter"],
            avatar=row["avatar"],
            notes=row["notes"],
            favorite=bool(row["favorite"]),
            created_at=_parse_dt(row["created_at"]),
        )

    def save(self, contact: Contact) -> Contact:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO contacts (
                    id, first, last, twitter, avatar, notes, favorite, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    first=excluded.first,
                    last=excluded.last,
                    twitter=excluded.twitter,
                    avatar=excluded.avatar,
                    notes=excluded.notes,
                    favorite=excluded.favorite
            """,
                (
                    contact.id,
                    contact.first,
                    contact.last,
                    contact.twitter,
                    contact.avatar,
                    contact.notes,
                    1 if contact.favorite else 0,
                    contact.created_at.astimezone(UTC).isoformat(),
                ),
            )
            conn.commit()
            return contact
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def get_by_id(self, contact_id: str) -> Contact | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT * FROM contacts WHERE id = ?", (contact_id,)).fetchone()
            if not row:
                return None
            return self._row_to_contact(row)
        finally:
            conn.close()

    def search(self, query: str | None) -> list[Contact]:
        # Same ordering as the in-memory store: last name (unset last), then age
        order_by = (
            " ORDER BY (last IS NULL OR last = '') ASC, casefold(last) ASC, created_at ASC"
        )
        conn = self._get_conn()
        try:
            if not query:
                rows = conn.execute("SELECT * FROM contacts" + order_by).fetchall()
            elif self.case_sensitive:
                rows = conn.execute(
                    "SELECT * FROM contacts "
                    "WHERE instr(coalesce(first, ''), ?) > 0 OR instr(coalesce(last, ''), ?) > 0"
                    + order_by,
                    (query, query),
                ).fetchall()
            else:
                needle = query.casefold()
                rows = conn.execute(
                    "SELECT * FROM contacts "
                    "WHERE instr(casefold(first), ?) > 0 OR instr(casefold(last), ?) > 0"
                    + order_by,
                    (needle, needle),
                ).fetchall()
            return [self._row_to_contact(row) for row in rows]
        finally:
            conn.close()

    def delete(self, contact_id: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute("DELETE FROM contacts WHERE id = ?", (contact_id,))
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def count(self) -> int:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT COUNT(*) AS n FROM contacts").fetchone()
            return int(row["n"])
        finally:
            conn.close()
