from __future__ import annotations

from ..core.exceptions import LookupFailedError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .repository import MemberDirectory


class MySQLMemberRepository(MemberDirectory):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def display_name(self, actor_id: str) -> str:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT display_name FROM members WHERE actor_id=%s", (actor_id,))
            row = fetchone(cur)
        if not row:
            raise LookupFailedError(f"Unknown member {actor_id}")
        return row["display_name"]

    def upsert(self, actor_id: str, display_name: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO members(actor_id, display_name)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE display_name=VALUES(display_name)
                """,
                (actor_id, display_name),
            )
