from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import WorkSession
from .repository import SessionStore


class MySQLSessionRepository(SessionStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(self, session: WorkSession) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO work_sessions(actor_id, tenant_id, start_time, end_time, duration_hours)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (
                    session.actor_id,
                    session.tenant_id,
                    session.start_time,
                    session.end_time,
                    float(session.duration_hours),
                ),
            )

    def sum_duration_hours(self, actor_id: str, tenant_id: str) -> float:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COALESCE(SUM(duration_hours), 0) AS total
                FROM work_sessions
                WHERE actor_id=%s AND tenant_id=%s
                """,
                (actor_id, tenant_id),
            )
            row = fetchone(cur)
            return float(row["total"]) if row else 0.0

    def all_for_tenant(self, tenant_id: str) -> Sequence[WorkSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT actor_id, tenant_id, start_time, end_time, duration_hours
                FROM work_sessions
                WHERE tenant_id=%s
                """,
                (tenant_id,),
            )
            return [
                WorkSession(
                    actor_id=r["actor_id"],
                    tenant_id=r["tenant_id"],
                    start_time=r["start_time"],
                    end_time=r["end_time"],
                    duration_hours=float(r["duration_hours"]),
                )
                for r in fetchall(cur)
            ]

    def delete_all_for_tenant(self, tenant_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM work_sessions WHERE tenant_id=%s", (tenant_id,))
            return int(cur.rowcount or 0)
