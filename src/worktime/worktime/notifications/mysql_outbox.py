from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .gateway import NotificationGateway
from .model import Notice, StoredNotice


@dataclass(frozen=True)
class OutboxChannel:
    channel_id: str
    tenant_id: str
    outbox: "MySQLNoticeOutbox"

    def send(self, notice: Notice) -> None:
        self.outbox.insert(tenant_id=self.tenant_id, channel_id=self.channel_id, notice=notice)


class MySQLNoticeOutbox(NotificationGateway):
    """Notices are written to a table and pulled by the chat adapter over HTTP."""

    def __init__(self, conn_factory: DatabaseConnection, *, clock: Callable = now_local):
        self._conn_factory = conn_factory
        self._clock = clock

    def register_channel(self, tenant_id: str, channel_id: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT IGNORE INTO channels(channel_id, tenant_id) VALUES(%s,%s)",
                (channel_id, tenant_id),
            )

    def resolve_channel(self, tenant_id: str, channel_id: str) -> Optional[OutboxChannel]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT channel_id FROM channels WHERE channel_id=%s AND tenant_id=%s",
                (channel_id, tenant_id),
            )
            row = fetchone(cur)
        if not row:
            return None
        return OutboxChannel(channel_id=channel_id, tenant_id=tenant_id, outbox=self)

    def insert(self, *, tenant_id: str, channel_id: str, notice: Notice) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO notices(tenant_id, channel_id, payload, created_at)
                VALUES(%s,%s,%s,%s)
                """,
                (
                    tenant_id,
                    channel_id,
                    json.dumps(notice.to_payload(), ensure_ascii=False),
                    self._clock(),
                ),
            )
            return int(cur.lastrowid)

    def list_for_channel(self, channel_id: str, *, after: int = 0, limit: int = 50) -> Sequence[StoredNotice]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT notice_id, tenant_id, channel_id, payload, created_at
                FROM notices
                WHERE channel_id=%s AND notice_id > %s
                ORDER BY notice_id ASC
                LIMIT %s
                """,
                (channel_id, int(after), int(limit)),
            )
            rows = fetchall(cur)

        out: list[StoredNotice] = []
        for r in rows:
            payload = r["payload"]
            # JSON columns come back as str or bytes depending on the connector.
            if isinstance(payload, (bytes, bytearray)):
                payload = payload.decode("utf-8")
            if isinstance(payload, str):
                payload = json.loads(payload)
            out.append(
                StoredNotice(
                    notice_id=int(r["notice_id"]),
                    tenant_id=r["tenant_id"],
                    channel_id=r["channel_id"],
                    notice=Notice.from_payload(payload),
                    created_at=r["created_at"],
                )
            )
        return out
