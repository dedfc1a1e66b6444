from __future__ import annotations

from typing import Protocol, Sequence

from .model import WorkSession


class SessionStore(Protocol):
    """Durable store of completed sessions, append-only until a tenant reset."""

    def append(self, session: WorkSession) -> None:
        raise NotImplementedError

    def sum_duration_hours(self, actor_id: str, tenant_id: str) -> float:
        raise NotImplementedError

    def all_for_tenant(self, tenant_id: str) -> Sequence[WorkSession]:
        raise NotImplementedError

    def delete_all_for_tenant(self, tenant_id: str) -> int:
        """Bulk delete; returns rows removed (0 when already empty)."""

        raise NotImplementedError
