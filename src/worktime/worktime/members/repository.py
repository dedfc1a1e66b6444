from __future__ import annotations

from typing import Protocol


class MemberDirectory(Protocol):
    """Actor id -> display name lookup."""

    def display_name(self, actor_id: str) -> str:
        """Raise LookupFailedError when the actor is unknown."""

        raise NotImplementedError

    def upsert(self, actor_id: str, display_name: str) -> None:
        raise NotImplementedError
