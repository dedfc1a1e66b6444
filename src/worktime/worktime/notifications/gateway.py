from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Notice, StoredNotice


class Channel(Protocol):
    channel_id: str

    def send(self, notice: Notice) -> None:
        raise NotImplementedError


class NotificationGateway(Protocol):
    """Outbound side of the chat platform.

    ``resolve_channel`` returns None when the channel is not known for the
    tenant; callers skip the notice in that case.
    """

    def register_channel(self, tenant_id: str, channel_id: str) -> None:
        raise NotImplementedError

    def resolve_channel(self, tenant_id: str, channel_id: str) -> Optional[Channel]:
        raise NotImplementedError

    def list_for_channel(self, channel_id: str, *, after: int = 0, limit: int = 50) -> Sequence[StoredNotice]:
        raise NotImplementedError
