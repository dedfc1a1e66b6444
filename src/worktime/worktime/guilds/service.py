from __future__ import annotations

import logging

from ..common.validators import require_non_empty
from ..core.enums import ConfigField, Role
from ..core.exceptions import AuthorizationError
from ..notifications.gateway import NotificationGateway
from .model import GuildConfig
from .repository import GuildConfigStore

logger = logging.getLogger(__name__)


class GuildConfigService:
    """Use case: administrators point each notice class at a channel."""

    def __init__(self, configs: GuildConfigStore, notifier: NotificationGateway):
        self._configs = configs
        self._notifier = notifier

    def get(self, tenant_id: str) -> GuildConfig:
        return self._configs.get_or_create(require_non_empty(tenant_id, "tenant_id"))

    def set_channel(
        self,
        *,
        current_role: Role,
        tenant_id: str,
        field: ConfigField,
        channel_id: str,
    ) -> GuildConfig:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission to use this command.")

        tenant_id = require_non_empty(tenant_id, "tenant_id")
        channel_id = require_non_empty(channel_id, "channel_id")

        self._notifier.register_channel(tenant_id, channel_id)
        self._configs.set_field(tenant_id, field, channel_id)
        logger.info("Tenant %s: %s set to %s", tenant_id, field.value, channel_id)
        return self._configs.get_or_create(tenant_id)
