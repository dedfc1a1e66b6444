"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the use cases live in the services.
"""

import importlib

from config import get_settings_module

from src.worktime.worktime.container import build_container
from src.worktime.worktime.core.enums import ConfigField, Role
from src.worktime.worktime.main import rollup_options_from


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, rollup_options=rollup_options_from(settings))

    container.guild_config_service.set_channel(
        current_role=Role.ADMIN,
        tenant_id="guild-1",
        field=ConfigField.WEEKLY_SUMMARY,
        channel_id="weekly",
    )

    svc = container.session_service
    svc.clock_in("1001", "guild-1", display_name="Ana")
    result = svc.clock_out("1001", "guild-1")
    print(result.formatted_duration, result.formatted_total)

    # The scheduler is not started here, so the queued resets never run.
    for summary in container.rollup.run_once():
        print(summary.title, summary.rows)
        container.rollup.cancel_pending_reset(summary.tenant_id)


if __name__ == "__main__":
    main()
