"""Work-time tracking package.

Organized by feature modules (sessions, guilds, members, notifications,
rollup) with a thin Flask controller layer over service/repository layers.
"""
