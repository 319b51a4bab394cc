"""Example: use the service layer without Flask.

Logs in, reconciles today's session and prints the current month's calendar.
"""

import asyncio
import importlib
import os

from config import get_settings_module

from attendease.attendance.service import session_view
from attendease.container import build_container
from attendease.logging import setup_logging


async def main():
    settings = importlib.import_module(get_settings_module())
    setup_logging(getattr(settings, "LOG_LEVEL", None))
    container = build_container(api_config=settings.API_CONFIG)
    _, client = container.clients.open()

    await client.auth_service.login(os.environ["ATTENDEASE_EMAIL"], os.environ["ATTENDEASE_PASSWORD"])
    state = await client.session_reconciler.get_current_session()
    print(session_view(state))

    await client.calendar_service.refresh()
    print(client.attendance_service.month_view())


if __name__ == "__main__":
    asyncio.run(main())
