"""
EventDesk - Main Entry Point

Console event management backed by four delimited record files:
- Users, events, attendees and inventory, each one record per line
- Inventory allocation ledger kept consistent between items and events
- Structured logging to stderr, configuration from EVENTDESK_* variables
"""

import sys
from typing import Optional

from eventdesk.cli import Console, EventDeskApp
from eventdesk.core.config import Settings, get_settings
from eventdesk.core.errors import PersistenceError
from eventdesk.core.logging import get_logger, setup_logging
from eventdesk.infrastructure import get_gateway
from eventdesk.store.entity_store import EntityStore


def build_app(settings: Settings, console: Optional[Console] = None) -> EventDeskApp:
    """Wire an explicitly constructed store and gateway into the console app."""
    return EventDeskApp(
        store=EntityStore.from_settings(settings),
        gateway=get_gateway(settings),
        settings=settings,
        console=console or Console(),
    )


def main() -> int:
    settings = get_settings()
    setup_logging(settings)
    logger = get_logger(__name__)

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        storage=settings.STORAGE_BACKEND,
    )

    app = build_app(settings)
    try:
        app.start()
    except PersistenceError as e:
        logger.error("startup_failed", path=e.path, error=e.reason)
        print(f"Cannot load data: {e}", file=sys.stderr)
        return 1
    code = app.run()

    logger.info("application_shutdown")
    return code


if __name__ == "__main__":
    sys.exit(main())
