"""
Infrastructure layer - persistence backends.
Keeps business logic clean from implementation details.
"""

from eventdesk.core.config import Settings
from eventdesk.infrastructure.flat_file import FlatFileGateway
from eventdesk.infrastructure.memory import MemoryGateway
from eventdesk.store.interfaces import RecordGateway


def get_gateway(settings: Settings) -> RecordGateway:
    """
    Build the configured persistence backend.

    STORAGE_BACKEND=file (default) uses the data directory,
    STORAGE_BACKEND=memory keeps records for this process only.
    """
    if settings.STORAGE_BACKEND == "memory":
        return MemoryGateway()
    return FlatFileGateway.from_settings(settings)


__all__ = ['FlatFileGateway', 'MemoryGateway', 'get_gateway']
