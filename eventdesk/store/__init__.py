from eventdesk.store.entity_store import Collection, EntityStore
from eventdesk.store.interfaces import RecordGateway, StoreSnapshot

__all__ = ["Collection", "EntityStore", "RecordGateway", "StoreSnapshot"]
