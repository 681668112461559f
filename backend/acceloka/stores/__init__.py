from acceloka.stores.interfaces import CatalogStore, LedgerStore
from acceloka.stores.sqlalchemy_store import SqlAlchemyCatalogStore, SqlAlchemyLedgerStore

__all__ = [
    "CatalogStore",
    "LedgerStore",
    "SqlAlchemyCatalogStore",
    "SqlAlchemyLedgerStore",
]
