from .typing import UniquenessStoreProtocol
from .records import IssuedID
from .memory_store import InMemoryUniquenessStore
from .orm_store import (
    Base,
    IssuedIdRecord,
    SqlUniquenessStore,
    create_schema,
    store_from_url,
)

__all__ = [
    "UniquenessStoreProtocol",
    "IssuedID",
    "InMemoryUniquenessStore",
    "Base",
    "IssuedIdRecord",
    "SqlUniquenessStore",
    "create_schema",
    "store_from_url",
]
