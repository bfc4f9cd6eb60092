"""Protocol interfaces for the external key-value store."""

from kv_facade_core.interfaces.store import StoreHandle, TransactionBuffer

__all__ = [
    "StoreHandle",
    "TransactionBuffer",
]
