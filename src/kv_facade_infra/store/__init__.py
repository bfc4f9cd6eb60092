"""Store access: facade, execution adapter, batching and client registry."""

from kv_facade_infra.store.facade import KeyValueFacade
from kv_facade_infra.store.registry import ClientRegistry

__all__ = [
    "ClientRegistry",
    "KeyValueFacade",
]
