"""
Infraestructura / DB: connector MongoDB del proceso.
"""

from .errors import StoreAlreadyInitializedError, StoreNotInitializedError
from .mongo import ConnectionState, MongoStoreConnector, close_store, get_store, init_store

__all__ = [
    "ConnectionState",
    "MongoStoreConnector",
    "StoreAlreadyInitializedError",
    "StoreNotInitializedError",
    "close_store",
    "get_store",
    "init_store",
]
