# infrastructure/repositories/__init__.py
"""
============================================================
TARJETA CRC - infrastructure/repositories/__init__.py
============================================================
Module: infrastructure.repositories (Public Export Surface)

Policy:
  - Este archivo NO contiene lógica de negocio.
  - Solo re-exporta símbolos; no debe tener side effects.
============================================================
"""

from .mongo_file_repo import MongoFileRepository
from .mongo_user_repo import MongoUserRepository

__all__ = [
    "MongoFileRepository",
    "MongoUserRepository",
]
