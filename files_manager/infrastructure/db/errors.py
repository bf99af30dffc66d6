"""
===============================================================================
CRC CARD - infrastructure/db/errors.py
===============================================================================

Componente:
  Errores tipados del ciclo de vida del connector

Responsabilidades:
  - Evitar RuntimeError genéricos.
  - Dar semántica clara: "no inicializado", "ya inicializado".
===============================================================================
"""


class StoreLifecycleError(Exception):
    """Base de errores de ciclo de vida del connector."""


class StoreAlreadyInitializedError(StoreLifecycleError):
    """Se intentó inicializar el connector más de una vez."""


class StoreNotInitializedError(StoreLifecycleError):
    """Se intentó usar el connector sin init_store()."""
