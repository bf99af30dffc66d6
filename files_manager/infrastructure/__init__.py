"""
Infraestructura: adaptadores concretos de los puertos del dominio
(Mongo, Redis, RQ, Pillow).
"""
