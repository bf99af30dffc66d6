"""Capa de aplicación: orquesta puertos del dominio, sin infraestructura."""
