"""Enumeration types for ledger entities."""

from enum import Enum


class ProfileType(str, Enum):
    CONSERVADOR = "Conservador"
    MODERADO = "Moderado"
    AGRESSIVO = "Agressivo"
