"""
Exam lifecycle rules: status transitions and derived alerts.
"""
from .status import TERMINAIS, transicao_permitida, validar_transicao
from .alertas import derivar_alertas, normalizar_exame

__all__ = [
    "TERMINAIS",
    "transicao_permitida",
    "validar_transicao",
    "derivar_alertas",
    "normalizar_exame",
]
