"""
Metric Calculators

Usage:
    from mtor.core.metrics import calcular_imc, classificar_imc

    imc = calcular_imc(85.5, 1.78)      # 27.0
    classificar_imc(imc)                # ClassificacaoIMC.SOBREPESO
"""
from .body import (
    calcular_imc,
    classificar_imc,
    classificar_percentual_gordura,
    round_half_up,
)

__all__ = [
    "calcular_imc",
    "classificar_imc",
    "classificar_percentual_gordura",
    "round_half_up",
]
