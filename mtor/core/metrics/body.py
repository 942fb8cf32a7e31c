"""
Body Composition Calculators

Pure functions deriving values from raw anthropometric measurements.

Bands are inclusive-lower / exclusive-upper: a value sitting exactly on a
threshold belongs to the higher band (IMC 25.0 -> SOBREPESO).
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import List, Tuple

from mtor.models import ClassificacaoGordura, ClassificacaoIMC, Genero
from mtor.utils import InvalidMeasurementError

# ── Thresholds ────────────────────────────────────────────────────────────────

# IMC (kg/m²) upper bounds, exclusive; anything above the last is OBESIDADE_III
IMC_BANDS: List[Tuple[float, ClassificacaoIMC]] = [
    (18.5, ClassificacaoIMC.ABAIXO_PESO),
    (25.0, ClassificacaoIMC.PESO_NORMAL),
    (30.0, ClassificacaoIMC.SOBREPESO),
    (35.0, ClassificacaoIMC.OBESIDADE_I),
    (40.0, ClassificacaoIMC.OBESIDADE_II),
]

# Body fat (%) upper bounds per sex, same order as GORDURA_LABELS[:-1]
GORDURA_THRESHOLDS = {
    Genero.MASCULINO: (6.0, 14.0, 18.0, 25.0),
    Genero.FEMININO:  (16.0, 21.0, 25.0, 32.0),
}

GORDURA_LABELS = (
    ClassificacaoGordura.MUITO_BAIXO,
    ClassificacaoGordura.BAIXO,
    ClassificacaoGordura.NORMAL,
    ClassificacaoGordura.ALTO,
    ClassificacaoGordura.MUITO_ALTO,
)


def round_half_up(value: float, places: int = 1) -> float:
    """Round like the displayed figures do: ties go away from zero."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def calcular_imc(peso: float, altura: float) -> float:
    """
    Body-mass index, ``peso / altura²`` rounded to one decimal.

    Args:
        peso: Weight in kg
        altura: Height in metres

    Raises:
        InvalidMeasurementError: weight or height is not positive
    """
    if peso is None or peso <= 0:
        raise InvalidMeasurementError(f"Weight must be positive, got {peso}", field="peso")
    if altura is None or altura <= 0:
        raise InvalidMeasurementError(f"Height must be positive, got {altura}", field="altura")
    return round_half_up(peso / (altura * altura), 1)


def classificar_imc(imc: float) -> ClassificacaoIMC:
    for upper, band in IMC_BANDS:
        if imc < upper:
            return band
    return ClassificacaoIMC.OBESIDADE_III


def classificar_percentual_gordura(percentual: float, genero: Genero) -> ClassificacaoGordura:
    """Five-band body-fat classification with sex-specific thresholds."""
    if percentual < 0:
        raise InvalidMeasurementError(
            f"Body fat percentage cannot be negative, got {percentual}",
            field="percentual_gordura",
        )
    thresholds = GORDURA_THRESHOLDS[Genero(genero)]
    for upper, label in zip(thresholds, GORDURA_LABELS):
        if percentual < upper:
            return label
    return ClassificacaoGordura.MUITO_ALTO
