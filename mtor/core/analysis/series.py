"""
Series statistics: least-squares trend direction and rounded means.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Sequence, Tuple, Union

import numpy as np

from mtor.core.metrics import round_half_up
from .base import TendenciaSerie

# Fitted change over the observed span, relative to the series mean, that
# counts as a real rise or fall
LIMIAR_TENDENCIA = 0.05

Instante = Union[date, datetime]


def _em_dias(instante: Instante) -> float:
    if isinstance(instante, datetime):
        return instante.timestamp() / 86400.0
    return float(instante.toordinal())


def classificar_tendencia(pontos: Sequence[Tuple[Instante, float]]) -> TendenciaSerie:
    """
    Direction of a (time, value) series from a first-degree polyfit.

    Fewer than two points, or all points on the same instant -> ESTAVEL.
    """
    if len(pontos) < 2:
        return TendenciaSerie.ESTAVEL

    xs = np.array([_em_dias(t) for t, _ in pontos], dtype=float)
    ys = np.array([v for _, v in pontos], dtype=float)
    span = float(np.ptp(xs))
    if span == 0.0:
        return TendenciaSerie.ESTAVEL

    slope, _intercept = np.polyfit(xs - xs.min(), ys, 1)
    variacao = float(slope) * span
    referencia = abs(float(ys.mean()))
    relativa = variacao / referencia if referencia > 0 else variacao

    if relativa > LIMIAR_TENDENCIA:
        return TendenciaSerie.CRESCENTE
    if relativa < -LIMIAR_TENDENCIA:
        return TendenciaSerie.DECRESCENTE
    return TendenciaSerie.ESTAVEL


def media(valores: Iterable[float], casas: int = 1) -> float:
    """Rounded arithmetic mean; 0.0 for an empty input."""
    arr = np.fromiter(valores, dtype=float)
    if arr.size == 0:
        return 0.0
    return round_half_up(float(arr.mean()), casas)
