"""
Exam Comparison and Parameter Series

comparar_exames diffs two exams of the same type for the same client,
parameter by parameter.

Rules:
    - only parameters present (with numeric values) in both exams are diffed;
      the others are silently left out
    - percentual = diferenca / anterior * 100, None when anterior == 0
    - significativo iff |percentual| > 10
    - overall: PIORA if any significant change goes the wrong way,
      else MELHORA if any significant change goes the right way,
      else ESTAVEL

"Wrong way" defaults to a rise for every parameter (SUBIU -> PIORA). This
is a raw-direction reading, not a clinical one: a rising HDL is still a
SUBIU. Pass ``direcoes`` to mark parameters where higher is better.
"""
from __future__ import annotations

import math
from typing import Iterable, List, Mapping, Optional, Union

from mtor.models import Exame, ResultadoExame, as_utc
from mtor.utils import InvalidComparisonError, get_logger
from .base import (
    ComparativoExames,
    DiferencaParametro,
    DirecaoDesejada,
    PontoExame,
    SerieParametro,
    TendenciaExame,
    TendenciaParametro,
)
from .series import classificar_tendencia

logger = get_logger(__name__)

LIMIAR_SIGNIFICANCIA_PCT = 10.0


def valor_numerico(valor: Union[float, str, None]) -> Optional[float]:
    """Numeric reading of a result value; None for text results."""
    if valor is None or isinstance(valor, bool):
        return None
    if isinstance(valor, (int, float)):
        numero = float(valor)
    else:
        try:
            numero = float(str(valor).strip())
        except ValueError:
            return None
    return numero if math.isfinite(numero) else None


def _resultado(exame: Exame, parametro: str) -> Optional[ResultadoExame]:
    for resultado in exame.resultados:
        if resultado.parametro == parametro:
            return resultado
    return None


def _tendencia(diferenca: float) -> TendenciaParametro:
    if diferenca > 0:
        return TendenciaParametro.SUBIU
    if diferenca < 0:
        return TendenciaParametro.DESCEU
    return TendenciaParametro.ESTAVEL


def diferenca_parametro(
    parametro: str,
    anterior: ResultadoExame,
    atual: ResultadoExame,
) -> Optional[DiferencaParametro]:
    v_atual = valor_numerico(atual.valor)
    v_anterior = valor_numerico(anterior.valor)
    if v_atual is None or v_anterior is None:
        return None

    diferenca = v_atual - v_anterior
    percentual = None if v_anterior == 0 else diferenca / v_anterior * 100
    return DiferencaParametro(
        parametro=parametro,
        valor_anterior=anterior.valor,
        valor_atual=atual.valor,
        diferenca=diferenca,
        percentual=percentual,
        significativo=percentual is not None and abs(percentual) > LIMIAR_SIGNIFICANCIA_PCT,
        tendencia=_tendencia(diferenca),
    )


def _piorou(d: DiferencaParametro, direcao: DirecaoDesejada) -> bool:
    if direcao == DirecaoDesejada.MAIOR_MELHOR:
        return d.tendencia == TendenciaParametro.DESCEU
    return d.tendencia == TendenciaParametro.SUBIU


def _melhorou(d: DiferencaParametro, direcao: DirecaoDesejada) -> bool:
    if direcao == DirecaoDesejada.MAIOR_MELHOR:
        return d.tendencia == TendenciaParametro.SUBIU
    return d.tendencia == TendenciaParametro.DESCEU


def tendencia_geral(
    diferencas: List[DiferencaParametro],
    direcoes: Optional[Mapping[str, DirecaoDesejada]] = None,
) -> TendenciaExame:
    direcoes = direcoes or {}
    significativas = [d for d in diferencas if d.significativo]
    direcao = lambda d: direcoes.get(d.parametro, DirecaoDesejada.MENOR_MELHOR)

    if any(_piorou(d, direcao(d)) for d in significativas):
        return TendenciaExame.PIORA
    if any(_melhorou(d, direcao(d)) for d in significativas):
        return TendenciaExame.MELHORA
    return TendenciaExame.ESTAVEL


def comparar_exames(
    atual: Exame,
    anterior: Exame,
    direcoes: Optional[Mapping[str, DirecaoDesejada]] = None,
) -> ComparativoExames:
    """
    Compare two exams of the same type for the same client.

    Args:
        atual: Current exam
        anterior: Earlier exam
        direcoes: Optional parameter -> desired direction overrides

    Raises:
        InvalidComparisonError: different clients or different exam types
    """
    if atual.cliente_id != anterior.cliente_id:
        raise InvalidComparisonError(
            "Exams belong to different clients",
            details={"atual": atual.cliente_id, "anterior": anterior.cliente_id},
        )
    if atual.tipo_exame.nome != anterior.tipo_exame.nome:
        raise InvalidComparisonError(
            "Exams are of different types",
            details={"atual": atual.tipo_exame.nome, "anterior": anterior.tipo_exame.nome},
        )

    diferencas: List[DiferencaParametro] = []
    for resultado in atual.resultados:
        previo = _resultado(anterior, resultado.parametro)
        if previo is None:
            continue
        diferenca = diferenca_parametro(resultado.parametro, previo, resultado)
        if diferenca is not None:
            diferencas.append(diferenca)

    tendencia = tendencia_geral(diferencas, direcoes)
    alertas = [f"{d.parametro}: {d.tendencia.value}" for d in diferencas if d.significativo]

    logger.debug(
        f"comparar_exames [{atual.tipo_exame.nome}]: {anterior.id} -> {atual.id} "
        f"{len(diferencas)} parameter(s), {tendencia.value}"
    )
    return ComparativoExames(
        exame_anterior=anterior,
        exame_atual=atual,
        diferencas=diferencas,
        tendencia=tendencia,
        alertas=alertas,
    )


def series_por_parametro(exame: Exame, historico: Iterable[Exame]) -> List[SerieParametro]:
    """
    One series per parameter of ``exame``, built from ``historico``.

    Exams where the parameter is missing or non-numeric contribute no
    point (no zero placeholders).
    """
    ordenado = sorted(historico, key=lambda e: as_utc(e.data_coleta))
    series: List[SerieParametro] = []
    for resultado in exame.resultados:
        dados: List[PontoExame] = []
        for anterior in ordenado:
            r = _resultado(anterior, resultado.parametro)
            valor = valor_numerico(r.valor) if r is not None else None
            if valor is None:
                continue
            dados.append(PontoExame(data=as_utc(anterior.data_coleta), valor=valor, status=r.status))
        tendencia = classificar_tendencia([(p.data, p.valor) for p in dados])
        series.append(SerieParametro(parametro=resultado.parametro, dados=dados, tendencia=tendencia))
    return series
