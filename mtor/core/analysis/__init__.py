"""
Comparative Analysis

Assessment comparison (evolution verdict), exam comparison (parameter
deltas and trend) and time-series projection.

Usage:
    from mtor.core.analysis import comparar_avaliacoes, comparar_exames

    cmp = comparar_avaliacoes(atual, anterior)
    cmp.evolucao            # Evolucao.POSITIVA
    cmp.diferencas.peso     # atual.peso - anterior.peso
"""
from .base import (
    ComparativoAvaliacoes,
    ComparativoExames,
    DiferencaParametro,
    DiferencasAvaliacao,
    DirecaoDesejada,
    Evolucao,
    PontoEvolucao,
    PontoExame,
    SerieParametro,
    TendenciaExame,
    TendenciaParametro,
    TendenciaSerie,
)
from .avaliacoes import classificar_evolucao, comparar_avaliacoes, pontuar_evolucao
from .exames import comparar_exames, series_por_parametro, valor_numerico
from .evolucao import METRICAS, METRICAS_RELATORIO, SerieEvolucao, evolucao, extrator_metrica
from .series import classificar_tendencia, media

__all__ = [
    "ComparativoAvaliacoes",
    "ComparativoExames",
    "DiferencaParametro",
    "DiferencasAvaliacao",
    "DirecaoDesejada",
    "Evolucao",
    "PontoEvolucao",
    "PontoExame",
    "SerieParametro",
    "TendenciaExame",
    "TendenciaParametro",
    "TendenciaSerie",
    "classificar_evolucao",
    "comparar_avaliacoes",
    "pontuar_evolucao",
    "comparar_exames",
    "series_por_parametro",
    "valor_numerico",
    "METRICAS",
    "METRICAS_RELATORIO",
    "SerieEvolucao",
    "evolucao",
    "extrator_metrica",
    "classificar_tendencia",
    "media",
]
