"""
Comparative Analysis: Base Types

Result contracts produced by the assessment/exam comparison functions and
the time-series projection. Entities stay pydantic models; these results
are plain dataclasses with a to_dict() for JSON responses.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Optional, Union

from mtor.models import AvaliacaoFisica, Exame, StatusResultado


class Evolucao(str, Enum):
    """Verdict of an assessment-to-assessment comparison."""
    POSITIVA = "POSITIVA"
    NEGATIVA = "NEGATIVA"
    ESTAVEL  = "ESTAVEL"


class TendenciaParametro(str, Enum):
    """Raw direction of one exam parameter, no clinical reading."""
    SUBIU   = "SUBIU"
    DESCEU  = "DESCEU"
    ESTAVEL = "ESTAVEL"


class TendenciaExame(str, Enum):
    MELHORA = "MELHORA"
    PIORA   = "PIORA"
    ESTAVEL = "ESTAVEL"


class TendenciaSerie(str, Enum):
    """Fitted direction of a time series."""
    CRESCENTE   = "CRESCENTE"
    DECRESCENTE = "DECRESCENTE"
    ESTAVEL     = "ESTAVEL"


class DirecaoDesejada(str, Enum):
    """
    Which way a lab parameter should move to count as an improvement.

    MENOR_MELHOR is the default for every parameter, which reproduces the
    plain reading "a significant rise is a worsening".
    """
    MENOR_MELHOR = "MENOR_MELHOR"
    MAIOR_MELHOR = "MAIOR_MELHOR"


# ── Assessments ──────────────────────────────────────────────────────────────

@dataclass
class DiferencasAvaliacao:
    """current minus previous, unrounded."""
    peso: float
    percentual_gordura: float
    massa_magra: float
    imc: float
    circunferencias: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "peso": self.peso,
            "percentual_gordura": self.percentual_gordura,
            "massa_magra": self.massa_magra,
            "imc": self.imc,
            "circunferencias": dict(self.circunferencias),
        }


@dataclass
class ComparativoAvaliacoes:
    avaliacao_anterior: AvaliacaoFisica
    avaliacao_atual: AvaliacaoFisica
    diferencas: DiferencasAvaliacao
    pontuacao: int
    evolucao: Evolucao

    def to_dict(self) -> dict:
        return {
            "avaliacao_anterior": self.avaliacao_anterior.model_dump(mode="json"),
            "avaliacao_atual": self.avaliacao_atual.model_dump(mode="json"),
            "diferencas": self.diferencas.to_dict(),
            "pontuacao": self.pontuacao,
            "evolucao": self.evolucao.value,
        }


# ── Exams ────────────────────────────────────────────────────────────────────

@dataclass
class DiferencaParametro:
    parametro: str
    valor_anterior: Union[float, str]
    valor_atual: Union[float, str]
    diferenca: float
    percentual: Optional[float]  # None when the previous value is zero
    significativo: bool
    tendencia: TendenciaParametro

    def to_dict(self) -> dict:
        return {
            "parametro": self.parametro,
            "valor_anterior": self.valor_anterior,
            "valor_atual": self.valor_atual,
            "diferenca": self.diferenca,
            "percentual": self.percentual,
            "significativo": self.significativo,
            "tendencia": self.tendencia.value,
        }


@dataclass
class ComparativoExames:
    exame_anterior: Exame
    exame_atual: Exame
    diferencas: List[DiferencaParametro] = field(default_factory=list)
    tendencia: TendenciaExame = TendenciaExame.ESTAVEL
    alertas: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "exame_anterior": self.exame_anterior.model_dump(mode="json"),
            "exame_atual": self.exame_atual.model_dump(mode="json"),
            "diferencas": [d.to_dict() for d in self.diferencas],
            "tendencia": self.tendencia.value,
            "alertas": list(self.alertas),
        }


# ── Time series ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PontoEvolucao:
    data: Union[date, datetime]
    valor: float

    def to_dict(self) -> dict:
        return {"data": self.data.isoformat(), "valor": self.valor}


@dataclass(frozen=True)
class PontoExame:
    data: datetime
    valor: float
    status: StatusResultado

    def to_dict(self) -> dict:
        return {"data": self.data.isoformat(), "valor": self.valor, "status": self.status.value}


@dataclass
class SerieParametro:
    """One exam parameter across a client's history, oldest first."""
    parametro: str
    dados: List[PontoExame] = field(default_factory=list)
    tendencia: TendenciaSerie = TendenciaSerie.ESTAVEL

    def to_dict(self) -> dict:
        return {
            "parametro": self.parametro,
            "dados": [p.to_dict() for p in self.dados],
            "tendencia": self.tendencia.value,
        }
