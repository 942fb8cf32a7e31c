"""
Assessment Time-Series Projection

evolucao(fonte, cliente_id, metrica) returns a SerieEvolucao: a finite,
restartable iterable. Each iteration pulls a fresh snapshot from ``fonte``
(nothing is cached), keeps the client's REALIZADA assessments, sorts them
by date and yields one PontoEvolucao per assessment that recorded the
metric.
"""
from __future__ import annotations

from typing import Callable, Dict, Iterable, Iterator, List, Optional

from mtor.models import AvaliacaoFisica, StatusAvaliacao
from mtor.utils import UnknownMetricError
from .base import PontoEvolucao

Extrator = Callable[[AvaliacaoFisica], Optional[float]]

PREFIXO_CIRCUNFERENCIA = "circunferencias."

METRICAS: Dict[str, Extrator] = {
    "peso":               lambda a: a.peso,
    "altura":             lambda a: a.altura,
    "imc":                lambda a: a.imc,
    "percentual_gordura": lambda a: a.composicao_corporal.percentual_gordura,
    "massa_gorda":        lambda a: a.composicao_corporal.massa_gorda,
    "massa_magra":        lambda a: a.composicao_corporal.massa_magra,
    "massa_muscular":     lambda a: a.composicao_corporal.massa_muscular,
    "agua_corporal":      lambda a: a.composicao_corporal.agua_corporal,
    "taxa_metabolica":    lambda a: a.composicao_corporal.taxa_metabolica,
}

# Series shown on the assessment report
METRICAS_RELATORIO = ("peso", "percentual_gordura", "massa_magra", "imc")


def extrator_metrica(metrica: str) -> Extrator:
    """Value getter for a metric name; ``circunferencias.<site>`` is accepted."""
    if metrica in METRICAS:
        return METRICAS[metrica]
    if metrica.startswith(PREFIXO_CIRCUNFERENCIA):
        local = metrica[len(PREFIXO_CIRCUNFERENCIA):]
        if local:
            return lambda a: a.circunferencias.get(local)
    raise UnknownMetricError(
        metrica, available=sorted(METRICAS) + [PREFIXO_CIRCUNFERENCIA + "<local>"]
    )


class SerieEvolucao:
    """Snapshot series of one metric for one client, oldest first."""

    def __init__(
        self,
        fonte: Callable[[], Iterable[AvaliacaoFisica]],
        cliente_id: str,
        metrica: str,
    ):
        self._fonte = fonte
        self._extrair = extrator_metrica(metrica)
        self.cliente_id = cliente_id
        self.metrica = metrica

    def __iter__(self) -> Iterator[PontoEvolucao]:
        avaliacoes = [
            a for a in self._fonte()
            if a.cliente_id == self.cliente_id and a.status == StatusAvaliacao.REALIZADA
        ]
        avaliacoes.sort(key=lambda a: a.data_avaliacao)
        for avaliacao in avaliacoes:
            valor = self._extrair(avaliacao)
            if valor is None:
                continue
            yield PontoEvolucao(data=avaliacao.data_avaliacao, valor=valor)

    def to_list(self) -> List[dict]:
        return [p.to_dict() for p in self]


def evolucao(
    fonte: Callable[[], Iterable[AvaliacaoFisica]],
    cliente_id: str,
    metrica: str,
) -> SerieEvolucao:
    return SerieEvolucao(fonte, cliente_id, metrica)
