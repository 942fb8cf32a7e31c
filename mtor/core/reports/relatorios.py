"""
Report data containers.

A report bundles a record with its comparison against the previous record
of the same kind and the client's series. The JSON endpoints return
to_dict(); the PDF generator renders the same object.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from mtor.core.analysis import (
    ComparativoAvaliacoes,
    ComparativoExames,
    PontoEvolucao,
    SerieParametro,
)
from mtor.models import AvaliacaoFisica, Exame

RECOMENDACOES_EXAME = [
    "Manter acompanhamento médico regular",
    "Repetir exames conforme orientação médica",
    "Observar sinais de alteração",
]


def _agora() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class RelatorioAvaliacao:
    avaliacao: AvaliacaoFisica
    comparativo: Optional[ComparativoAvaliacoes] = None
    # metric -> points, oldest first
    series: Dict[str, List[PontoEvolucao]] = field(default_factory=dict)
    gerado_em: datetime = field(default_factory=_agora)
    pdf_path: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "avaliacao": self.avaliacao.model_dump(mode="json"),
            "comparativo": self.comparativo.to_dict() if self.comparativo else None,
            "series": {
                metrica: [p.to_dict() for p in pontos]
                for metrica, pontos in self.series.items()
            },
            "gerado_em": self.gerado_em.isoformat(),
        }


@dataclass
class RelatorioExame:
    exame: Exame
    historico: List[Exame] = field(default_factory=list)
    graficos: List[SerieParametro] = field(default_factory=list)
    comparativo: Optional[ComparativoExames] = None
    recomendacoes: List[str] = field(default_factory=lambda: list(RECOMENDACOES_EXAME))
    gerado_em: datetime = field(default_factory=_agora)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "exame": self.exame.model_dump(mode="json"),
            "historico": [e.model_dump(mode="json") for e in self.historico],
            "graficos": [g.to_dict() for g in self.graficos],
            "comparativo": self.comparativo.to_dict() if self.comparativo else None,
            "recomendacoes": list(self.recomendacoes),
            "gerado_em": self.gerado_em.isoformat(),
        }
