"""
Report Generation Module

Assessment and exam report containers, plus the assessment PDF export.
"""
from .relatorios import RECOMENDACOES_EXAME, RelatorioAvaliacao, RelatorioExame
from .avaliacao_report import AvaliacaoReportGenerator

__all__ = [
    "RECOMENDACOES_EXAME",
    "RelatorioAvaliacao",
    "RelatorioExame",
    "AvaliacaoReportGenerator",
]
