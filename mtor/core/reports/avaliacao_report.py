"""
Assessment PDF Report Generator

Renders a RelatorioAvaliacao to PDF:
- client and assessment header
- measurements and body composition with their classifications
- comparison against the previous assessment, when there is one
- evolution tables for the standard series
- the coach's recommendations
"""
import os
from xml.sax.saxutils import escape
from typing import List, Optional

from reportlab.lib.colors import HexColor, white
from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import (
    KeepTogether,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from mtor.core.analysis import Evolucao
from mtor.utils import get_logger
from .relatorios import RelatorioAvaliacao

logger = get_logger(__name__)

HEADER_COLOR = HexColor("#1E40AF")
GRID_COLOR = HexColor("#D1D5DB")

EVOLUCAO_COLORS = {
    Evolucao.POSITIVA: HexColor("#ECFDF5"),  # light green
    Evolucao.ESTAVEL: HexColor("#F9FAFB"),   # light gray
    Evolucao.NEGATIVA: HexColor("#FEF3C7"),  # light amber
}

EVOLUCAO_LABELS = {
    Evolucao.POSITIVA: "Evolução positiva",
    Evolucao.ESTAVEL: "Evolução estável",
    Evolucao.NEGATIVA: "Evolução negativa",
}

METRICA_NOMES = {
    "peso": "Peso (kg)",
    "percentual_gordura": "Gordura (%)",
    "massa_magra": "Massa magra (kg)",
    "imc": "IMC",
}


def _fmt(value: Optional[float], places: int = 1) -> str:
    if value is None:
        return "-"
    return f"{value:.{places}f}"


def _signed(value: float, places: int = 1) -> str:
    return f"{value:+.{places}f}"


class AvaliacaoReportGenerator:
    """Writes assessment reports as PDF files under ``output_dir``."""

    def __init__(self, output_dir: str = "reports"):
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)
        self._styles = getSampleStyleSheet()
        self._create_custom_styles()
        logger.info(f"AvaliacaoReportGenerator initialized, output: {output_dir}")

    def _create_custom_styles(self):
        if 'CustomTitle' not in self._styles:
            self._styles.add(ParagraphStyle(
                name='CustomTitle',
                parent=self._styles['Title'],
                fontSize=22,
                spaceAfter=20,
                textColor=HEADER_COLOR,
                alignment=TA_CENTER,
                fontName='Helvetica-Bold'
            ))

        if 'SectionHeader' not in self._styles:
            self._styles.add(ParagraphStyle(
                name='SectionHeader',
                parent=self._styles['Heading2'],
                fontSize=15,
                spaceBefore=20,
                spaceAfter=10,
                textColor=HexColor("#1F2937"),
                fontName='Helvetica-Bold'
            ))

        if 'ReportBody' not in self._styles:
            self._styles.add(ParagraphStyle(
                name='ReportBody',
                parent=self._styles['Normal'],
                fontSize=11,
                spaceAfter=6,
                leading=15,
                alignment=TA_JUSTIFY
            ))

        if 'Caveat' not in self._styles:
            self._styles.add(ParagraphStyle(
                name='Caveat',
                parent=self._styles['Normal'],
                fontSize=9,
                textColor=HexColor("#6B7280"),
                spaceBefore=5,
                spaceAfter=5
            ))

    def _table(self, rows: List[List[str]], col_widths: List[float], extra_style=None) -> Table:
        table = Table(rows, colWidths=col_widths)
        style = [
            ('BACKGROUND', (0, 0), (-1, 0), HEADER_COLOR),
            ('TEXTCOLOR', (0, 0), (-1, 0), white),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, 0), 10),
            ('ALIGN', (0, 0), (-1, -1), 'LEFT'),
            ('GRID', (0, 0), (-1, -1), 0.5, GRID_COLOR),
            ('FONTSIZE', (0, 1), (-1, -1), 9),
            ('TOPPADDING', (0, 0), (-1, -1), 6),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
        ]
        table.setStyle(TableStyle(style + (extra_style or [])))
        return table

    def generate(self, relatorio: RelatorioAvaliacao) -> str:
        """
        Build the PDF for one assessment report.

        Returns:
            Path of the written file (also stored on relatorio.pdf_path)
        """
        avaliacao = relatorio.avaliacao
        filename = f"AV-{avaliacao.id}-{relatorio.gerado_em.strftime('%Y%m%d-%H%M%S')}.pdf"
        filepath = os.path.join(self.output_dir, filename)

        doc = SimpleDocTemplate(
            filepath,
            pagesize=A4,
            rightMargin=0.75*inch,
            leftMargin=0.75*inch,
            topMargin=0.75*inch,
            bottomMargin=0.75*inch
        )
        story = []

        nome = escape(avaliacao.cliente.nome if avaliacao.cliente else avaliacao.cliente_id)
        story.append(Paragraph("Relatório de Avaliação Física", self._styles['CustomTitle']))
        story.append(Paragraph(
            f"Cliente: <b>{nome}</b> | Avaliação de {avaliacao.data_avaliacao.strftime('%d/%m/%Y')} "
            f"({avaliacao.tipo.value}) | Gerado em {relatorio.gerado_em.strftime('%d/%m/%Y %H:%M')}",
            self._styles['Caveat']
        ))
        story.append(Spacer(1, 15))

        # ===== MEASUREMENTS =====
        story.append(Paragraph("Medidas e Composição Corporal", self._styles['SectionHeader']))
        composicao = avaliacao.composicao_corporal
        resultados = avaliacao.resultados
        rows = [
            ["Medida", "Valor", "Classificação"],
            ["Peso", f"{_fmt(avaliacao.peso)} kg", ""],
            ["Altura", f"{_fmt(avaliacao.altura, 2)} m", ""],
            ["IMC", _fmt(avaliacao.imc),
             resultados.classificacao_imc.value if resultados.classificacao_imc else "-"],
            ["Gordura corporal", f"{_fmt(composicao.percentual_gordura)} %",
             resultados.classificacao_gordura.value if resultados.classificacao_gordura else "-"],
            ["Massa magra", f"{_fmt(composicao.massa_magra)} kg", ""],
        ]
        for local, valor in avaliacao.circunferencias.items():
            rows.append([f"Circunferência ({local})", f"{_fmt(valor)} cm", ""])
        story.append(self._table(rows, [2.4*inch, 1.8*inch, 2.3*inch]))

        # ===== COMPARISON =====
        if relatorio.comparativo is not None:
            cmp = relatorio.comparativo
            d = cmp.diferencas
            elements = [
                Paragraph("Comparação com a Avaliação Anterior", self._styles['SectionHeader']),
                Paragraph(
                    f"Anterior: {cmp.avaliacao_anterior.data_avaliacao.strftime('%d/%m/%Y')} | "
                    f"Pontuação: <b>{cmp.pontuacao}</b> | {EVOLUCAO_LABELS[cmp.evolucao]}",
                    self._styles['ReportBody']
                ),
            ]
            rows = [
                ["Medida", "Diferença"],
                ["Peso (kg)", _signed(d.peso)],
                ["Gordura (%)", _signed(d.percentual_gordura)],
                ["Massa magra (kg)", _signed(d.massa_magra)],
                ["IMC", _signed(d.imc)],
            ]
            for local, valor in d.circunferencias.items():
                rows.append([f"Circunferência {local} (cm)", _signed(valor)])
            elements.append(self._table(
                rows, [3.0*inch, 2.0*inch],
                [('BACKGROUND', (0, 1), (-1, -1), EVOLUCAO_COLORS[cmp.evolucao])]
            ))
            story.append(KeepTogether(elements))

        # ===== SERIES =====
        series = {m: pontos for m, pontos in relatorio.series.items() if pontos}
        if series:
            story.append(Paragraph("Evolução", self._styles['SectionHeader']))
            for metrica, pontos in series.items():
                rows = [["Data", METRICA_NOMES.get(metrica, metrica)]]
                rows += [[p.data.strftime('%d/%m/%Y'), _fmt(p.valor)] for p in pontos]
                story.append(KeepTogether([
                    self._table(rows, [2.0*inch, 2.0*inch]),
                    Spacer(1, 10),
                ]))

        # ===== RECOMMENDATIONS =====
        if resultados.recomendacoes:
            story.append(Paragraph("Recomendações", self._styles['SectionHeader']))
            for i, rec in enumerate(resultados.recomendacoes, 1):
                story.append(Paragraph(f"{i}. {escape(rec)}", self._styles['ReportBody']))

        if avaliacao.observacoes:
            story.append(Spacer(1, 10))
            story.append(Paragraph(f"<b>Observações:</b> {escape(avaliacao.observacoes)}", self._styles['ReportBody']))

        doc.build(story)
        relatorio.pdf_path = filepath
        logger.info(f"Assessment report generated: {filepath}")
        return filepath
