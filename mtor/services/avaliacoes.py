"""
Physical Assessment Service

Wraps the assessment repository with the client lookup, the derived-field
normalizer (IMC and classifications), comparison, evolution series,
reports and counts.

Usage:
    service = AvaliacaoService(repo, clientes_repo, AvaliacaoReportGenerator("reports"))
    avaliacao = service.criar(AvaliacaoFisica(...))
    avaliacao.imc, avaliacao.resultados.classificacao_imc
"""
from datetime import date, timedelta
from typing import Any, Dict, List, Mapping, Optional

from mtor.core.analysis import (
    ComparativoAvaliacoes,
    METRICAS_RELATORIO,
    SerieEvolucao,
    comparar_avaliacoes,
    evolucao,
    media,
)
from mtor.core.metrics import calcular_imc, classificar_imc, classificar_percentual_gordura
from mtor.core.reports import AvaliacaoReportGenerator, RelatorioAvaliacao
from mtor.models import AvaliacaoFisica, Cliente, Genero, Page, StatusAvaliacao
from mtor.storage import Repository
from mtor.utils import IncompatibleRecordsError, get_logger

logger = get_logger(__name__)

SEARCH_FIELDS = ("cliente.nome", "tipo", "status")

# Window for "upcoming re-assessments" in stats
JANELA_REAVALIACAO_DIAS = 30


class AvaliacaoService:
    def __init__(
        self,
        repo: Repository[AvaliacaoFisica],
        clientes: Repository[Cliente],
        report_generator: Optional[AvaliacaoReportGenerator] = None,
    ):
        self.repo = repo
        self.clientes = clientes
        self.report_generator = report_generator
        repo.normalizer = self.derivar_campos

    # ── derived fields ───────────────────────────────────────────────────

    def _genero(self, avaliacao: AvaliacaoFisica) -> Genero:
        if avaliacao.cliente is not None:
            return avaliacao.cliente.genero
        return self.clientes.get_by_id(avaliacao.cliente_id).genero

    def derivar_campos(self, avaliacao: AvaliacaoFisica) -> AvaliacaoFisica:
        """Recompute imc and both classifications from the raw measurements."""
        imc = calcular_imc(avaliacao.peso, avaliacao.altura)
        resultados = avaliacao.resultados.model_copy(update={
            "classificacao_imc": classificar_imc(imc),
            "classificacao_gordura": classificar_percentual_gordura(
                avaliacao.composicao_corporal.percentual_gordura, self._genero(avaliacao)
            ),
        })
        return avaliacao.model_copy(update={"imc": imc, "resultados": resultados})

    # ── CRUD ─────────────────────────────────────────────────────────────

    def listar(
        self,
        page: int = 0,
        size: int = 10,
        cliente_id: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Page[AvaliacaoFisica]:
        predicate = (lambda a: a.cliente_id == cliente_id) if cliente_id else None
        return self.repo.list(page, size, predicate=predicate, search=search)

    def listar_por_cliente(self, cliente_id: str) -> List[AvaliacaoFisica]:
        avaliacoes = self.repo.all(lambda a: a.cliente_id == cliente_id)
        return sorted(avaliacoes, key=lambda a: a.data_avaliacao)

    def obter(self, avaliacao_id: str) -> AvaliacaoFisica:
        return self.repo.get_by_id(avaliacao_id)

    def criar(self, avaliacao: AvaliacaoFisica) -> AvaliacaoFisica:
        cliente = self.clientes.get_by_id(avaliacao.cliente_id)
        criada = self.repo.create(avaliacao.model_copy(update={"cliente": cliente.resumo()}))
        logger.info(
            f"Avaliacao created: {criada.id} for cliente {criada.cliente_id} "
            f"(imc={criada.imc})"
        )
        return criada

    def atualizar(
        self,
        avaliacao_id: str,
        changes: Mapping[str, Any],
        expected_version: Optional[int] = None,
    ) -> AvaliacaoFisica:
        changes = dict(changes)
        changes.pop("cliente", None)
        if changes.get("cliente_id"):
            changes["cliente"] = self.clientes.get_by_id(changes["cliente_id"]).resumo()
        atualizada = self.repo.update(avaliacao_id, changes, expected_version)
        logger.info(f"Avaliacao updated: {avaliacao_id} -> v{atualizada.version}")
        return atualizada

    def excluir(self, avaliacao_id: str) -> None:
        self.repo.delete(avaliacao_id)
        logger.info(f"Avaliacao deleted: {avaliacao_id}")

    # ── analysis ─────────────────────────────────────────────────────────

    def comparar(self, atual_id: str, anterior_id: str) -> ComparativoAvaliacoes:
        return comparar_avaliacoes(self.obter(atual_id), self.obter(anterior_id))

    def evolucao(self, cliente_id: str, metrica: str) -> SerieEvolucao:
        return evolucao(self.repo.all, cliente_id, metrica)

    def _anterior(self, avaliacao: AvaliacaoFisica) -> Optional[AvaliacaoFisica]:
        anteriores = self.repo.all(
            lambda a: a.cliente_id == avaliacao.cliente_id
            and a.status == StatusAvaliacao.REALIZADA
            and a.data_avaliacao < avaliacao.data_avaliacao
        )
        return max(anteriores, key=lambda a: a.data_avaliacao, default=None)

    def relatorio(self, avaliacao_id: str) -> RelatorioAvaliacao:
        """
        Assessment report: the record, its comparison with the latest earlier
        REALIZADA assessment of the same client, and the standard series.
        """
        avaliacao = self.obter(avaliacao_id)

        comparativo = None
        anterior = self._anterior(avaliacao)
        if anterior is not None:
            try:
                comparativo = comparar_avaliacoes(avaliacao, anterior)
            except IncompatibleRecordsError as exc:
                logger.warning(
                    f"Avaliacao report {avaliacao_id}: no comparison with {anterior.id} "
                    f"({exc.message})"
                )

        series = {
            metrica: list(self.evolucao(avaliacao.cliente_id, metrica))
            for metrica in METRICAS_RELATORIO
        }
        return RelatorioAvaliacao(avaliacao=avaliacao, comparativo=comparativo, series=series)

    def relatorio_pdf(self, avaliacao_id: str) -> str:
        if self.report_generator is None:
            raise RuntimeError("No report generator configured")
        return self.report_generator.generate(self.relatorio(avaliacao_id))

    def stats(self, hoje: Optional[date] = None) -> Dict[str, Any]:
        hoje = hoje or date.today()
        limite = hoje + timedelta(days=JANELA_REAVALIACAO_DIAS)
        avaliacoes = self.repo.all()
        realizadas = [a for a in avaliacoes if a.status == StatusAvaliacao.REALIZADA]
        return {
            "total": len(avaliacoes),
            "realizadas": len(realizadas),
            "agendadas": sum(1 for a in avaliacoes if a.status == StatusAvaliacao.AGENDADA),
            "media_imc": media(a.imc for a in realizadas if a.imc is not None),
            "media_percentual_gordura": media(
                a.composicao_corporal.percentual_gordura for a in realizadas
            ),
            "proximas_reavaliacoes": sum(
                1 for a in avaliacoes
                if a.proxima_avaliacao is not None and hoje <= a.proxima_avaliacao <= limite
            ),
        }
