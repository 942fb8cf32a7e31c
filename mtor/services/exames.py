"""
Lab Exam Service

CRUD over exams with the status machine enforced on every write and the
alert list recomputed by the repository normalizer. Also serves the exam
type / laboratory catalogs, the per-client history, comparisons, reports
and attachment registration.
"""
import hashlib
import os
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List, Mapping, Optional

from mtor.core.analysis import (
    ComparativoExames,
    DirecaoDesejada,
    comparar_exames,
    series_por_parametro,
)
from mtor.core.exams import normalizar_exame, validar_transicao
from mtor.core.reports import RelatorioExame
from mtor.models import (
    ArquivoExame,
    Cliente,
    Exame,
    Laboratorio,
    Page,
    StatusExame,
    StatusResultado,
    TipoArquivo,
    TipoExame,
    as_utc,
    parse_enum,
)
from mtor.storage import Repository
from mtor.utils import get_logger

logger = get_logger(__name__)

SEARCH_FIELDS = ("tipo_exame.nome", "cliente.nome", "laboratorio.nome", "medico_solicitante")

PENDENTES = frozenset({
    StatusExame.SOLICITADO,
    StatusExame.AGENDADO,
    StatusExame.COLETADO,
    StatusExame.PROCESSANDO,
})

# "no filter" values accepted by the list endpoint
TODOS_STATUS = "TODOS"
TODAS_CATEGORIAS = "TODAS"

JANELA_VENCIMENTO_DIAS = 30

EXTENSOES = {
    "pdf": TipoArquivo.PDF,
    "jpg": TipoArquivo.IMAGEM,
    "jpeg": TipoArquivo.IMAGEM,
    "png": TipoArquivo.IMAGEM,
    "gif": TipoArquivo.IMAGEM,
    "dcm": TipoArquivo.DICOM,
    "dicom": TipoArquivo.DICOM,
}


def tipo_arquivo(nome: str) -> TipoArquivo:
    extensao = os.path.splitext(nome)[1].lstrip(".").lower()
    return EXTENSOES.get(extensao, TipoArquivo.DOCUMENTO)


class ExameService:
    def __init__(
        self,
        repo: Repository[Exame],
        clientes: Repository[Cliente],
        tipos_exame: Optional[List[TipoExame]] = None,
        laboratorios: Optional[List[Laboratorio]] = None,
    ):
        self.repo = repo
        self.clientes = clientes
        self.tipos_exame = list(tipos_exame or [])
        self.laboratorios = list(laboratorios or [])
        repo.normalizer = normalizar_exame

    # ── CRUD ─────────────────────────────────────────────────────────────

    def listar(
        self,
        page: int = 0,
        size: int = 10,
        cliente_id: Optional[str] = None,
        search: Optional[str] = None,
        status: Optional[str] = None,
        categoria: Optional[str] = None,
        data_inicio: Optional[datetime] = None,
        data_fim: Optional[datetime] = None,
    ) -> Page[Exame]:
        """
        Paginated list with the optional filters ANDed together.

        ``status="TODOS"`` and ``categoria="TODAS"`` mean no filter.
        Date bounds are inclusive and apply to data_coleta.
        """
        filtros = []
        if cliente_id:
            filtros.append(lambda e: e.cliente_id == cliente_id)
        if status and status != TODOS_STATUS:
            alvo = parse_enum(StatusExame, status)
            filtros.append(lambda e: e.status == alvo)
        if categoria and categoria != TODAS_CATEGORIAS:
            filtros.append(lambda e: e.categoria is not None and e.categoria.nome == categoria)
        if data_inicio:
            inicio = as_utc(data_inicio)
            filtros.append(lambda e: as_utc(e.data_coleta) >= inicio)
        if data_fim:
            fim = as_utc(data_fim)
            filtros.append(lambda e: as_utc(e.data_coleta) <= fim)

        predicate = (lambda e: all(f(e) for f in filtros)) if filtros else None
        return self.repo.list(page, size, predicate=predicate, search=search)

    def obter(self, exame_id: str) -> Exame:
        return self.repo.get_by_id(exame_id)

    def criar(self, exame: Exame) -> Exame:
        cliente = self.clientes.get_by_id(exame.cliente_id)
        criado = self.repo.create(exame.model_copy(update={"cliente": cliente.resumo()}))
        logger.info(
            f"Exame created: {criado.id} ({criado.tipo_exame.nome}) for cliente "
            f"{criado.cliente_id}, {len(criado.alertas)} alert(s)"
        )
        return criado

    def atualizar(
        self,
        exame_id: str,
        changes: Mapping[str, Any],
        expected_version: Optional[int] = None,
    ) -> Exame:
        """
        Partial update.

        A status change is checked against the status machine. The update
        is conditional on the version that was checked, so a concurrent
        write in between raises ConcurrencyConflictError.

        Raises:
            InvalidStatusTransitionError: status change not allowed
        """
        changes = dict(changes)
        changes.pop("alertas", None)
        changes.pop("cliente", None)

        atual = self.obter(exame_id)
        if changes.get("status") is not None:
            validar_transicao(atual.status, parse_enum(StatusExame, changes["status"]))
        if changes.get("cliente_id"):
            changes["cliente"] = self.clientes.get_by_id(changes["cliente_id"]).resumo()

        versao = expected_version if expected_version is not None else atual.version
        atualizado = self.repo.update(exame_id, changes, versao)
        logger.info(
            f"Exame updated: {exame_id} -> v{atualizado.version} "
            f"(status={atualizado.status.value})"
        )
        return atualizado

    def atualizar_status(self, exame_id: str, status: StatusExame) -> Exame:
        return self.atualizar(exame_id, {"status": parse_enum(StatusExame, status)})

    def excluir(self, exame_id: str) -> None:
        self.repo.delete(exame_id)
        logger.info(f"Exame deleted: {exame_id}")

    # ── catalogs ─────────────────────────────────────────────────────────

    def listar_tipos(self) -> List[TipoExame]:
        return list(self.tipos_exame)

    def listar_laboratorios(self) -> List[Laboratorio]:
        return list(self.laboratorios)

    # ── history and analysis ─────────────────────────────────────────────

    def historico(self, cliente_id: str, tipo_exame: Optional[str] = None) -> List[Exame]:
        """CONCLUIDO exams of the client, optionally of one type, newest first."""
        exames = self.repo.all(
            lambda e: e.cliente_id == cliente_id
            and e.status == StatusExame.CONCLUIDO
            and (tipo_exame is None or e.tipo_exame.nome == tipo_exame)
        )
        return sorted(exames, key=lambda e: as_utc(e.data_coleta), reverse=True)

    def comparar(
        self,
        atual_id: str,
        anterior_id: str,
        direcoes: Optional[Mapping[str, DirecaoDesejada]] = None,
    ) -> ComparativoExames:
        return comparar_exames(self.obter(atual_id), self.obter(anterior_id), direcoes)

    def relatorio(self, exame_id: str) -> RelatorioExame:
        """
        Exam report: the exam, its CONCLUIDO history of the same type, one
        fitted series per parameter, and the comparison with the latest
        earlier exam of that history (if any).
        """
        exame = self.obter(exame_id)
        historico = self.historico(exame.cliente_id, exame.tipo_exame.nome)

        coleta = as_utc(exame.data_coleta)
        anteriores = [
            e for e in historico if e.id != exame.id and as_utc(e.data_coleta) < coleta
        ]
        comparativo = comparar_exames(exame, anteriores[0]) if anteriores else None

        return RelatorioExame(
            exame=exame,
            historico=historico,
            graficos=series_por_parametro(exame, historico),
            comparativo=comparativo,
        )

    # ── attachments ──────────────────────────────────────────────────────

    def anexar_arquivo(self, exame_id: str, nome: str, conteudo: bytes) -> ArquivoExame:
        """
        Register an uploaded file on the exam.

        The checksum is the SHA-256 of the received bytes. The file is not
        encrypted at rest, so criptografado is False.
        """
        exame = self.obter(exame_id)
        arquivo = ArquivoExame(
            nome=nome,
            tipo=tipo_arquivo(nome),
            url=f"exames/{exame_id}/{nome}",
            tamanho=len(conteudo),
            data_upload=datetime.now(timezone.utc),
            checksum=f"sha256:{hashlib.sha256(conteudo).hexdigest()}",
        )
        self.repo.update(
            exame_id,
            {"arquivos": [a.model_dump() for a in exame.arquivos] + [arquivo.model_dump()]},
            expected_version=exame.version,
        )
        logger.info(f"Exame {exame_id}: attached {nome} ({arquivo.tamanho} bytes)")
        return arquivo

    def stats(self, hoje: Optional[date] = None) -> Dict[str, int]:
        hoje = hoje or date.today()
        limite = hoje + timedelta(days=JANELA_VENCIMENTO_DIAS)
        exames = self.repo.all()

        def com_resultado(status: StatusResultado) -> int:
            return sum(1 for e in exames if any(r.status == status for r in e.resultados))

        return {
            "total": len(exames),
            "pendentes": sum(1 for e in exames if e.status in PENDENTES),
            "concluidos": sum(1 for e in exames if e.status == StatusExame.CONCLUIDO),
            "alterados": com_resultado(StatusResultado.ALTERADO),
            "criticos": com_resultado(StatusResultado.CRITICO),
            "proximos_vencimentos": sum(
                1 for e in exames
                if e.proximo_exame is not None and hoje <= e.proximo_exame.date() <= limite
            ),
        }
