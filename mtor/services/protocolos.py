"""
Training protocol service: CRUD, status, copies and the predefined catalog.
"""
from typing import Any, Dict, List, Mapping, Optional

from mtor.models import Page, Protocolo, StatusProtocolo, TipoProtocolo, new_id, parse_enum
from mtor.storage import Repository
from mtor.utils import get_logger

logger = get_logger(__name__)

SEARCH_FIELDS = ("nome", "descricao", "objetivo")

TODOS_TIPOS = "TODOS"


class ProtocoloService:
    def __init__(self, repo: Repository[Protocolo]):
        self.repo = repo

    def listar(
        self,
        page: int = 0,
        size: int = 10,
        search: Optional[str] = None,
        tipo: Optional[str] = None,
    ) -> Page[Protocolo]:
        predicate = None
        if tipo and tipo != TODOS_TIPOS:
            alvo = parse_enum(TipoProtocolo, tipo, "tipo")
            predicate = lambda p: p.tipo == alvo
        return self.repo.list(page, size, predicate=predicate, search=search)

    def obter(self, protocolo_id: str) -> Protocolo:
        return self.repo.get_by_id(protocolo_id)

    def criar(self, protocolo: Protocolo) -> Protocolo:
        criado = self.repo.create(protocolo)
        logger.info(f"Protocolo created: {criado.id} ({criado.nome})")
        return criado

    def atualizar(
        self,
        protocolo_id: str,
        changes: Mapping[str, Any],
        expected_version: Optional[int] = None,
    ) -> Protocolo:
        atualizado = self.repo.update(protocolo_id, changes, expected_version)
        logger.info(f"Protocolo updated: {protocolo_id} -> v{atualizado.version}")
        return atualizado

    def atualizar_status(self, protocolo_id: str, status: StatusProtocolo) -> Protocolo:
        return self.atualizar(protocolo_id, {"status": parse_enum(StatusProtocolo, status)})

    def excluir(self, protocolo_id: str) -> None:
        self.repo.delete(protocolo_id)
        logger.info(f"Protocolo deleted: {protocolo_id}")

    def copiar(self, protocolo_id: str, novo_nome: str) -> Protocolo:
        """New PERSONALIZADO protocol with the same content under another name."""
        original = self.obter(protocolo_id)
        copia = original.model_copy(update={
            "nome": novo_nome,
            "tipo": TipoProtocolo.PERSONALIZADO,
            "exercicios": [e.model_copy(update={"id": new_id()}) for e in original.exercicios],
            "anexos": list(original.anexos),
            "links": list(original.links),
        })
        criado = self.repo.create(copia)
        logger.info(f"Protocolo {protocolo_id} copied as {criado.id} ({novo_nome})")
        return criado

    def pre_definidos(self) -> List[Protocolo]:
        return self.repo.all(lambda p: p.tipo == TipoProtocolo.PRE_DEFINIDO)

    def stats(self) -> Dict[str, int]:
        protocolos = self.repo.all()
        return {
            "total": len(protocolos),
            "pre_definidos": sum(1 for p in protocolos if p.tipo == TipoProtocolo.PRE_DEFINIDO),
            "personalizados": sum(1 for p in protocolos if p.tipo == TipoProtocolo.PERSONALIZADO),
            "ativos": sum(1 for p in protocolos if p.status == StatusProtocolo.ATIVO),
        }
