"""
Client service: CRUD with a unique e-mail, status changes and counts.

E-mail uniqueness is checked by the repository inside its write lock, so
two concurrent registrations of one address cannot both succeed.
"""
from typing import Any, Dict, Mapping, Optional

from mtor.models import Cliente, Page, StatusCliente, parse_enum
from mtor.storage import Repository
from mtor.utils import get_logger

logger = get_logger(__name__)

SEARCH_FIELDS = ("nome", "email", "modalidade")


class ClienteService:
    def __init__(self, repo: Repository[Cliente]):
        self.repo = repo
        repo.unique_fields = ("email",)

    def listar(
        self,
        page: int = 0,
        size: int = 10,
        search: Optional[str] = None,
        status: Optional[StatusCliente] = None,
    ) -> Page[Cliente]:
        predicate = (lambda c: c.status == status) if status else None
        return self.repo.list(page, size, predicate=predicate, search=search)

    def obter(self, cliente_id: str) -> Cliente:
        return self.repo.get_by_id(cliente_id)

    def buscar_por_email(self, email: str) -> Optional[Cliente]:
        email = email.strip().lower()
        return self.repo.find_first(lambda c: c.email == email)

    def criar(self, cliente: Cliente) -> Cliente:
        """
        Raises:
            DuplicateIdentityError: e-mail already registered
        """
        criado = self.repo.create(cliente)
        logger.info(f"Cliente created: {criado.id} ({criado.email})")
        return criado

    def atualizar(
        self,
        cliente_id: str,
        changes: Mapping[str, Any],
        expected_version: Optional[int] = None,
    ) -> Cliente:
        atualizado = self.repo.update(cliente_id, changes, expected_version)
        logger.info(f"Cliente updated: {cliente_id} -> v{atualizado.version}")
        return atualizado

    def atualizar_status(self, cliente_id: str, status: StatusCliente) -> Cliente:
        return self.atualizar(cliente_id, {"status": parse_enum(StatusCliente, status)})

    def excluir(self, cliente_id: str) -> None:
        # Assessments and exams keep their own client snapshot
        self.repo.delete(cliente_id)
        logger.info(f"Cliente deleted: {cliente_id}")

    def stats(self) -> Dict[str, int]:
        clientes = self.repo.all()
        return {
            "total": len(clientes),
            "ativos": sum(1 for c in clientes if c.status == StatusCliente.ATIVO),
            "inativos": sum(1 for c in clientes if c.status == StatusCliente.INATIVO),
        }
