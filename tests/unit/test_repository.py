"""
Unit Tests for the generic Repository

Pagination, search, CRUD semantics and optimistic concurrency.
"""
import math
from datetime import date

import pytest
from pydantic import ValidationError

from mtor.models import Cliente, Genero, StatusCliente
from mtor.storage import InMemoryStorage, Repository
from mtor.utils import (
    ConcurrencyConflictError,
    DuplicateIdentityError,
    InvalidPageRequestError,
    NotFoundError,
)


def _cliente(nome: str, modalidade: str = "", status: StatusCliente = StatusCliente.ATIVO) -> Cliente:
    return Cliente(
        nome=nome,
        email=f"{nome.lower().replace(' ', '.')}@email.com",
        data_nascimento=date(1990, 1, 1),
        genero=Genero.MASCULINO,
        modalidade=modalidade,
        status=status,
    )


@pytest.fixture
def repo() -> Repository[Cliente]:
    return Repository(
        Cliente, InMemoryStorage(), "clientes",
        search_fields=("nome", "email", "modalidade", "status"),
    )


@pytest.fixture
def filled_repo(repo) -> Repository[Cliente]:
    for i in range(25):
        repo.create(_cliente(f"Cliente {i:02d}"))
    return repo


class TestCreateAndGet:

    def test_create_assigns_identity(self, repo):
        created = repo.create(_cliente("Ana Costa"))
        assert created.id
        assert created.version == 1
        assert created.created_at is not None
        assert created.created_at == created.updated_at

    def test_ids_are_unique(self, repo):
        ids = {repo.create(_cliente(f"C {i}")).id for i in range(20)}
        assert len(ids) == 20

    def test_caller_supplied_identity_is_ignored(self, repo):
        entity = _cliente("Ana Costa").model_copy(update={"id": "mine", "version": 42})
        created = repo.create(entity)
        assert created.id != "mine"
        assert created.version == 1

    def test_get_by_id(self, repo):
        created = repo.create(_cliente("Ana Costa"))
        assert repo.get_by_id(created.id).model_dump() == created.model_dump()

    def test_get_missing_raises(self, repo):
        with pytest.raises(NotFoundError) as exc_info:
            repo.get_by_id("nope")
        assert exc_info.value.details == {"entity": "Cliente", "id": "nope"}


class TestUniqueFields:

    @pytest.fixture
    def unique_repo(self, repo):
        repo.unique_fields = ("email",)
        return repo

    def test_create_with_taken_value_rejected(self, unique_repo):
        unique_repo.create(_cliente("Ana Costa"))
        with pytest.raises(DuplicateIdentityError) as exc_info:
            unique_repo.create(_cliente("Ana Costa").model_copy(update={"nome": "Outra Ana"}))
        assert exc_info.value.details == {"field": "email", "value": "ana.costa@email.com"}
        assert unique_repo.count() == 1

    def test_value_is_validated_before_the_check(self, unique_repo):
        unique_repo.create(_cliente("Ana Costa"))
        with pytest.raises(DuplicateIdentityError):
            unique_repo.create(_cliente("Bia").model_copy(update={"email": " ANA.COSTA@email.com "}))

    def test_update_to_taken_value_rejected(self, unique_repo):
        unique_repo.create(_cliente("Ana Costa"))
        bia = unique_repo.create(_cliente("Bia"))
        with pytest.raises(DuplicateIdentityError):
            unique_repo.update(bia.id, {"email": "ana.costa@email.com"})
        assert unique_repo.get_by_id(bia.id).version == 1

    def test_record_may_keep_its_own_value(self, unique_repo):
        ana = unique_repo.create(_cliente("Ana Costa"))
        assert unique_repo.update(ana.id, {"email": ana.email}).version == 2


class TestPagination:

    def test_pages_partition_the_collection(self, filled_repo):
        pages = [filled_repo.list(page=p, page_size=10) for p in range(3)]

        assert [len(p.items) for p in pages] == [10, 10, 5]
        assert all(p.total_count == 25 for p in pages)
        assert all(p.total_pages == 3 for p in pages)

        seen = [c.id for p in pages for c in p.items]
        assert seen == [c.id for c in filled_repo.all()]

    @pytest.mark.parametrize("n", [0, 1, 9, 10, 11, 21])
    def test_partition_for_any_size(self, repo, n):
        for i in range(n):
            repo.create(_cliente(f"Cliente {i:02d}"))

        total_pages = math.ceil(n / 10)
        pages = [repo.list(page=p, page_size=10) for p in range(max(total_pages, 1))]

        assert all(p.total_count == n and p.total_pages == total_pages for p in pages)
        assert [c.id for p in pages for c in p.items] == [c.id for c in repo.all()]
        assert sum(1 for p in pages if p.last) == 1
        assert pages[-1].last

    def test_first_and_last_flags(self, filled_repo):
        first = filled_repo.list(page=0, page_size=10)
        middle = filled_repo.list(page=1, page_size=10)
        last = filled_repo.list(page=2, page_size=10)
        assert first.first and not first.last
        assert not middle.first and not middle.last
        assert last.last and not last.first

    def test_exact_multiple(self, filled_repo):
        page = filled_repo.list(page=4, page_size=5)
        assert page.total_pages == 5
        assert len(page.items) == 5
        assert page.last

    def test_page_past_the_end_is_empty(self, filled_repo):
        page = filled_repo.list(page=7, page_size=10)
        assert page.items == []
        assert page.last

    def test_empty_collection(self, repo):
        page = repo.list(page=0, page_size=10)
        assert page.total_count == 0
        assert page.total_pages == 0
        assert page.first and page.last

    @pytest.mark.parametrize("page,size", [(-1, 10), (0, 0), (0, -5)])
    def test_invalid_request(self, filled_repo, page, size):
        with pytest.raises(InvalidPageRequestError):
            filled_repo.list(page=page, page_size=size)

    def test_insertion_order_kept(self, repo):
        for nome in ["Zeca", "Ana", "Mario"]:
            repo.create(_cliente(nome))
        assert [c.nome for c in repo.list(0, 10).items] == ["Zeca", "Ana", "Mario"]


class TestSearch:

    def test_case_insensitive_substring(self, repo):
        repo.create(_cliente("João Silva"))
        repo.create(_cliente("Maria Santos"))
        page = repo.list(0, 10, search="SILVA")
        assert [c.nome for c in page.items] == ["João Silva"]

    def test_matches_any_configured_field(self, repo):
        repo.create(_cliente("João Silva", modalidade="Musculação"))
        repo.create(_cliente("Maria Santos", modalidade="Crossfit"))
        page = repo.list(0, 10, search="crossfit")
        assert page.total_count == 1
        assert page.items[0].nome == "Maria Santos"

    def test_enum_fields_match_on_value(self, repo):
        repo.create(_cliente("A", status=StatusCliente.INATIVO))
        repo.create(_cliente("B"))
        page = repo.list(0, 10, search="inativo")
        assert [c.nome for c in page.items] == ["A"]

    def test_blank_search_is_ignored(self, filled_repo):
        assert filled_repo.list(0, 100, search="   ").total_count == 25

    def test_predicate_and_search_combine(self, repo):
        repo.create(_cliente("Silva Um", status=StatusCliente.INATIVO))
        repo.create(_cliente("Silva Dois"))
        page = repo.list(0, 10, predicate=lambda c: c.status == StatusCliente.ATIVO, search="silva")
        assert [c.nome for c in page.items] == ["Silva Dois"]


class TestUpdate:

    def test_partial_merge(self, repo):
        created = repo.create(_cliente("Ana Costa", modalidade="Pilates"))
        updated = repo.update(created.id, {"modalidade": "Yoga"})
        assert updated.modalidade == "Yoga"
        assert updated.nome == "Ana Costa"
        assert updated.version == 2
        assert updated.created_at == created.created_at
        assert updated.updated_at >= created.updated_at

    def test_protected_fields_are_not_overwritten(self, repo):
        created = repo.create(_cliente("Ana Costa"))
        updated = repo.update(created.id, {"id": "other", "version": 99, "nome": "Ana C."})
        assert updated.id == created.id
        assert updated.version == 2
        assert updated.nome == "Ana C."

    def test_update_missing_raises(self, repo):
        with pytest.raises(NotFoundError):
            repo.update("nope", {"nome": "X"})

    def test_stale_version_conflicts(self, repo):
        created = repo.create(_cliente("Ana Costa"))
        repo.update(created.id, {"nome": "Ana"}, expected_version=1)
        with pytest.raises(ConcurrencyConflictError) as exc_info:
            repo.update(created.id, {"nome": "Ana Maria"}, expected_version=1)
        assert exc_info.value.details["actual"] == 2
        assert repo.get_by_id(created.id).nome == "Ana"

    def test_invalid_merge_is_rejected_and_not_stored(self, repo):
        created = repo.create(_cliente("Ana Costa"))
        with pytest.raises(ValidationError):
            repo.update(created.id, {"data_nascimento": "not-a-date"})
        assert repo.get_by_id(created.id).version == 1

    def test_normalizer_runs_on_create_and_update(self):
        def upper(c: Cliente) -> Cliente:
            return c.model_copy(update={"nome": c.nome.upper()})

        repo = Repository(Cliente, InMemoryStorage(), "clientes", normalizer=upper)
        created = repo.create(_cliente("ana"))
        assert created.nome == "ANA"
        assert repo.update(created.id, {"nome": "bia"}).nome == "BIA"


class TestDelete:

    def test_delete_then_get_raises(self, repo):
        created = repo.create(_cliente("Ana Costa"))
        repo.delete(created.id)
        with pytest.raises(NotFoundError):
            repo.get_by_id(created.id)
        assert repo.count() == 0

    def test_delete_missing_raises(self, repo):
        with pytest.raises(NotFoundError):
            repo.delete("nope")

    def test_delete_keeps_order_of_the_rest(self, repo):
        ids = [repo.create(_cliente(n)).id for n in ["A", "B", "C"]]
        repo.delete(ids[1])
        assert [c.id for c in repo.all()] == [ids[0], ids[2]]
