"""
Pytest Configuration and Fixtures

Shared fixtures: isolated settings, services over in-memory storage,
sample clients and record factories.
"""
from datetime import date, datetime

import httpx
import pytest

from mtor.config import Settings
from mtor.core.reports import AvaliacaoReportGenerator
from mtor.app import create_app
from mtor.models import (
    AvaliacaoFisica,
    Cliente,
    ComposicaoCorporal,
    Exame,
    Genero,
    Protocolo,
    ResultadoExame,
    StatusAvaliacao,
    StatusExame,
)
from mtor.services import (
    AvaliacaoService,
    ClienteService,
    ExameService,
    ProtocoloService,
    Services,
    avaliacoes,
    clientes,
    exames,
    protocolos,
)
from mtor.services.seed import LABORATORIOS, TIPOS_EXAME
from mtor.storage import InMemoryStorage, Repository


def _make_avaliacao(
    cliente_id: str,
    data_avaliacao: date,
    peso: float = 85.5,
    altura: float = 1.78,
    percentual_gordura: float = 18.5,
    massa_magra: float = 69.7,
    circunferencias=None,
    status: StatusAvaliacao = StatusAvaliacao.REALIZADA,
) -> AvaliacaoFisica:
    return AvaliacaoFisica(
        cliente_id=cliente_id,
        data_avaliacao=data_avaliacao,
        status=status,
        peso=peso,
        altura=altura,
        circunferencias={"cintura": 88.0} if circunferencias is None else circunferencias,
        composicao_corporal=ComposicaoCorporal(
            percentual_gordura=percentual_gordura, massa_magra=massa_magra
        ),
    )


def _make_exame(
    cliente_id: str,
    data_coleta: datetime,
    resultados,
    tipo_index: int = 0,
    status: StatusExame = StatusExame.CONCLUIDO,
) -> Exame:
    """resultados: iterable of (parametro, valor, StatusResultado)."""
    return Exame(
        cliente_id=cliente_id,
        tipo_exame=TIPOS_EXAME[tipo_index],
        laboratorio=LABORATORIOS[0],
        data_coleta=data_coleta,
        status=status,
        resultados=[
            ResultadoExame(parametro=p, valor=v, status=s) for p, v, s in resultados
        ],
    )


@pytest.fixture
def make_avaliacao():
    return _make_avaliacao


@pytest.fixture
def make_exame():
    return _make_exame


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        storage_backend="memory",
        storage_dir=str(tmp_path / "data"),
        report_output_dir=str(tmp_path / "reports"),
        seed_demo_data=False,
        log_level="WARNING",
        _env_file=None,
    )


@pytest.fixture
def services(tmp_path) -> Services:
    storage = InMemoryStorage()
    clientes_repo = Repository(Cliente, storage, "clientes", search_fields=clientes.SEARCH_FIELDS)
    return Services(
        clientes=ClienteService(clientes_repo),
        avaliacoes=AvaliacaoService(
            Repository(AvaliacaoFisica, storage, "avaliacoes",
                       search_fields=avaliacoes.SEARCH_FIELDS),
            clientes_repo,
            AvaliacaoReportGenerator(str(tmp_path / "reports")),
        ),
        exames=ExameService(
            Repository(Exame, storage, "exames", search_fields=exames.SEARCH_FIELDS),
            clientes_repo,
            TIPOS_EXAME,
            LABORATORIOS,
        ),
        protocolos=ProtocoloService(
            Repository(Protocolo, storage, "protocolos", search_fields=protocolos.SEARCH_FIELDS)
        ),
    )


@pytest.fixture
def joao() -> Cliente:
    return Cliente(
        nome="João Silva",
        email="joao.silva@email.com",
        telefone="(11) 99999-1111",
        data_nascimento=date(1990, 5, 15),
        genero=Genero.MASCULINO,
        modalidade="Musculação",
        objetivo="Ganho de massa muscular",
    )


@pytest.fixture
def maria() -> Cliente:
    return Cliente(
        nome="Maria Santos",
        email="maria.santos@email.com",
        data_nascimento=date(1985, 8, 22),
        genero=Genero.FEMININO,
        modalidade="Crossfit",
    )


@pytest.fixture
def app(test_settings):
    return create_app(test_settings)


@pytest.fixture
async def async_client(app):
    """Create async test client."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client
