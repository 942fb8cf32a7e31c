"""
Services Package

build_services(settings) wires one storage backend, one repository per
collection and the per-entity services on top of them. The FastAPI app
builds the container once and keeps it on app.state.
"""
from dataclasses import dataclass

from mtor.config import Settings
from mtor.core.reports import AvaliacaoReportGenerator
from mtor.models import AvaliacaoFisica, Cliente, Exame, Protocolo
from mtor.storage import Repository, create_storage
from mtor.utils import get_logger
from . import avaliacoes, clientes, exames, protocolos
from .avaliacoes import AvaliacaoService
from .clientes import ClienteService
from .exames import ExameService
from .protocolos import ProtocoloService
from .seed import LABORATORIOS, TIPOS_EXAME, seed_demo_data

logger = get_logger(__name__)


@dataclass
class Services:
    clientes: ClienteService
    avaliacoes: AvaliacaoService
    exames: ExameService
    protocolos: ProtocoloService


def build_services(settings: Settings) -> Services:
    storage = create_storage(settings.storage_backend, settings.storage_dir)

    clientes_repo = Repository(
        Cliente, storage, "clientes", search_fields=clientes.SEARCH_FIELDS
    )
    avaliacoes_repo = Repository(
        AvaliacaoFisica, storage, "avaliacoes", search_fields=avaliacoes.SEARCH_FIELDS
    )
    exames_repo = Repository(
        Exame, storage, "exames", search_fields=exames.SEARCH_FIELDS
    )
    protocolos_repo = Repository(
        Protocolo, storage, "protocolos", search_fields=protocolos.SEARCH_FIELDS
    )

    services = Services(
        clientes=ClienteService(clientes_repo),
        avaliacoes=AvaliacaoService(
            avaliacoes_repo,
            clientes_repo,
            AvaliacaoReportGenerator(settings.report_output_dir),
        ),
        exames=ExameService(exames_repo, clientes_repo, TIPOS_EXAME, LABORATORIOS),
        protocolos=ProtocoloService(protocolos_repo),
    )

    if settings.seed_demo_data:
        seed_demo_data(services)

    logger.info(
        f"Services ready (storage={settings.storage_backend}, "
        f"seed_demo_data={settings.seed_demo_data})"
    )
    return services


__all__ = [
    "Services",
    "build_services",
    "AvaliacaoService",
    "ClienteService",
    "ExameService",
    "ProtocoloService",
    "seed_demo_data",
]
