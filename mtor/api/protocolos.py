"""Training protocol routes."""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query, Response

from mtor.models import Page, Protocolo, TipoProtocolo
from mtor.services import Services
from .deps import Pagination, get_services, pagination
from .schemas import CopiaProtocoloRequest, StatusProtocoloRequest

router = APIRouter(prefix="/protocolos", tags=["Protocolos"])

TIPO_FILTRO = "^(TODOS|" + "|".join(t.value for t in TipoProtocolo) + ")$"


@router.get("", response_model=Page[Protocolo])
def list_protocolos(
    search: Optional[str] = None,
    tipo: Optional[str] = Query(None, pattern=TIPO_FILTRO, description="PRE_DEFINIDO, PERSONALIZADO or TODOS"),
    pg: Pagination = Depends(pagination),
    services: Services = Depends(get_services),
):
    return services.protocolos.listar(pg.page, pg.size, search=search, tipo=tipo)


@router.get("/stats")
def protocolos_stats(services: Services = Depends(get_services)):
    return services.protocolos.stats()


@router.get("/pre-definidos", response_model=List[Protocolo])
def pre_definidos(services: Services = Depends(get_services)):
    return services.protocolos.pre_definidos()


@router.get("/{protocolo_id}", response_model=Protocolo)
def get_protocolo(protocolo_id: str, services: Services = Depends(get_services)):
    return services.protocolos.obter(protocolo_id)


@router.post("", response_model=Protocolo, status_code=201)
def create_protocolo(payload: Protocolo, services: Services = Depends(get_services)):
    return services.protocolos.criar(payload)


@router.post("/{protocolo_id}/copia", response_model=Protocolo, status_code=201)
def copy_protocolo(
    protocolo_id: str,
    payload: CopiaProtocoloRequest,
    services: Services = Depends(get_services),
):
    return services.protocolos.copiar(protocolo_id, payload.nome)


@router.put("/{protocolo_id}", response_model=Protocolo)
def update_protocolo(
    protocolo_id: str,
    changes: Dict[str, Any] = Body(...),
    expected_version: Optional[int] = Query(None),
    services: Services = Depends(get_services),
):
    return services.protocolos.atualizar(protocolo_id, changes, expected_version)


@router.patch("/{protocolo_id}/status", response_model=Protocolo)
def update_protocolo_status(
    protocolo_id: str,
    payload: StatusProtocoloRequest,
    services: Services = Depends(get_services),
):
    return services.protocolos.atualizar_status(protocolo_id, payload.status)


@router.delete("/{protocolo_id}", status_code=204)
def delete_protocolo(protocolo_id: str, services: Services = Depends(get_services)):
    services.protocolos.excluir(protocolo_id)
    return Response(status_code=204)
