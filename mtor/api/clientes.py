"""Client routes."""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, Response

from mtor.models import Cliente, Page, StatusCliente
from mtor.services import Services
from .deps import Pagination, get_services, pagination
from .schemas import StatusClienteRequest

router = APIRouter(prefix="/clientes", tags=["Clientes"])


@router.get("", response_model=Page[Cliente])
def list_clientes(
    search: Optional[str] = None,
    status: Optional[StatusCliente] = None,
    pg: Pagination = Depends(pagination),
    services: Services = Depends(get_services),
):
    return services.clientes.listar(pg.page, pg.size, search=search, status=status)


@router.get("/stats")
def clientes_stats(services: Services = Depends(get_services)):
    return services.clientes.stats()


@router.get("/{cliente_id}", response_model=Cliente)
def get_cliente(cliente_id: str, services: Services = Depends(get_services)):
    return services.clientes.obter(cliente_id)


@router.post("", response_model=Cliente, status_code=201)
def create_cliente(payload: Cliente, services: Services = Depends(get_services)):
    return services.clientes.criar(payload)


@router.put("/{cliente_id}", response_model=Cliente)
def update_cliente(
    cliente_id: str,
    changes: Dict[str, Any] = Body(...),
    expected_version: Optional[int] = Query(None),
    services: Services = Depends(get_services),
):
    return services.clientes.atualizar(cliente_id, changes, expected_version)


@router.patch("/{cliente_id}/status", response_model=Cliente)
def update_cliente_status(
    cliente_id: str,
    payload: StatusClienteRequest,
    services: Services = Depends(get_services),
):
    return services.clientes.atualizar_status(cliente_id, payload.status)


@router.delete("/{cliente_id}", status_code=204)
def delete_cliente(cliente_id: str, services: Services = Depends(get_services)):
    services.clientes.excluir(cliente_id)
    return Response(status_code=204)
