"""Physical assessment routes."""
import os
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, Response
from fastapi.responses import FileResponse

from mtor.core.metrics import calcular_imc, classificar_imc, classificar_percentual_gordura
from mtor.models import AvaliacaoFisica, Page
from mtor.services import Services
from .deps import Pagination, get_services, pagination
from .schemas import CalculoImcRequest, CalculoImcResponse

router = APIRouter(prefix="/avaliacoes", tags=["Avaliacoes"])


@router.get("", response_model=Page[AvaliacaoFisica])
def list_avaliacoes(
    cliente_id: Optional[str] = None,
    search: Optional[str] = None,
    pg: Pagination = Depends(pagination),
    services: Services = Depends(get_services),
):
    return services.avaliacoes.listar(pg.page, pg.size, cliente_id=cliente_id, search=search)


@router.get("/stats")
def avaliacoes_stats(services: Services = Depends(get_services)):
    return services.avaliacoes.stats()


@router.get("/comparativo")
def compare_avaliacoes(
    atual: str = Query(..., description="Current assessment id"),
    anterior: str = Query(..., description="Previous assessment id"),
    services: Services = Depends(get_services),
):
    return services.avaliacoes.comparar(atual, anterior).to_dict()


@router.get("/evolucao/{cliente_id}")
def evolucao_cliente(
    cliente_id: str,
    metrica: str = Query("peso"),
    services: Services = Depends(get_services),
):
    services.clientes.obter(cliente_id)
    serie = services.avaliacoes.evolucao(cliente_id, metrica)
    return {"cliente_id": cliente_id, "metrica": metrica, "pontos": serie.to_list()}


@router.post("/calculos/imc", response_model=CalculoImcResponse)
def calcular(payload: CalculoImcRequest):
    imc = calcular_imc(payload.peso, payload.altura)
    gordura = None
    if payload.percentual_gordura is not None and payload.genero is not None:
        gordura = classificar_percentual_gordura(payload.percentual_gordura, payload.genero)
    return CalculoImcResponse(
        imc=imc, classificacao_imc=classificar_imc(imc), classificacao_gordura=gordura
    )


@router.get("/{avaliacao_id}", response_model=AvaliacaoFisica)
def get_avaliacao(avaliacao_id: str, services: Services = Depends(get_services)):
    return services.avaliacoes.obter(avaliacao_id)


@router.get("/{avaliacao_id}/relatorio")
def relatorio_avaliacao(avaliacao_id: str, services: Services = Depends(get_services)):
    return services.avaliacoes.relatorio(avaliacao_id).to_dict()


@router.get("/{avaliacao_id}/relatorio.pdf")
def relatorio_avaliacao_pdf(avaliacao_id: str, services: Services = Depends(get_services)):
    path = services.avaliacoes.relatorio_pdf(avaliacao_id)
    return FileResponse(
        path=path,
        media_type="application/pdf",
        filename=os.path.basename(path),
    )


@router.post("", response_model=AvaliacaoFisica, status_code=201)
def create_avaliacao(payload: AvaliacaoFisica, services: Services = Depends(get_services)):
    return services.avaliacoes.criar(payload)


@router.put("/{avaliacao_id}", response_model=AvaliacaoFisica)
def update_avaliacao(
    avaliacao_id: str,
    changes: Dict[str, Any] = Body(...),
    expected_version: Optional[int] = Query(None),
    services: Services = Depends(get_services),
):
    return services.avaliacoes.atualizar(avaliacao_id, changes, expected_version)


@router.delete("/{avaliacao_id}", status_code=204)
def delete_avaliacao(avaliacao_id: str, services: Services = Depends(get_services)):
    services.avaliacoes.excluir(avaliacao_id)
    return Response(status_code=204)
